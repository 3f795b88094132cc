"""
Tests for structural identity, the graph model and the graph builder.
"""

import pytest

from cyclomatic.analysis.graph import Edge, Graph, ROOT_SENTINEL
from cyclomatic.analysis.graph_builder import GraphBuilder, build_graph
from cyclomatic.analysis.identity import NodeIdentity, identity
from cyclomatic.parsing.syntax import UseTree, use_tree


class TestNodeIdentity:
    """Tests for structural hashing."""

    def test_identity_is_deterministic(self, parse):
        """Hashing the same subtree twice gives the same id."""
        parsed = parse("fn f() { x = 1; }")
        hasher = NodeIdentity()
        assert hasher(parsed.root) == hasher(parsed.root)
        assert hasher(parsed.root) == identity(parse("fn f() { x = 1; }").root)

    def test_identity_fits_in_64_bits(self, parse):
        """Ids are unsigned 64-bit integers."""
        value = identity(parse("use a::b;").root)
        assert 0 <= value < 2 ** 64

    def test_different_content_differs(self, parse):
        """Textually different subtrees hash differently."""
        assert identity(parse("fn f() {}").root) != identity(parse("fn g() {}").root)
        assert identity(parse("use a;").root) != identity(parse("use a::b;").root)

    def test_identical_subtrees_share_identity(self, parse):
        """Identical bodies in different places collide by design."""
        parsed = parse("fn f() { x = 1; }\nfn g() { x = 1; }")
        f, g = parsed.root.named_children
        hasher = NodeIdentity()
        assert hasher(f) != hasher(g)
        assert hasher(f.child_by_field_name("body")) == hasher(g.child_by_field_name("body"))

    def test_comments_are_ignored(self, parse):
        """Comments do not change a subtree's identity."""
        plain = parse("fn f() { x = 1; }").root.named_children[0]
        commented = parse("fn f() { /* reset */ x = 1; // done\n}").root.named_children[0]
        assert identity(plain) == identity(commented)

    def test_use_trees_hash_by_content(self):
        """Normalized use paths hash like any other subtree."""
        first = UseTree("use_name", "a")
        second = UseTree("use_name", "a")
        other = UseTree("use_name", "b")
        assert identity(first) == identity(second)
        assert identity(first) != identity(other)

    def test_deep_nesting_does_not_recurse(self, parse):
        """Hashing walks an explicit stack, not the interpreter stack."""
        depth = 2000
        parsed = parse("fn f() " + "{" * depth + "}" * depth)
        assert isinstance(identity(parsed.root), int)


class TestGraphModel:
    """Tests for the graph model."""

    def test_register_vertex_reports_novelty(self):
        """A vertex is new only the first time it is registered."""
        graph = Graph()
        assert graph.register_vertex(7) is True
        assert graph.register_vertex(7) is False
        assert graph.node_count == 1

    def test_edges_are_a_multigraph(self):
        """Repeated edges between the same pair are all counted."""
        graph = Graph()
        graph.add_edge(1, 2)
        graph.add_edge(1, 2)
        assert graph.edge_count == 2
        assert graph.edges == [Edge(1, 2), Edge(1, 2)]

    def test_root_is_a_vertex_but_not_an_edge(self):
        """The file root is counted; its link to the sentinel is not."""
        graph = Graph()
        graph.set_root(42)
        assert graph.root == 42
        assert graph.node_count == 1
        assert graph.edge_count == 0
        assert ROOT_SENTINEL not in graph.vertices

    def test_complexity_formula(self):
        """Complexity is E - N + 2P."""
        graph = Graph()
        for vertex in (1, 2, 3):
            graph.register_vertex(vertex)
        graph.add_edge(1, 2)
        graph.add_edge(1, 3)
        graph.add_edge(2, 3)
        graph.connected_components = 1
        assert graph.complexity() == 3 - 3 + 2

    def test_complexity_is_not_clamped(self):
        """An empty graph with a root yields a negative metric."""
        graph = Graph()
        graph.set_root(1)
        assert graph.complexity() == -1

    def test_repr_shows_counts(self):
        """The debug form lists components, nodes and edges."""
        graph = Graph()
        graph.set_root(1)
        assert repr(graph) == "Graph(connected_components=0, nodes=1, edges=0)"


class TestGraphBuilder:
    """Tests for building graphs from Rust source."""

    @staticmethod
    def counts(graph):
        return graph.connected_components, graph.node_count, graph.edge_count

    def test_empty_file(self, parse):
        """A file without items has only its root vertex."""
        graph = build_graph(parse(""))
        assert self.counts(graph) == (0, 1, 0)
        assert graph.complexity() == -1

    @pytest.mark.parametrize(
        "code, nodes, edges",
        [
            ("use a;", 2, 1),
            ("use a::b;", 3, 2),
            ("use a::b::c;", 4, 3),
            ("use a::b::c::d;", 5, 4),
        ],
    )
    def test_use_paths_form_a_chain(self, parse, code, nodes, edges):
        """Each `::` segment adds exactly one node and one edge."""
        graph = build_graph(parse(code))
        assert self.counts(graph) == (1, nodes, edges)
        assert graph.complexity() == 1

    def test_independent_uses_add_up(self, parse):
        """Two use statements are two components sharing only the file root."""
        graph = build_graph(parse("use a;\nuse a::b;"))
        assert self.counts(graph) == (2, 4, 3)
        assert graph.complexity() == 3 - 4 + 4

    def test_repeated_item_adds_edge_but_no_node(self, parse):
        """Identical items are counted as traversed again, not as new vertices."""
        graph = build_graph(parse("use a;\nuse a;"))
        assert self.counts(graph) == (2, 2, 2)

    def test_use_group(self, parse):
        """A brace group branches the import chain."""
        graph = build_graph(parse("use a::{b, c};"))
        # file, path(a), group, name(b), name(c)
        assert self.counts(graph) == (1, 5, 4)

    def test_empty_function(self, parse):
        """A function contributes itself and its body block."""
        graph = build_graph(parse("fn f() {}"))
        assert self.counts(graph) == (1, 3, 2)
        assert graph.complexity() == 1

    def test_if_else_adds_a_path(self, parse):
        """Both branches of an `if` lead to the same empty block."""
        graph = build_graph(parse("fn f(a: bool) { if a { } else { } }"))
        # file, f, body, if, condition, shared empty block
        assert self.counts(graph) == (1, 6, 6)
        assert graph.complexity() == 2

    def test_shared_body_is_expanded_once(self, parse):
        """A body seen before gets its edge but is not walked again."""
        graph = build_graph(parse("fn f() { x = 1; }\nfn g() { x = 1; }"))
        # f: f, body, assignment, x, 1; g: g (body shared)
        assert self.counts(graph) == (2, 7, 7)

    def test_const_value_is_expanded(self, parse):
        """Constants are walked through their value expression."""
        graph = build_graph(parse("const X: [i32; 2] = [1, 2];"))
        # file, const, array, 1, 2
        assert self.counts(graph) == (1, 5, 4)

    def test_struct_is_a_leaf(self, parse):
        """Type definitions contribute only their own vertex."""
        graph = build_graph(parse("struct S { a: i32, b: i32 }"))
        assert self.counts(graph) == (1, 2, 1)

    def test_inline_module_items_are_walked(self, parse):
        """Items of an inline module hang off the module vertex."""
        graph = build_graph(parse("mod m { use a; }"))
        assert self.counts(graph) == (1, 3, 2)

    def test_module_declaration_is_a_leaf(self, parse):
        """An out-of-line module has nothing to walk."""
        graph = build_graph(parse("mod m;"))
        assert self.counts(graph) == (1, 2, 1)

    def test_impl_methods_are_walked(self, parse):
        """Impl blocks expand into their methods and bodies."""
        graph = build_graph(parse("impl S { fn f() {} }"))
        assert self.counts(graph) == (1, 4, 3)

    def test_unsupported_expression_is_a_leaf(self, parse):
        """Loops end the walk without raising."""
        graph = build_graph(parse("fn f() { loop { if x { } } }"))
        # file, f, body, loop
        assert self.counts(graph) == (1, 4, 3)

    def test_nested_module_items_are_not_components(self, parse):
        """Only top-level items count as components."""
        graph = build_graph(parse("mod m { fn a() {} fn b() {} }"))
        assert graph.connected_components == 1

    def test_attributes_and_comments_are_not_items(self, parse):
        """Attributes and comments do not start components."""
        graph = build_graph(parse("// note\n#[derive(Debug)]\nstruct S;\n"))
        assert graph.connected_components == 1

    def test_rebuild_is_idempotent(self, parse):
        """Building twice from the same syntax yields the same counts."""
        parsed = parse("use a::b;\nfn f(a: bool) { if a { x = [1]; } }\nimpl S { fn g() {} }")
        first = GraphBuilder().build(parsed)
        second = GraphBuilder().build(parsed.root)
        assert self.counts(first) == self.counts(second)
        assert first.complexity() == second.complexity()

    def test_builder_can_be_reused(self, parse):
        """Each build starts from an empty graph."""
        builder = GraphBuilder()
        parsed = parse("use a::b;")
        assert self.counts(builder.build(parsed)) == (1, 3, 2)
        assert self.counts(builder.build(parsed)) == (1, 3, 2)

        builder.build(parse("fn f() { if a { } }"))
        assert self.counts(builder.build(parse("use x;"))) == self.counts(build_graph(parse("use x;")))
        assert self.counts(builder.graph) == (1, 2, 1)

    def test_extern_crate(self, parse):
        """A renamed crate adds its name and alias."""
        assert self.counts(build_graph(parse("extern crate foo;"))) == (1, 2, 1)
        graph = build_graph(parse("extern crate foo as bar;"))
        assert self.counts(graph) == (1, 4, 3)
        assert graph.complexity() == 1

    def test_edges_join_registered_vertices(self, parse):
        """Every counted edge joins two registered vertices."""
        graph = build_graph(parse("use a::{b, c::d};\nfn f() { if a { } else if b { } }"))
        for edge in graph.edges:
            assert edge.parent in graph.vertices
            assert edge.child in graph.vertices

    def test_deep_nesting_does_not_recurse(self, parse):
        """The walk uses an explicit stack."""
        depth = 2000
        graph = build_graph(parse("fn f() " + "{" * depth + "}" * depth))
        # file, f, one vertex per block
        assert graph.node_count == depth + 2


class TestUseTree:
    """Tests for use path normalization."""

    def test_simple_name(self, parse):
        tree = use_tree(parse("use a;").root.named_children[0])
        assert tree == UseTree("use_name", "a")

    def test_scoped_path(self, parse):
        tree = use_tree(parse("use a::b;").root.named_children[0])
        assert tree.type == "use_path"
        assert tree.name == "a"
        assert tree.branches == (UseTree("use_name", "b"),)

    def test_group_and_rename(self, parse):
        tree = use_tree(parse("use a::b::{c, d as e};").root.named_children[0])
        assert [tree.name, tree.branches[0].name] == ["a", "b"]
        group = tree.branches[0].branches[0]
        assert group.type == "use_group"
        assert [entry.type for entry in group.branches] == ["use_name", "use_rename"]
        assert group.branches[1].branches == ()

    def test_glob(self, parse):
        tree = use_tree(parse("use std::io::*;").root.named_children[0])
        assert tree.branches[0].branches == (UseTree("use_glob", "*"),)

    def test_rename_of_path(self, parse):
        tree = use_tree(parse("use std::io as sio;").root.named_children[0])
        assert tree.name == "std"
        rename = tree.branches[0]
        assert rename.type == "use_rename"
        assert rename.text == b"io"

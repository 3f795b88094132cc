"""
Rust syntax helpers shared by the graph builder and the complexity tree.

The walkers only understand a closed set of item kinds and a small set of
expression forms; everything else is handed back as an opaque leaf.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from tree_sitter import Node


class ItemKind(Enum):
    EXTERN_CRATE = "ExternCrate"
    USE = "Use"
    STATIC = "Static"
    CONST = "Const"
    FN = "Fn"
    MOD = "Mod"
    FOREIGN_MOD = "ForeignMod"
    TYPE = "Type"
    STRUCT = "Struct"
    ENUM = "Enum"
    UNION = "Union"
    TRAIT = "Trait"
    IMPL = "Impl"
    MACRO = "Macro"
    OTHER = "Other"


ITEM_KINDS: Dict[str, ItemKind] = {
    "extern_crate_declaration": ItemKind.EXTERN_CRATE,
    "use_declaration": ItemKind.USE,
    "static_item": ItemKind.STATIC,
    "const_item": ItemKind.CONST,
    "function_item": ItemKind.FN,
    "mod_item": ItemKind.MOD,
    "foreign_mod_item": ItemKind.FOREIGN_MOD,
    "type_item": ItemKind.TYPE,
    "struct_item": ItemKind.STRUCT,
    "enum_item": ItemKind.ENUM,
    "union_item": ItemKind.UNION,
    "trait_item": ItemKind.TRAIT,
    "impl_item": ItemKind.IMPL,
    "macro_invocation": ItemKind.MACRO,
    "macro_definition": ItemKind.MACRO,
}

# Siblings of items that are not items themselves.
NON_ITEM_TYPES = {
    "attribute_item",
    "inner_attribute_item",
    "shebang",
    "empty_statement",
}


def classify_item(node) -> ItemKind:
    return ITEM_KINDS.get(node.type, ItemKind.OTHER)


def syntax_children(node) -> List[Node]:
    """Named children without comments and other extras."""
    return [child for child in node.named_children if not child.is_extra]


def top_level_items(root) -> List[Node]:
    return [child for child in syntax_children(root) if child.type not in NON_ITEM_TYPES]


def nested_items(item) -> List[Node]:
    """Items declared inside an inline `mod` or an `extern` block."""
    body = item.child_by_field_name("body")
    if body is None:
        return []
    return top_level_items(body)


def impl_methods(impl) -> List[Node]:
    return [item for item in nested_items(impl) if item.type == "function_item"]


def block_statements(block) -> List[Node]:
    """Statements of a block; `expr;` statements are unwrapped to `expr`."""
    statements = []
    for child in syntax_children(block):
        if child.type in NON_ITEM_TYPES or child.type == "label":
            continue
        if child.type == "expression_statement":
            inner = syntax_children(child)
            if inner:
                statements.append(inner[0])
            continue
        statements.append(child)
    return statements


def else_target(if_node) -> Optional[Node]:
    """The block or `if` expression following `else`, if any."""
    alternative = if_node.child_by_field_name("alternative")
    if alternative is None:
        return None
    children = syntax_children(alternative)
    return children[0] if children else None


def if_branches(if_node) -> List[Node]:
    branches = [if_node.child_by_field_name("consequence"), else_target(if_node)]
    return [branch for branch in branches if branch is not None]


def _fields(*names: str) -> Callable[[Node], List[Node]]:
    def children(node) -> List[Node]:
        found = (node.child_by_field_name(name) for name in names)
        return [child for child in found if child is not None]

    return children


def _array_elements(node) -> List[Node]:
    return [child for child in syntax_children(node) if child.type != "attribute_item"]


def _break_value(node) -> List[Node]:
    return [child for child in syntax_children(node) if child.type != "label"]


def _if_parts(node) -> List[Node]:
    return _fields("condition")(node) + if_branches(node)


# Expression forms the walkers look inside of, keyed by node type. Every
# other expression terminates the walk.
EXPANDED_EXPRESSIONS: Dict[str, Callable[[Node], List[Node]]] = {
    "array_expression": _array_elements,
    "assignment_expression": _fields("left", "right"),
    "compound_assignment_expr": _fields("left", "right"),
    "block": block_statements,
    "break_expression": _break_value,
    "if_expression": _if_parts,
}


def expression_children(node) -> List[Node]:
    expand = EXPANDED_EXPRESSIONS.get(node.type)
    if expand is None:
        return []
    return expand(node)


@dataclass(frozen=True)
class UseTree:
    """
    A `use` path normalized into a right-nested chain.

    `use a::b::{c, d as e};` becomes
    path(a) -> path(b) -> group(name(c), rename(d, e)), one record per
    segment, so every `::` step is its own vertex. Records expose the same
    `type`/`text`/`children` surface as syntax nodes.
    """

    type: str
    name: str = ""
    children: Tuple["UseTree", ...] = ()
    is_extra = False

    @property
    def text(self) -> bytes:
        return self.name.encode("utf-8")

    @property
    def branches(self) -> Tuple["UseTree", ...]:
        """Subtrees that continue the import path."""
        if self.type == "use_path":
            return self.children[1:]
        if self.type == "use_group":
            return self.children
        return ()


def _segment(name: str) -> UseTree:
    return UseTree("identifier", name)


def _path_segments(node) -> List[str]:
    segments: List[str] = []
    while node is not None and node.type == "scoped_identifier":
        segments.append(node.child_by_field_name("name").text.decode("utf-8"))
        node = node.child_by_field_name("path")
    if node is not None:
        segments.append(node.text.decode("utf-8"))
    return list(reversed(segments))


def _with_prefix(path, tail: UseTree) -> UseTree:
    for segment in reversed(_path_segments(path)):
        tail = UseTree("use_path", segment, (_segment(segment), tail))
    return tail


def _wildcard_path(node) -> Optional[Node]:
    children = syntax_children(node)
    return children[0] if children else None


def use_tree(node) -> UseTree:
    """Normalize the argument of a `use` declaration."""
    kind = node.type
    if kind == "use_declaration":
        return use_tree(node.child_by_field_name("argument"))
    if kind == "scoped_identifier":
        name = node.child_by_field_name("name").text.decode("utf-8")
        return _with_prefix(node.child_by_field_name("path"), UseTree("use_name", name))
    if kind == "use_as_clause":
        segments = _path_segments(node.child_by_field_name("path"))
        alias = node.child_by_field_name("alias").text.decode("utf-8")
        rename = UseTree("use_rename", segments[-1], (_segment(segments[-1]), _segment(alias)))
        for segment in reversed(segments[:-1]):
            rename = UseTree("use_path", segment, (_segment(segment), rename))
        return rename
    if kind == "use_wildcard":
        return _with_prefix(_wildcard_path(node), UseTree("use_glob", "*"))
    if kind == "scoped_use_list":
        group = use_tree(node.child_by_field_name("list"))
        return _with_prefix(node.child_by_field_name("path"), group)
    if kind == "use_list":
        return UseTree("use_group", children=tuple(use_tree(child) for child in syntax_children(node)))
    return UseTree("use_name", node.text.decode("utf-8"))

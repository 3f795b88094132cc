"""
Build the structural graph of a Rust file.

Each visited subtree becomes a vertex keyed by its structural identity and
every parent/child link walked becomes an edge. A subtree whose identity was
already seen still gets its edge, but is not expanded a second time.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Tuple, Union

from tree_sitter import Node

from cyclomatic.analysis.graph import Graph
from cyclomatic.analysis.identity import NodeIdentity
from cyclomatic.parsing.syntax import (
    ItemKind,
    UseTree,
    classify_item,
    expression_children,
    impl_methods,
    nested_items,
    top_level_items,
    use_tree,
)
from cyclomatic.parsing.treesitter import ParsedFile


logger = logging.getLogger(__name__)

Visit = Callable[[object], Iterable[Tuple[object, "Visit"]]]


class GraphBuilder:
    def __init__(self) -> None:
        self.graph = Graph()
        self.identity = NodeIdentity()
        self._item_visitors: Dict[ItemKind, Visit] = {
            ItemKind.EXTERN_CRATE: self._visit_extern_crate,
            ItemKind.USE: self._visit_use,
            ItemKind.STATIC: self._visit_value,
            ItemKind.CONST: self._visit_value,
            ItemKind.FN: self._visit_fn,
            ItemKind.MOD: self._visit_nested_items,
            ItemKind.FOREIGN_MOD: self._visit_nested_items,
            ItemKind.TYPE: self._leaf,
            ItemKind.STRUCT: self._leaf,
            ItemKind.ENUM: self._leaf,
            ItemKind.UNION: self._leaf,
            ItemKind.TRAIT: self._leaf,
            ItemKind.IMPL: self._visit_impl,
            ItemKind.MACRO: self._leaf,
            ItemKind.OTHER: self._leaf,
        }

    def build(self, source: Union[ParsedFile, Node]) -> Graph:
        root = source.root if isinstance(source, ParsedFile) else source
        # Node ids are only stable within one tree.
        self.graph = Graph()
        self.identity = NodeIdentity()
        file_id = self.identity(root)
        self.graph.set_root(file_id)

        items = top_level_items(root)
        self.graph.connected_components = len(items)

        stack: List[Tuple[int, object, Visit]] = []
        for item in reversed(items):
            stack.append((file_id, *self._item_entry(item)))

        while stack:
            parent, node, visit = stack.pop()
            vertex = self.identity(node)
            self.graph.add_edge(parent, vertex)
            if not self.graph.register_vertex(vertex):
                continue
            children = list(visit(node))
            for child, child_visit in reversed(children):
                stack.append((vertex, child, child_visit))

        logger.debug("built %r", self.graph)
        return self.graph

    def _item_entry(self, item) -> Tuple[object, Visit]:
        # A `use` declaration is represented by its import path.
        if classify_item(item) is ItemKind.USE:
            return use_tree(item), self._visit_use
        return item, self._visit_item

    def _visit_item(self, item) -> Iterable[Tuple[object, Visit]]:
        return self._item_visitors[classify_item(item)](item)

    def _leaf(self, node) -> Iterable[Tuple[object, Visit]]:
        return ()

    def _visit_extern_crate(self, item) -> Iterable[Tuple[object, Visit]]:
        alias = item.child_by_field_name("alias")
        if alias is None:
            return ()
        return [(item.child_by_field_name("name"), self._leaf), (alias, self._leaf)]

    def _visit_use(self, tree: UseTree) -> Iterable[Tuple[object, Visit]]:
        return [(branch, self._visit_use) for branch in tree.branches]

    def _visit_value(self, item) -> Iterable[Tuple[object, Visit]]:
        value = item.child_by_field_name("value")
        if value is None:
            return ()
        return [(value, self._visit_expression)]

    def _visit_fn(self, item) -> Iterable[Tuple[object, Visit]]:
        body = item.child_by_field_name("body")
        if body is None:
            return ()
        return [(body, self._visit_expression)]

    def _visit_nested_items(self, item) -> Iterable[Tuple[object, Visit]]:
        return [self._item_entry(child) for child in nested_items(item)]

    def _visit_impl(self, item) -> Iterable[Tuple[object, Visit]]:
        return [(method, self._visit_fn) for method in impl_methods(item)]

    def _visit_expression(self, node) -> Iterable[Tuple[object, Visit]]:
        return [(child, self._visit_expression) for child in expression_children(node)]


def build_graph(source: Union[ParsedFile, Node]) -> Graph:
    return GraphBuilder().build(source)

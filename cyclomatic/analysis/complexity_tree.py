"""
Per-symbol complexity tree.

The tree mirrors the file layout: File -> Fn, File -> Impl -> Method. Only
the Fn and Method leaves carry a decision-point count; File and Impl nodes
group them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union

from tree_sitter import Node

from cyclomatic.analysis.decision_points import count_decision_points
from cyclomatic.core.errors import NameResolutionError
from cyclomatic.parsing.syntax import ItemKind, classify_item, impl_methods, top_level_items
from cyclomatic.parsing.treesitter import ParsedFile


logger = logging.getLogger(__name__)

# Self types whose own text is the impl name.
NAMED_TYPES = {"type_identifier", "primitive_type", "identifier", "self", "crate", "super"}


class ComplexityKind(Enum):
    FILE = "File"
    IMPL = "Impl"
    FN = "Fn"
    METHOD = "Method"

    def __str__(self) -> str:
        return self.value


@dataclass
class ComplexityNode:
    name: str
    kind: ComplexityKind
    complexity: int = 0
    children: List["ComplexityNode"] = field(default_factory=list)

    def add_child(self, child: "ComplexityNode") -> None:
        self.children.append(child)

    @property
    def label(self) -> str:
        return f"{self.kind}: {self.name}"

    @property
    def mccabe(self) -> int:
        """Decision points plus the single entry path."""
        return self.complexity + 1

    @property
    def total_complexity(self) -> int:
        return sum(leaf.complexity for leaf in self.leaves())

    def leaves(self) -> Iterator["ComplexityNode"]:
        stack = [self]
        while stack:
            node = stack.pop()
            if not node.children:
                yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "kind": self.kind.value,
            "complexity": self.complexity,
        }
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def _leading_identifier(type_node) -> Optional[str]:
    node = type_node
    while node is not None:
        if node.type in NAMED_TYPES:
            return node.text.decode("utf-8")
        if node.type == "generic_type":
            node = node.child_by_field_name("type")
        elif node.type in ("scoped_type_identifier", "scoped_identifier"):
            node = node.child_by_field_name("path") or node.child_by_field_name("name")
        else:
            return None
    return None


def impl_name(impl, path: str = "<string>") -> str:
    """First path segment of the type an impl block is for."""
    self_type = impl.child_by_field_name("type")
    name = _leading_identifier(self_type)
    if name is None:
        type_text = self_type.text.decode("utf-8") if self_type is not None else ""
        raise NameResolutionError(path, impl.start_point[0] + 1, type_text)
    return name


def _function_name(item) -> str:
    return item.child_by_field_name("name").text.decode("utf-8")


def _symbol(item, kind: ComplexityKind) -> ComplexityNode:
    return ComplexityNode(
        name=_function_name(item),
        kind=kind,
        complexity=count_decision_points(item.child_by_field_name("body")),
    )


def generate(source: Union[ParsedFile, Node], file_label: str) -> ComplexityNode:
    """Build the complexity tree of one file."""
    root = source.root if isinstance(source, ParsedFile) else source
    path = source.path if isinstance(source, ParsedFile) else file_label
    tree = ComplexityNode(file_label, ComplexityKind.FILE)
    for item in top_level_items(root):
        kind = classify_item(item)
        if kind is ItemKind.FN:
            tree.add_child(_symbol(item, ComplexityKind.FN))
        elif kind is ItemKind.IMPL:
            node = ComplexityNode(impl_name(item, path), ComplexityKind.IMPL)
            for method in impl_methods(item):
                node.add_child(_symbol(method, ComplexityKind.METHOD))
            tree.add_child(node)
        # TODO: descend into inline `mod` and `trait` default methods
    logger.debug("%s: %d symbols", file_label, sum(1 for leaf in tree.leaves() if leaf is not tree))
    return tree

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional, Union

import tree_sitter_rust
from tree_sitter import Language, Node, Parser, Tree

from cyclomatic.core.errors import ParseFailure


logger = logging.getLogger(__name__)


@lru_cache
def _get_language() -> Language:
    return Language(tree_sitter_rust.language())


@lru_cache
def _get_parser() -> Parser:
    return Parser(_get_language())


@dataclass(frozen=True)
class ParsedFile:
    path: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def text(self) -> str:
        return self.source.decode("utf-8", errors="replace")


def parse_source(source: Union[str, bytes], path: str = "<string>") -> ParsedFile:
    """Parse Rust source text, raising ParseFailure if the grammar rejects it."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = _get_parser().parse(source)
    parsed = ParsedFile(path=path, source=source, tree=tree)
    if tree.root_node.has_error:
        raise _parse_failure(parsed)
    return parsed


def parse_file(path: str) -> ParsedFile:
    logger.info("processing path: %s", path)
    return parse_source(Path(path).read_bytes(), path=path)


def iter_nodes(node) -> Iterable[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(parsed: ParsedFile, node) -> str:
    return parsed.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _first_error(node) -> Optional[Node]:
    for current in iter_nodes(node):
        if current.is_error or current.is_missing:
            return current
    return None


def _parse_failure(parsed: ParsedFile) -> ParseFailure:
    bad = _first_error(parsed.root)
    if bad is None:
        return ParseFailure(parsed.path)
    line = bad.start_point[0] + 1
    column = bad.start_point[1] + 1
    if bad.is_missing:
        message = f"expected {bad.type!r}"
    else:
        snippet = node_text(parsed, bad).strip().splitlines()
        message = f"unexpected {snippet[0]!r}" if snippet else "syntax error"
    return ParseFailure(parsed.path, line, column, message)

"""
Structural identity for syntax subtrees.

Two subtrees with the same shape and the same tokens get the same 64-bit
id, wherever they appear in the file. Ids are stable within one process run
only.
"""

from __future__ import annotations

import hashlib
from typing import Dict, Hashable, List


DIGEST_SIZE = 8


def _structural_children(node) -> List[object]:
    return [child for child in node.children if not getattr(child, "is_extra", False)]


def _cache_key(node) -> Hashable:
    # tree-sitter nodes are re-created on every access; their id is not.
    node_id = getattr(node, "id", None)
    if isinstance(node_id, int):
        return node_id
    return node


class NodeIdentity:
    """
    Memoizing structural hasher.

    One instance must only be used with a single syntax tree, since cached
    entries are keyed by the tree-sitter node id.
    """

    def __init__(self) -> None:
        self._cache: Dict[Hashable, int] = {}

    def __call__(self, node) -> int:
        return self.identity(node)

    def identity(self, node) -> int:
        key = _cache_key(node)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        stack = [(node, False)]
        while stack:
            current, ready = stack.pop()
            current_key = _cache_key(current)
            if current_key in self._cache:
                continue
            children = _structural_children(current)
            if not ready:
                stack.append((current, True))
                stack.extend((child, False) for child in reversed(children))
                continue
            self._cache[current_key] = self._digest(current, children)
        return self._cache[key]

    def _digest(self, node, children: List[object]) -> int:
        digest = hashlib.blake2b(digest_size=DIGEST_SIZE)
        digest.update(node.type.encode("utf-8"))
        if not children:
            digest.update(b"\x00")
            digest.update(node.text or b"")
        for child in children:
            digest.update(self._cache[_cache_key(child)].to_bytes(DIGEST_SIZE, "big"))
        return int.from_bytes(digest.digest(), "big")


def identity(node) -> int:
    """One-off structural hash of a subtree."""
    return NodeIdentity().identity(node)

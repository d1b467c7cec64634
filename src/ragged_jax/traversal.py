"""Depth-first traversal and population counting."""

from __future__ import annotations

from collections.abc import Iterator

from .shape import RaggedArray
from .values import Branch, Leaf, Node


def _walk(node: Node, prefix: tuple[int, ...]) -> Iterator[tuple[tuple[int, ...], Leaf]]:
    if isinstance(node, Leaf):
        yield prefix, node
        return
    for idx, child in enumerate(node.children):
        yield from _walk(child, prefix + (idx,))


def iter_leaves(structure: RaggedArray) -> Iterator[tuple[tuple[int, ...], Leaf]]:
    """Yield `(path, leaf)` in natural enumeration order (level 0 most significant)."""
    yield from _walk(structure.root, ())


def _count(node: Node) -> int:
    if isinstance(node, Leaf):
        return 1 if node.marker is not None else 0
    if node.children and isinstance(node.children[0], Leaf):
        return sum(1 for leaf in node.children if leaf.marker is not None)
    return sum(_count(child) for child in node.children)


def count_populated(structure: RaggedArray) -> int:
    """Number of non-empty leaves; never mutates."""
    return _count(structure.root)


def populated_markers(structure: RaggedArray) -> list[int]:
    return [leaf.marker.id for _, leaf in iter_leaves(structure) if leaf.marker is not None]


def clear(structure: RaggedArray) -> int:
    """Empty every leaf; returns how many were populated."""
    cleared = 0
    for _, leaf in iter_leaves(structure):
        if leaf.marker is not None:
            leaf.marker = None
            cleared += 1
    return cleared


def leaves_of(node: Node) -> int:
    if isinstance(node, Branch):
        return sum(leaves_of(child) for child in node.children)
    return 1

"""Node model for nested ragged structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class Marker:
    """Populated-leaf marker: the address id of the write that placed it."""

    id: int


@dataclass(eq=False)
class Leaf:
    """Innermost slot. `marker is None` means empty."""

    marker: Marker | None = None

    @property
    def populated(self) -> bool:
        return self.marker is not None


@dataclass(eq=False)
class Branch:
    """Ordered children of one level; all Leaf or all Branch."""

    children: list[Node] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.children)

    def __getitem__(self, index: int) -> Node:
        return self.children[index]


Node = Union[Leaf, Branch]


class NodeKind(str, Enum):
    LEAF = "leaf"
    LEAF_ARRAY = "leaf_array"
    BRANCH = "branch"


@dataclass(frozen=True)
class NodeInfo:
    kind: NodeKind
    shape: tuple[int, ...]
    depth: int
    leaf_count: int


def is_leaf_array(node: Node) -> bool:
    return isinstance(node, Branch) and bool(node.children) and isinstance(node.children[0], Leaf)


def kind_of(node: Node) -> NodeKind:
    if isinstance(node, Leaf):
        return NodeKind.LEAF
    if is_leaf_array(node):
        return NodeKind.LEAF_ARRAY
    return NodeKind.BRANCH


def shape_of(node: Node) -> tuple[int, ...]:
    # Siblings share a level's size, so the first child chain is representative.
    dims: list[int] = []
    cursor = node
    while isinstance(cursor, Branch):
        dims.append(len(cursor))
        if not cursor.children:
            break
        cursor = cursor.children[0]
    return tuple(dims)


def depth_of(node: Node) -> int:
    return len(shape_of(node))


def leaf_count_of(node: Node) -> int:
    if isinstance(node, Leaf):
        return 1
    count = 1
    for size in shape_of(node):
        count *= size
    return count


def node_info(node: Node) -> NodeInfo:
    shape = shape_of(node)
    return NodeInfo(kind=kind_of(node), shape=shape, depth=len(shape), leaf_count=leaf_count_of(node))


def validate_node(node: object, *, where: str = "node") -> None:
    """Reject anything that is not a well-formed Leaf/Branch tree."""
    if isinstance(node, Leaf):
        if node.marker is not None and not isinstance(node.marker, Marker):
            raise TypeError(f"{where} holds unsupported marker type {type(node.marker).__name__}")
        return
    if not isinstance(node, Branch):
        raise TypeError(f"{where} has unsupported node type {type(node).__name__}")
    kinds = {type(child) for child in node.children}
    if len(kinds) > 1:
        raise TypeError(f"{where} mixes leaf and branch children")
    for idx, child in enumerate(node.children):
        validate_node(child, where=f"{where}[{idx}]")

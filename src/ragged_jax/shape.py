"""Dimension specs and the nested-structure builder."""

from __future__ import annotations

import logging
import numbers
import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from .errors import InvalidShapeError, ShapeMismatchError
from .values import Branch, Leaf, shape_of, validate_node

logger = logging.getLogger(__name__)

MAX_LEAVES: Final[int] = max(1, int(os.environ.get("RAGGED_JAX_MAX_LEAVES", str(1 << 24))))


@dataclass(frozen=True)
class DimensionSpec:
    """Per-level sizes, level 0 outermost.

    Sizes may differ from level to level; siblings on one level always share
    that level's size.
    """

    sizes: tuple[int, ...]

    def __post_init__(self) -> None:
        try:
            sizes = tuple(self.sizes)
        except TypeError:
            raise InvalidShapeError(f"dimension spec must be a sequence of sizes, got {type(self.sizes).__name__}") from None
        if not sizes:
            raise InvalidShapeError("dimension spec needs at least one level", sizes)
        for level, size in enumerate(sizes):
            if isinstance(size, bool) or not isinstance(size, numbers.Integral):
                raise InvalidShapeError(f"level {level} size must be an integer, got {type(size).__name__}", sizes)
            if size < 1:
                raise InvalidShapeError(f"level {level} size must be positive, got {size}", sizes)
        object.__setattr__(self, "sizes", tuple(int(size) for size in sizes))

    @classmethod
    def of(cls, sizes: DimensionSpec | Iterable[int]) -> DimensionSpec:
        if isinstance(sizes, DimensionSpec):
            return sizes
        return cls(sizes)

    @classmethod
    def uniform(cls, size: int, depth: int) -> DimensionSpec:
        return cls((size,) * depth)

    @property
    def depth(self) -> int:
        return len(self.sizes)

    @property
    def leaf_count(self) -> int:
        count = 1
        for size in self.sizes:
            count *= size
        return count

    @property
    def strides(self) -> tuple[int, ...]:
        """Mixed-radix place value of each level; level 0 is the least significant digit."""
        out: list[int] = []
        place = 1
        for size in self.sizes:
            out.append(place)
            place *= size
        return tuple(out)

    def __len__(self) -> int:
        return len(self.sizes)

    def __iter__(self):
        return iter(self.sizes)


class RaggedArray:
    """Exclusively owned nested structure; leaves are mutated in place."""

    __slots__ = ("spec", "root")

    def __init__(self, spec: DimensionSpec, root: Branch) -> None:
        self.spec = spec
        self.root = root

    @property
    def leaf_count(self) -> int:
        return self.spec.leaf_count

    @property
    def shape(self) -> tuple[int, ...]:
        return shape_of(self.root)

    @property
    def depth(self) -> int:
        return self.spec.depth

    @classmethod
    def from_root(cls, root: Branch) -> RaggedArray:
        """Adopt a caller-built tree after checking it is well formed and uniform per level."""
        validate_node(root, where="root")
        if not isinstance(root, Branch):
            raise TypeError(f"root must be a Branch, got {type(root).__name__}")
        spec = DimensionSpec(shape_of(root))
        _check_uniform(root, spec.sizes, 0)
        check_leaf_budget(spec)
        return cls(spec, root)

    def __repr__(self) -> str:
        return f"RaggedArray(sizes={list(self.spec.sizes)})"


def check_leaf_budget(spec: DimensionSpec) -> None:
    if spec.leaf_count > MAX_LEAVES:
        raise InvalidShapeError(
            f"leaf count {spec.leaf_count} exceeds RAGGED_JAX_MAX_LEAVES={MAX_LEAVES}",
            spec.sizes,
        )


def _check_uniform(node: Branch, sizes: tuple[int, ...], level: int) -> None:
    if len(node) != sizes[level]:
        raise ShapeMismatchError(f"level {level} array has {len(node)} entries, expected {sizes[level]}")
    leaf_level = level == len(sizes) - 1
    for child in node.children:
        if isinstance(child, Leaf) != leaf_level:
            raise ShapeMismatchError(f"level {level} mixes leaf depths")
        if not leaf_level:
            _check_uniform(child, sizes, level + 1)


def _build_level(sizes: tuple[int, ...], level: int) -> Branch:
    size = sizes[level]
    if level == len(sizes) - 1:
        return Branch([Leaf() for _ in range(size)])
    return Branch([_build_level(sizes, level + 1) for _ in range(size)])


def build(sizes: DimensionSpec | Iterable[int]) -> RaggedArray:
    """Allocate a nested structure with every leaf empty."""
    spec = DimensionSpec.of(sizes)
    check_leaf_budget(spec)
    root = _build_level(spec.sizes, 0)
    logger.debug("built ragged structure sizes=%s leaves=%d", list(spec.sizes), spec.leaf_count)
    return RaggedArray(spec, root)

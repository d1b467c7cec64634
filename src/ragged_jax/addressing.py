"""Flat-index addressing by mixed-radix descent.

The descent never consults a stored depth: at every step it looks at the
child it just selected and keeps going while that child is a `Branch`.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Sequence

from .errors import ShapeMismatchError
from .shape import DimensionSpec, RaggedArray
from .values import Branch, Leaf, Marker


def check_raw_index(raw_index: object, *, where: str = "raw index") -> int:
    if isinstance(raw_index, bool) or not isinstance(raw_index, numbers.Integral):
        raise TypeError(f"{where} must be an integer, got {type(raw_index).__name__}")
    if raw_index < 0:
        raise ValueError(f"{where} must be non-negative, got {raw_index}")
    return int(raw_index)


def check_modulus(modulus: object) -> int:
    if isinstance(modulus, bool) or not isinstance(modulus, numbers.Integral) or modulus < 1:
        raise ValueError(f"modulus must be a positive integer, got {modulus!r}")
    return int(modulus)


def marker_id(structure: RaggedArray, raw_index: int, *, modulus: int | None = None) -> int:
    """Marker stored for `raw_index`: `raw_index mod modulus` (default: the leaf count)."""
    raw = check_raw_index(raw_index)
    if modulus is None:
        modulus = structure.leaf_count
    else:
        modulus = check_modulus(modulus)
    return raw % modulus


def _descend(structure: RaggedArray, address: int) -> tuple[tuple[int, ...], Leaf]:
    remainder = address % structure.leaf_count
    cursor: Branch = structure.root
    path: list[int] = []
    while True:
        length = len(cursor)
        if length == 0:
            raise ShapeMismatchError(f"zero-length array reached at level {len(path)}")
        idx = remainder % length
        remainder //= length
        path.append(idx)
        child = cursor.children[idx]
        if isinstance(child, Leaf):
            return tuple(path), child
        if not isinstance(child, Branch):
            raise ShapeMismatchError(f"unexpected node type {type(child).__name__} at path {path}")
        cursor = child


def write_at(structure: RaggedArray, raw_index: int, *, modulus: int | None = None) -> Marker:
    """Populate exactly one leaf, replacing whatever marker it held."""
    number = marker_id(structure, raw_index, modulus=modulus)
    _, leaf = _descend(structure, number)
    marker = Marker(number)
    leaf.marker = marker
    return marker


def write_many(structure: RaggedArray, raw_indices: Iterable[int], *, modulus: int | None = None) -> int:
    writes = 0
    for raw_index in raw_indices:
        write_at(structure, raw_index, modulus=modulus)
        writes += 1
    return writes


def decompose(structure: RaggedArray, raw_index: int, *, modulus: int | None = None) -> tuple[int, ...]:
    """Coordinate path (level 0 first) that `write_at` would follow."""
    path, _ = _descend(structure, marker_id(structure, raw_index, modulus=modulus))
    return path


def read_at(structure: RaggedArray, raw_index: int, *, modulus: int | None = None) -> Marker | None:
    _, leaf = _descend(structure, marker_id(structure, raw_index, modulus=modulus))
    return leaf.marker


def compose(sizes: DimensionSpec | Iterable[int], path: Sequence[int]) -> int:
    """Inverse of `decompose` on `[0, leaf_count)`."""
    spec = DimensionSpec.of(sizes)
    if len(path) != spec.depth:
        raise ShapeMismatchError(f"path has {len(path)} coordinates, structure has {spec.depth} levels")
    address = 0
    for level, (coord, size, stride) in enumerate(zip(path, spec.sizes, spec.strides)):
        if not 0 <= coord < size:
            raise ShapeMismatchError(f"coordinate {coord} out of range for level {level} of size {size}")
        address += coord * stride
    return address


def leaf_at(structure: RaggedArray, path: Sequence[int]) -> Leaf:
    cursor: Branch | Leaf = structure.root
    for level, coord in enumerate(path):
        if not isinstance(cursor, Branch):
            raise ShapeMismatchError(f"path {list(path)} is deeper than the structure")
        if not 0 <= coord < len(cursor):
            raise ShapeMismatchError(f"coordinate {coord} out of range for level {level} of size {len(cursor)}")
        cursor = cursor.children[coord]
    if not isinstance(cursor, Leaf):
        raise ShapeMismatchError(f"path {list(path)} stops above the leaf level")
    return cursor

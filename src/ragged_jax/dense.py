"""Vectorised JAX rendition of fill/count over a dense occupancy array.

Empty slots hold -1; populated slots hold the marker id. Duplicate writes are
resolved by scatter-max over write positions so the last write wins, exactly
as in the sequential tree path.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import partial

import jax
import jax.numpy as jnp

from .addressing import check_modulus, check_raw_index
from .shape import DimensionSpec, RaggedArray, check_leaf_budget
from .traversal import iter_leaves

EMPTY = -1
INT32_MAX = 2**31 - 1


def unravel_addresses(sizes: DimensionSpec | Iterable[int], addresses: Iterable[int]) -> jnp.ndarray:
    """Mixed-radix digits of each address as rows of shape `(n, depth)`."""
    spec = DimensionSpec.of(sizes)
    check_leaf_budget(spec)
    # Reduced before conversion; the leaf budget keeps every value inside int32.
    reduced = [check_raw_index(address, where="address") % spec.leaf_count for address in addresses]
    addr = jnp.asarray(reduced, dtype=jnp.int32)
    strides = jnp.asarray(spec.strides, dtype=jnp.int32)
    radices = jnp.asarray(spec.sizes, dtype=jnp.int32)
    return jnp.mod(addr[:, None] // strides[None, :], radices[None, :])


@partial(jax.jit, static_argnames=("sizes",))
def _fill_kernel(markers: jnp.ndarray, *, sizes: tuple[int, ...]) -> jnp.ndarray:
    total = 1
    for size in sizes:
        total *= size
    addresses = jnp.mod(markers, total)
    order = jnp.arange(markers.shape[0], dtype=jnp.int32)
    last = jnp.full((total,), EMPTY, dtype=jnp.int32).at[addresses].max(order)
    flat = jnp.where(last >= 0, markers[jnp.maximum(last, 0)], EMPTY)
    # Address order has level 0 as the fastest digit; reshape reversed, then flip axes.
    depth = len(sizes)
    return jnp.transpose(jnp.reshape(flat, tuple(reversed(sizes))), tuple(reversed(range(depth))))


def dense_fill(
    sizes: DimensionSpec | Iterable[int],
    raw_indices: Iterable[int],
    *,
    modulus: int | None = None,
) -> jnp.ndarray:
    spec = DimensionSpec.of(sizes)
    check_leaf_budget(spec)
    if modulus is None:
        modulus = spec.leaf_count
    else:
        modulus = check_modulus(modulus)
        if modulus > INT32_MAX + 1:
            raise ValueError(f"modulus {modulus} does not fit int32 markers")
    markers = [check_raw_index(raw) % modulus for raw in raw_indices]
    if not markers:
        return jnp.full(spec.sizes, EMPTY, dtype=jnp.int32)
    return _fill_kernel(jnp.asarray(markers, dtype=jnp.int32), sizes=spec.sizes)


def to_dense(structure: RaggedArray) -> jnp.ndarray:
    values = [EMPTY if leaf.marker is None else leaf.marker.id for _, leaf in iter_leaves(structure)]
    return jnp.reshape(jnp.asarray(values, dtype=jnp.int32), structure.spec.sizes)


def dense_count(dense: jnp.ndarray) -> int:
    return int(jnp.sum(dense != EMPTY))

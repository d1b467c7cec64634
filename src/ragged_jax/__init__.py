"""ragged-jax public API."""

from .addressing import compose, decompose, leaf_at, marker_id, read_at, write_at, write_many
from .dense import EMPTY, dense_count, dense_fill, to_dense, unravel_addresses
from .errors import InvalidShapeError, RaggedError, ShapeMismatchError
from .scenarios import REFERENCE_SCENARIOS, FillPolicy, Scenario, fill, paired_total, run_scenario
from .shape import DimensionSpec, RaggedArray, build
from .traversal import clear, count_populated, iter_leaves, leaves_of, populated_markers
from .values import Branch, Leaf, Marker, NodeInfo, NodeKind, node_info

__all__ = [
    "build",
    "DimensionSpec",
    "RaggedArray",
    "write_at",
    "write_many",
    "marker_id",
    "decompose",
    "compose",
    "read_at",
    "leaf_at",
    "count_populated",
    "iter_leaves",
    "leaves_of",
    "populated_markers",
    "clear",
    "dense_fill",
    "dense_count",
    "to_dense",
    "unravel_addresses",
    "EMPTY",
    "FillPolicy",
    "Scenario",
    "REFERENCE_SCENARIOS",
    "fill",
    "run_scenario",
    "paired_total",
    "Leaf",
    "Branch",
    "Marker",
    "NodeKind",
    "NodeInfo",
    "node_info",
    "RaggedError",
    "InvalidShapeError",
    "ShapeMismatchError",
]

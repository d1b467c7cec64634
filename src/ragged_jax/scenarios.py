"""Reference fill scenarios: write every 7th raw index below 10000, then count."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final, Literal

from .addressing import write_many
from .dense import dense_count, dense_fill
from .shape import DimensionSpec, RaggedArray, build
from .traversal import count_populated

logger = logging.getLogger(__name__)

Backend = Literal["tree", "dense"]
_BACKENDS: Final[frozenset[str]] = frozenset({"tree", "dense"})
DEFAULT_BACKEND: Final[str] = os.environ.get("RAGGED_JAX_SCENARIO_BACKEND", "tree").strip().lower() or "tree"


@dataclass(frozen=True)
class FillPolicy:
    """Which raw indices are written and how they are reduced.

    - `leaf_count`: marker is `raw mod T`.
    - `uniform_power`: marker is `raw mod size**depth`, then addressed mod `T`.
      Used by fills that reduce by size**depth even for non-uniform specs.
    """

    kind: Literal["leaf_count", "uniform_power"] = "leaf_count"
    start: int = 0
    stop: int = 10_000
    step: int = 7

    def __post_init__(self) -> None:
        if self.kind not in {"leaf_count", "uniform_power"}:
            raise ValueError(f"unknown fill policy kind {self.kind!r}")
        if self.start < 0:
            raise ValueError("fill start must be non-negative")
        if self.step < 1:
            raise ValueError("fill step must be positive")

    def raw_indices(self) -> range:
        return range(self.start, self.stop, self.step)

    def modulus(self, spec: DimensionSpec, size: int | None = None) -> int:
        if self.kind == "leaf_count":
            return spec.leaf_count
        if size is None:
            raise ValueError("uniform_power policy needs the scenario size")
        return size**spec.depth


@dataclass(frozen=True)
class Scenario:
    """Dimension layout where `None` entries stand for the size parameter."""

    depth: int
    layout: tuple[int | None, ...]

    def __post_init__(self) -> None:
        if len(self.layout) != self.depth:
            raise ValueError(f"layout has {len(self.layout)} levels, expected {self.depth}")

    def dims(self, size: int) -> DimensionSpec:
        return DimensionSpec(tuple(size if item is None else item for item in self.layout))


REFERENCE_SCENARIOS: Final[dict[int, Scenario]] = {
    1: Scenario(depth=1, layout=(None,)),
    2: Scenario(depth=2, layout=(None, None)),
    3: Scenario(depth=3, layout=(None, 5, None)),
    4: Scenario(depth=4, layout=(None, 2, None, 3)),
    5: Scenario(depth=5, layout=(None, None, 3, 4, None)),
}

REFERENCE_SIZES: Final[tuple[int, ...]] = (3, 5)


def fill(structure: RaggedArray, policy: FillPolicy = FillPolicy(), *, size: int | None = None) -> int:
    """Apply the policy's writes in order; returns how many writes were made."""
    modulus = policy.modulus(structure.spec, size)
    return write_many(structure, policy.raw_indices(), modulus=modulus)


def _resolve_backend(backend: str | None) -> str:
    name = DEFAULT_BACKEND if backend is None else backend
    if name not in _BACKENDS:
        raise ValueError(f"unknown scenario backend {name!r}; expected one of {sorted(_BACKENDS)}")
    return name


def scenario_for(depth: int) -> Scenario:
    try:
        return REFERENCE_SCENARIOS[depth]
    except KeyError:
        raise ValueError(f"no reference scenario for depth {depth}") from None


def run_scenario(
    depth: int,
    size: int,
    *,
    policy: FillPolicy = FillPolicy(),
    backend: Backend | None = None,
) -> int:
    """Build, fill and count one reference scenario."""
    spec = scenario_for(depth).dims(size)
    name = _resolve_backend(backend)
    if name == "dense":
        count = dense_count(dense_fill(spec, policy.raw_indices(), modulus=policy.modulus(spec, size)))
    else:
        structure = build(spec)
        fill(structure, policy, size=size)
        count = count_populated(structure)
    logger.debug(
        "scenario depth=%d size=%d policy=%s backend=%s populated=%d",
        depth,
        size,
        policy.kind,
        name,
        count,
    )
    return count


def paired_total(
    depth: int,
    sizes: tuple[int, ...] = REFERENCE_SIZES,
    *,
    policy: FillPolicy = FillPolicy(),
    backend: Backend | None = None,
) -> int:
    return sum(run_scenario(depth, size, policy=policy, backend=backend) for size in sizes)

"""Time tree vs dense fill+count for the reference ragged scenarios."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

from _bench_utils import (
    configure_cpu_affinity_from_env,
    configure_logging,
    host_metadata,
    mean,
    percentile,
    sample_ms,
    stddev,
)

from ragged_jax import REFERENCE_SCENARIOS, FillPolicy, run_scenario

logger = logging.getLogger("fill_benchmarks")

PROFILES = {
    "quick": {"sizes": (3, 5), "repeats": 3, "samples": 3, "warmup": 1},
    "full": {"sizes": (3, 5, 8), "repeats": 10, "samples": 7, "warmup": 2},
}


@dataclass(frozen=True)
class Row:
    depth: int
    size: int
    backend: str
    policy: str
    populated: int
    mean_ms: float
    p50_ms: float
    p95_ms: float
    stddev_ms: float
    repeats: int
    samples: int


def _run_case(depth: int, size: int, backend: str, policy: FillPolicy, *, repeats: int, samples: int, warmup: int) -> Row:
    populated = run_scenario(depth, size, policy=policy, backend=backend)
    rows = sample_ms(
        lambda: run_scenario(depth, size, policy=policy, backend=backend),
        (),
        repeats=repeats,
        warmup=warmup,
        samples=samples,
    )
    return Row(
        depth=depth,
        size=size,
        backend=backend,
        policy=policy.kind,
        populated=populated,
        mean_ms=mean(rows),
        p50_ms=percentile(rows, 0.50),
        p95_ms=percentile(rows, 0.95),
        stddev_ms=stddev(rows),
        repeats=repeats,
        samples=samples,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--profile", choices=sorted(PROFILES), default="quick")
    parser.add_argument("--sizes", default="", help="comma-separated sizes (overrides profile)")
    parser.add_argument("--backends", default="tree,dense", help="comma-separated backends")
    parser.add_argument("--policy", choices=("leaf_count", "uniform_power"), default="leaf_count")
    parser.add_argument("--json-out", default="", help="optional output JSON")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    configure_logging(args.log_level)
    affinity = configure_cpu_affinity_from_env()
    profile = PROFILES[args.profile]
    sizes = [int(x.strip()) for x in args.sizes.split(",") if x.strip()] or list(profile["sizes"])
    backends = [b.strip() for b in args.backends.split(",") if b.strip()]
    policy = FillPolicy(kind=args.policy)

    rows: list[Row] = []
    print("Ragged fill benchmark")
    for depth in sorted(REFERENCE_SCENARIOS):
        for size in sizes:
            for backend in backends:
                row = _run_case(
                    depth,
                    size,
                    backend,
                    policy,
                    repeats=profile["repeats"],
                    samples=profile["samples"],
                    warmup=profile["warmup"],
                )
                rows.append(row)
                print(
                    f"depth={depth} size={size:2d} {backend:5} populated={row.populated:5d} "
                    f"mean={row.mean_ms:8.3f}ms p95={row.p95_ms:8.3f}ms"
                )

    if args.json_out:
        outpath = Path(args.json_out)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "timestamp_utc": datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ"),
            "profile": args.profile,
            "host": host_metadata(),
            "cpu_affinity": affinity,
            "rows": [asdict(row) for row in rows],
        }
        outpath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("wrote JSON: %s", outpath)


if __name__ == "__main__":
    main()

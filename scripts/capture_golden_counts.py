"""Capture populated-leaf counts for every reference scenario and fill policy."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from ragged_jax import REFERENCE_SCENARIOS, FillPolicy, run_scenario

POLICIES = ("leaf_count", "uniform_power")


def collect_rows(sizes: tuple[int, ...], *, backend: str = "tree") -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for kind in POLICIES:
        policy = FillPolicy(kind=kind)
        for depth, scenario in sorted(REFERENCE_SCENARIOS.items()):
            counts = {size: run_scenario(depth, size, policy=policy, backend=backend) for size in sizes}
            rows.append(
                {
                    "policy": kind,
                    "depth": depth,
                    "layout": ["size" if item is None else item for item in scenario.layout],
                    "counts": {str(size): count for size, count in counts.items()},
                    "total": sum(counts.values()),
                }
            )
    return rows


def build_markdown(rows: list[dict[str, object]], sizes: tuple[int, ...]) -> str:
    header = " | ".join(f"size {size}" for size in sizes)
    lines = [
        "# Golden populated-leaf counts",
        "",
        f"| Policy | Depth | Layout | {header} | Total |",
        "|---|---:|---|" + "---:|" * len(sizes) + "---:|",
    ]
    for row in rows:
        counts = " | ".join(str(row["counts"][str(size)]) for size in sizes)
        layout = ", ".join(str(item) for item in row["layout"])
        lines.append(f"| `{row['policy']}` | {row['depth']} | [{layout}] | {counts} | {row['total']} |")
    return "\n".join(lines)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--sizes", default="3,5", help="comma-separated size parameters")
    parser.add_argument("--backend", choices=("tree", "dense"), default="tree")
    parser.add_argument("--json-out", default="", help="optional output JSON")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    sizes = tuple(int(x.strip()) for x in args.sizes.split(",") if x.strip())
    rows = collect_rows(sizes, backend=args.backend)
    print(build_markdown(rows, sizes))

    if args.json_out:
        outpath = Path(args.json_out)
        outpath.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "timestamp_utc": datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ"),
            "backend": args.backend,
            "sizes": list(sizes),
            "rows": rows,
        }
        outpath.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote JSON: {outpath}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

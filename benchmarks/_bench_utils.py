"""Shared benchmark runtime helpers."""

from __future__ import annotations

import logging
import math
import os
import platform
import time
from typing import Any

import jax

logger = logging.getLogger(__name__)

THREAD_ENV_VARS = (
    "OMP_NUM_THREADS",
    "OPENBLAS_NUM_THREADS",
    "MKL_NUM_THREADS",
    "JAX_NUM_THREADS",
    "XLA_FLAGS",
)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def configure_cpu_affinity_from_env() -> dict[str, Any]:
    requested = os.environ.get("RAGGED_JAX_BENCH_CPU_AFFINITY", "").strip()
    info: dict[str, Any] = {"requested": requested or None, "applied": False, "active": None}
    if not requested:
        return info
    if not hasattr(os, "sched_setaffinity") or not hasattr(os, "sched_getaffinity"):
        return info

    cpus = parse_affinity_spec(requested)
    if not cpus:
        return info
    try:
        os.sched_setaffinity(0, cpus)
        info["applied"] = True
        info["active"] = sorted(int(cpu) for cpu in os.sched_getaffinity(0))
    except OSError as exc:
        logger.warning("could not pin benchmark to cpus %s: %s", sorted(cpus), exc)
    return info


def parse_affinity_spec(spec: str) -> set[int]:
    out: set[int] = set()
    for part in spec.split(","):
        token = part.strip()
        if not token:
            continue
        if "-" in token:
            lo_raw, hi_raw = token.split("-", 1)
            lo = int(lo_raw.strip())
            hi = int(hi_raw.strip())
            if hi < lo:
                lo, hi = hi, lo
            out.update(range(lo, hi + 1))
            continue
        out.add(int(token))
    return out


def host_metadata() -> dict[str, Any]:
    return {
        "platform": platform.platform(),
        "python": platform.python_version(),
        "jax": getattr(jax, "__version__", "unknown"),
        "backend": jax.default_backend(),
        "cpu_count": os.cpu_count(),
        "thread_env": {name: os.environ[name] for name in THREAD_ENV_VARS if name in os.environ},
    }


def block_until_ready(value: object) -> None:
    if hasattr(value, "block_until_ready"):
        value.block_until_ready()


def percentile(values: list[float], q: float) -> float:
    ordered = sorted(values)
    if len(ordered) == 1:
        return ordered[0]
    pos = (len(ordered) - 1) * q
    lo = int(math.floor(pos))
    hi = int(math.ceil(pos))
    if lo == hi:
        return ordered[lo]
    alpha = pos - lo
    return ordered[lo] * (1.0 - alpha) + ordered[hi] * alpha


def mean(values: list[float]) -> float:
    return sum(values) / len(values)


def stddev(values: list[float]) -> float:
    if len(values) < 2:
        return 0.0
    m = mean(values)
    var = sum((v - m) ** 2 for v in values) / (len(values) - 1)
    return math.sqrt(var)


def sample_ms(fn, args: tuple[object, ...], *, repeats: int, warmup: int, samples: int) -> list[float]:
    for _ in range(max(0, warmup)):
        block_until_ready(fn(*args))

    rows: list[float] = []
    for _ in range(samples):
        start_ns = time.perf_counter_ns()
        for _ in range(repeats):
            block_until_ready(fn(*args))
        elapsed_ns = time.perf_counter_ns() - start_ns
        rows.append((elapsed_ns / repeats) / 1e6)
    return rows

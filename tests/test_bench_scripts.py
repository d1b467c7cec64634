from __future__ import annotations

import importlib.util
from pathlib import Path
import sys
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None

REPO_ROOT = Path(__file__).resolve().parent.parent


def _load_module(name: str, path: Path):
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise RuntimeError(f"Unable to load {name} module")
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for benchmark helper tests")
class BenchUtilsTests(unittest.TestCase):
    def test_statistics_helpers(self) -> None:
        module = _load_module("_bench_utils", REPO_ROOT / "benchmarks" / "_bench_utils.py")

        self.assertEqual(module.percentile([4.0], 0.95), 4.0)
        self.assertAlmostEqual(module.percentile([1.0, 2.0, 3.0, 4.0], 0.5), 2.5)
        self.assertAlmostEqual(module.mean([1.0, 2.0, 3.0]), 2.0)
        self.assertEqual(module.stddev([5.0]), 0.0)
        self.assertAlmostEqual(module.stddev([1.0, 3.0]), 2.0**0.5)

    def test_affinity_spec_parsing(self) -> None:
        module = _load_module("_bench_utils", REPO_ROOT / "benchmarks" / "_bench_utils.py")

        self.assertEqual(module.parse_affinity_spec("0-2,5"), {0, 1, 2, 5})
        self.assertEqual(module.parse_affinity_spec("3-1, ,7"), {1, 2, 3, 7})
        self.assertEqual(module.parse_affinity_spec(""), set())


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for golden-count script tests")
class GoldenCountScriptTests(unittest.TestCase):
    def test_collect_rows_matches_reference_totals(self) -> None:
        module = _load_module("capture_golden_counts", REPO_ROOT / "scripts" / "capture_golden_counts.py")

        rows = module.collect_rows((3, 5))
        by_key = {(row["policy"], row["depth"]): row for row in rows}
        self.assertEqual(len(rows), 10)
        self.assertEqual(by_key[("leaf_count", 1)]["total"], 8)
        self.assertEqual(by_key[("leaf_count", 3)]["counts"], {"3": 45, "5": 125})
        self.assertEqual(by_key[("leaf_count", 5)]["total"], 1753)
        self.assertEqual(by_key[("uniform_power", 3)]["counts"], {"3": 27, "5": 125})
        self.assertEqual(by_key[("leaf_count", 4)]["layout"], ["size", 2, "size", 3])

    def test_markdown_has_one_line_per_row(self) -> None:
        module = _load_module("capture_golden_counts", REPO_ROOT / "scripts" / "capture_golden_counts.py")

        rows = module.collect_rows((3,))
        report = module.build_markdown(rows, (3,))
        table_rows = [line for line in report.splitlines() if line.startswith("| `")]
        self.assertEqual(len(table_rows), len(rows))
        self.assertIn("| `leaf_count` | 2 | [size, size] | 9 | 9 |", report)


if __name__ == "__main__":
    unittest.main()

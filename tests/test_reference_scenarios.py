from __future__ import annotations

import importlib.util
import unittest


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None

# Populated-leaf counts after writing range(0, 10000, 7), reduced mod leaf count.
LEAF_COUNT_GOLDEN = {
    1: {3: 3, 5: 5},
    2: {3: 9, 5: 25},
    3: {3: 45, 5: 125},
    4: {3: 54, 5: 150},
    5: {3: 324, 5: 1429},
}

PAIRED_GOLDEN = {1: 8, 2: 34, 3: 170, 4: 204, 5: 1753}

# Same writes, reduced mod size**depth first.
UNIFORM_POWER_GOLDEN = {
    1: {3: 3, 5: 5},
    2: {3: 9, 5: 25},
    3: {3: 27, 5: 125},
    4: {3: 54, 5: 150},
    5: {3: 243},
}


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for scenario tests")
class ReferenceScenarioTests(unittest.TestCase):
    def test_reference_layouts(self) -> None:
        from ragged_jax import REFERENCE_SCENARIOS

        self.assertEqual(REFERENCE_SCENARIOS[1].dims(3).sizes, (3,))
        self.assertEqual(REFERENCE_SCENARIOS[2].dims(3).sizes, (3, 3))
        self.assertEqual(REFERENCE_SCENARIOS[3].dims(3).sizes, (3, 5, 3))
        self.assertEqual(REFERENCE_SCENARIOS[4].dims(5).sizes, (5, 2, 5, 3))
        self.assertEqual(REFERENCE_SCENARIOS[5].dims(5).sizes, (5, 5, 3, 4, 5))

    def test_default_policy_writes_1429_indices(self) -> None:
        from ragged_jax import FillPolicy, build, fill

        policy = FillPolicy()
        self.assertEqual(len(policy.raw_indices()), 1429)
        self.assertEqual(fill(build([3, 5, 3]), policy), 1429)

    def test_leaf_count_golden_counts(self) -> None:
        from ragged_jax import run_scenario

        for backend in ("tree", "dense"):
            for depth, by_size in LEAF_COUNT_GOLDEN.items():
                for size, expected in by_size.items():
                    with self.subTest(backend=backend, depth=depth, size=size):
                        self.assertEqual(run_scenario(depth, size, backend=backend), expected)

    def test_paired_totals(self) -> None:
        from ragged_jax import paired_total

        for depth, expected in PAIRED_GOLDEN.items():
            with self.subTest(depth=depth):
                self.assertEqual(paired_total(depth, backend="tree"), expected)

    def test_counts_match_distinct_address_oracle(self) -> None:
        from ragged_jax import REFERENCE_SCENARIOS, run_scenario

        for depth, scenario in REFERENCE_SCENARIOS.items():
            for size in (2, 3, 4, 5):
                total = scenario.dims(size).leaf_count
                expected = len({raw % total for raw in range(0, 10_000, 7)})
                with self.subTest(depth=depth, size=size):
                    self.assertEqual(run_scenario(depth, size, backend="tree"), expected)

    def test_uniform_power_golden_counts(self) -> None:
        from ragged_jax import FillPolicy, run_scenario

        policy = FillPolicy(kind="uniform_power")
        for backend in ("tree", "dense"):
            for depth, by_size in UNIFORM_POWER_GOLDEN.items():
                for size, expected in by_size.items():
                    with self.subTest(backend=backend, depth=depth, size=size):
                        self.assertEqual(run_scenario(depth, size, policy=policy, backend=backend), expected)

    def test_uniform_power_wraps_twice(self) -> None:
        from ragged_jax import FillPolicy, run_scenario

        policy = FillPolicy(kind="uniform_power")
        expected = len({(raw % 3125) % 1500 for raw in range(0, 10_000, 7)})
        self.assertEqual(run_scenario(5, 5, policy=policy, backend="tree"), expected)
        self.assertEqual(run_scenario(5, 5, policy=policy, backend="dense"), expected)

    def test_uniform_power_needs_size(self) -> None:
        from ragged_jax import DimensionSpec, FillPolicy, build, fill

        policy = FillPolicy(kind="uniform_power")
        self.assertEqual(policy.modulus(DimensionSpec((3, 5, 3)), 3), 27)
        with self.assertRaises(ValueError):
            fill(build([3, 5, 3]), policy)

    def test_invalid_arguments(self) -> None:
        from ragged_jax import FillPolicy, run_scenario

        with self.assertRaises(ValueError):
            run_scenario(6, 3)
        with self.assertRaises(ValueError):
            run_scenario(1, 3, backend="gpu")
        with self.assertRaises(ValueError):
            FillPolicy(kind="cubic")
        with self.assertRaises(ValueError):
            FillPolicy(step=0)

    def test_custom_policy_and_deep_scenario(self) -> None:
        from ragged_jax import FillPolicy, Scenario, build, count_populated, fill

        scenario = Scenario(depth=7, layout=(2, None, 2, 3, None, 2, 2))
        structure = build(scenario.dims(3))
        self.assertEqual(structure.leaf_count, 432)
        fill(structure, FillPolicy(stop=1000, step=3))
        expected = len({raw % 432 for raw in range(0, 1000, 3)})
        self.assertEqual(count_populated(structure), expected)


if __name__ == "__main__":
    unittest.main()

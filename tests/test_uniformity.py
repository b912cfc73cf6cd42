from __future__ import annotations

import json
import tempfile
import unittest
from collections import Counter
from pathlib import Path

import numpy as np

from bounded_rng.analysis.reducers import modulo, multiply_shift, resolve_reducer
from bounded_rng.analysis.uniformity import (
    _expected_fractions,
    check_uniformity,
    expected_draws_per_sample,
)
from bounded_rng.core.sampler import ZeroRangeError, rejection_threshold, sample_bounded, split_product
from bounded_rng.core.sources import GeneratorSource, ScriptedSource
from bounded_rng.io.results import load_report, write_report

WIDE_BOUND = 0xC0000000


class ExpectedDrawsTest(unittest.TestCase):
    def test_rejection_loop_is_short(self) -> None:
        # Typical bounds almost never reject, so the loop is not a hang risk.
        self.assertLess(expected_draws_per_sample(12345), 1.0001)
        self.assertEqual(expected_draws_per_sample(16), 1.0)
        self.assertAlmostEqual(expected_draws_per_sample(WIDE_BOUND), 4.0 / 3.0)
        self.assertLess(expected_draws_per_sample(2**31 + 1), 2.0)


class ReducerTest(unittest.TestCase):
    def test_registry_resolves_names(self) -> None:
        self.assertIs(resolve_reducer("lemire"), sample_bounded)
        self.assertIs(resolve_reducer("Multiply-Shift"), multiply_shift)
        self.assertIs(resolve_reducer("modulo"), modulo)
        with self.assertRaises(ValueError):
            resolve_reducer("division")

    def test_baselines_never_reject(self) -> None:
        source = ScriptedSource([0, 0])
        self.assertEqual(multiply_shift(WIDE_BOUND, source), 0)
        self.assertEqual(modulo(WIDE_BOUND, source), 0)
        self.assertEqual(source.draws, 2)

    def test_multiply_shift_preimages_are_uneven(self) -> None:
        # floor(3n / 4): every block of 4 draws maps to 3 values, the first one twice.
        draws = range(4 * 300)
        counts = Counter(multiply_shift(WIDE_BOUND, ScriptedSource([n])) for n in draws)
        self.assertEqual(len(counts), 900)
        for value, count in counts.items():
            self.assertEqual(count, 2 if value % 3 == 0 else 1)

    def test_rejection_evens_out_preimages(self) -> None:
        threshold = rejection_threshold(WIDE_BOUND)
        accepted = Counter()
        for n in range(4 * 300):
            high, low = split_product(n, WIDE_BOUND)
            if low >= threshold:
                accepted[high] += 1
        self.assertEqual(len(accepted), 900)
        self.assertEqual(set(accepted.values()), {1})


class UniformityCheckTest(unittest.TestCase):
    def test_lemire_is_uniform_over_12345_values(self) -> None:
        report = check_uniformity(
            12345,
            1_000_000,
            GeneratorSource.from_seed(20240611),
            significance=0.001,
        )
        self.assertEqual(report.bins, 12345)
        self.assertEqual(report.dof, 12344)
        self.assertTrue(report.uniform, report.summary())
        self.assertGreaterEqual(report.draws, 1_000_000)
        self.assertLess(report.draws_per_sample, 1.0001)

    def test_modulo_bias_detected_on_wide_range(self) -> None:
        report = check_uniformity(
            WIDE_BOUND,
            30_000,
            GeneratorSource.from_seed(5),
            method="modulo",
            bins=3,
            significance=0.001,
        )
        self.assertFalse(report.uniform)
        self.assertEqual(report.draws, 30_000)

    def test_lemire_unbiased_on_wide_range(self) -> None:
        report = check_uniformity(
            WIDE_BOUND,
            30_000,
            GeneratorSource.from_seed(5),
            bins=3,
            significance=0.001,
        )
        self.assertTrue(report.uniform, report.summary())
        self.assertAlmostEqual(report.draws_per_sample, 4.0 / 3.0, delta=0.05)

    def test_folded_bins_weight_uneven_buckets(self) -> None:
        np.testing.assert_allclose(_expected_fractions(10, 3), [0.4, 0.3, 0.3])
        np.testing.assert_allclose(_expected_fractions(12, 4), [0.25] * 4)

    def test_wide_range_requires_bins(self) -> None:
        with self.assertRaises(ValueError):
            check_uniformity(WIDE_BOUND, 10, GeneratorSource.from_seed(1))

    def test_invalid_arguments(self) -> None:
        source = GeneratorSource.from_seed(1)
        with self.assertRaises(ZeroRangeError):
            check_uniformity(0, 10, source)
        with self.assertRaises(ValueError):
            check_uniformity(2**32, 10, source)
        with self.assertRaises(ValueError):
            check_uniformity(10, 0, source)
        with self.assertRaises(ValueError):
            check_uniformity(10, 10, source, significance=1.5)

    def test_report_json_round_trip(self) -> None:
        report = check_uniformity(100, 5000, GeneratorSource.from_seed(9))
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_report(Path(tmpdir) / "nested" / "report.json", report)
            payload = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(payload["bound"], 100)
            self.assertEqual(payload["samples"], 5000)
            self.assertEqual(load_report(path), report)


if __name__ == "__main__":
    unittest.main()

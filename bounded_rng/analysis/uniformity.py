from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from bounded_rng.analysis.reducers import resolve_reducer
from bounded_rng.core.rng_utils import ensure_source
from bounded_rng.core.sampler import ZeroRangeError, rejection_threshold
from bounded_rng.core.sources import CountingSource, DrawSource

try:  # Optional dependency gate for the goodness-of-fit test.
    from scipy.stats import chisquare
except Exception:  # pragma: no cover - optional dependency
    chisquare = None

# Bounds above this need explicit folding into fewer bins.
MAX_EXACT_BINS = 1 << 20


@dataclass(slots=True)
class UniformityReport:
    bound: int
    samples: int
    bins: int
    method: str
    statistic: float
    p_value: float
    dof: int
    draws: int
    draws_per_sample: float
    expected_draws_per_sample: float
    significance: float
    uniform: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        verdict = "uniform" if self.uniform else "NOT uniform"
        return (
            f"{self.method} range={self.bound} samples={self.samples} bins={self.bins} "
            f"chi2={self.statistic:.2f} dof={self.dof} p={self.p_value:.4f} "
            f"draws/sample={self.draws_per_sample:.5f} (expected {self.expected_draws_per_sample:.5f}) "
            f"-> {verdict} at alpha={self.significance}"
        )


def expected_draws_per_sample(bound: int) -> float:
    """Mean number of 32-bit draws the rejection loop consumes per sample.

    Exactly ``2**32 % bound`` of the ``2**32`` possible draws are rejected,
    so the draw count is geometric with success ``1 - threshold / 2**32``.
    """
    threshold = rejection_threshold(bound)
    return float((1 << 32) / ((1 << 32) - threshold))


def _resolve_bins(bound: int, bins: int) -> int:
    if bins <= 0:
        if bound > MAX_EXACT_BINS:
            raise ValueError(
                f"Range {bound} is too wide to bin per value; pass bins <= {MAX_EXACT_BINS}"
            )
        return bound
    return min(int(bins), bound)


def _expected_fractions(bound: int, bins: int) -> np.ndarray:
    # Bucket k holds the values v with v * bins // bound == k.
    edges = np.array([-(-k * bound // bins) for k in range(bins + 1)], dtype=float)
    return np.diff(edges) / float(bound)


def _bucket_counts(values: np.ndarray, bound: int, bins: int) -> np.ndarray:
    if bins == bound:
        buckets = values
    else:
        buckets = (values * np.uint64(bins)) // np.uint64(bound)
    return np.bincount(buckets.astype(np.int64), minlength=bins).astype(float)


def check_uniformity(
    bound: int,
    samples: int,
    source: DrawSource | None = None,
    *,
    method: str = "lemire",
    bins: int = 0,
    significance: float = 0.01,
) -> UniformityReport:
    """Draw *samples* values with *method* and chi-square them against uniform.

    ``bins == 0`` keeps one bin per value; otherwise values are folded into
    *bins* contiguous buckets of (almost) equal width, with the expected
    counts adjusted for the uneven ones.
    """
    if chisquare is None:
        raise RuntimeError("scipy is required for the uniformity check. Install scipy.")
    if bound < 0 or bound >= 1 << 32:
        raise ValueError(f"Range must fit in 32 unsigned bits, got {bound}")
    if bound == 0:
        raise ZeroRangeError("Cannot sample uniformly from the empty range [0, 0)")
    if samples <= 0:
        raise ValueError(f"samples must be positive, got {samples}")
    if not 0.0 < significance < 1.0:
        raise ValueError(f"significance must lie in (0, 1), got {significance}")

    reducer = resolve_reducer(method)
    bin_count = _resolve_bins(bound, bins)
    counting = CountingSource(ensure_source(source))
    values = np.fromiter(
        (reducer(bound, counting) for _ in range(samples)),
        dtype=np.uint64,
        count=samples,
    )
    if values.size and int(values.max()) >= bound:
        raise RuntimeError(f"{method} produced a value outside [0, {bound})")

    observed = _bucket_counts(values, bound, bin_count)
    expected = _expected_fractions(bound, bin_count) * samples
    if bin_count > 1:
        result = chisquare(observed, expected)
        statistic = float(result.statistic)
        p_value = float(result.pvalue)
    else:
        statistic, p_value = 0.0, 1.0

    return UniformityReport(
        bound=int(bound),
        samples=int(samples),
        bins=bin_count,
        method=method,
        statistic=statistic,
        p_value=p_value,
        dof=bin_count - 1,
        draws=counting.draws,
        draws_per_sample=counting.draws / samples,
        expected_draws_per_sample=expected_draws_per_sample(bound),
        significance=float(significance),
        uniform=bool(p_value >= significance),
    )

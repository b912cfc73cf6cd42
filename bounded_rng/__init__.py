"""Unbiased bounded random integers from a 32-bit uniform source."""

from bounded_rng.config import SamplerParams
from bounded_rng.core.sampler import ZeroRangeError, sample_bounded
from bounded_rng.core.sources import Uniform32Source

__all__ = ["SamplerParams", "Uniform32Source", "ZeroRangeError", "sample_bounded"]

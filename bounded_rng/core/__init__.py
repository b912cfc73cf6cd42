from bounded_rng.core.rng_utils import ensure_source, make_source
from bounded_rng.core.sampler import ZeroRangeError, rejection_threshold, sample_bounded, split_product
from bounded_rng.core.sources import (
    CountingSource,
    GeneratorSource,
    PCG32Source,
    Rand31Source,
    ScriptedSource,
    SourceExhaustedError,
    Uniform32Source,
    as_draw,
)

__all__ = [
    "CountingSource",
    "GeneratorSource",
    "PCG32Source",
    "Rand31Source",
    "ScriptedSource",
    "SourceExhaustedError",
    "Uniform32Source",
    "ZeroRangeError",
    "as_draw",
    "ensure_source",
    "make_source",
    "rejection_threshold",
    "sample_bounded",
    "split_product",
]

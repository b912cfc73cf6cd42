"""Shared helpers for resolving 32-bit sources.

Functions that draw bounded samples accept an optional ``source`` argument.
``ensure_source`` normalizes that argument into a usable source, and
``make_source`` builds one of the named sources used by the CLI and config.
"""
from __future__ import annotations

import numpy as np

from bounded_rng.core.sources import DrawSource, GeneratorSource, PCG32Source, Rand31Source

SOURCE_NAMES = ("numpy", "pcg32", "rand31")


def ensure_source(source: DrawSource | None = None) -> DrawSource:
    """Return *source* unchanged when given, else a numpy-backed source.

    When ``source is None`` a new Generator is seeded from the legacy global
    ``np.random`` state, so run-level ``np.random.seed(...)`` remains
    reproducible for call-sites that do not pass an explicit source.
    """
    if source is not None:
        return source
    seed = int(np.random.randint(0, np.iinfo(np.uint32).max, dtype=np.uint32))
    return GeneratorSource(np.random.default_rng(seed))


def make_source(name: str, seed: int | None = None) -> DrawSource:
    key = name.strip().lower()
    if key == "numpy":
        return GeneratorSource.from_seed(seed)
    if key == "pcg32":
        if seed is None:
            seed = int(np.random.default_rng().integers(0, 1 << 62))
        return PCG32Source.seeded(seed)
    if key == "rand31":
        return Rand31Source(seed)
    raise ValueError(f"Unknown source {name!r}; expected one of {', '.join(SOURCE_NAMES)}")

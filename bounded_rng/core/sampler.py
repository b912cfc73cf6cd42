"""Bounded uniform integers from a 32-bit source (Lemire's method).

The product ``n * bound`` of a uniform 32-bit ``n`` spans ``[0, bound * 2**32)``.
Read it as ``bound`` blocks of width ``2**32``: the high word is the block
index (the candidate sample) and the low word is the offset inside the block.
The first ``2**32 % bound`` offsets of every block are rejected, which leaves
the same number of accepted ``n`` per block and therefore an exactly uniform
block index.
"""
from __future__ import annotations

import operator

from bounded_rng.core.sources import DrawSource, as_draw

UINT32_MASK = 0xFFFFFFFF
UINT32_LIMIT = 1 << 32


class ZeroRangeError(ValueError):
    """Raised when a sample is requested from the empty range ``[0, 0)``."""


def _check_bound(bound: int) -> int:
    try:
        bound = operator.index(bound)
    except TypeError:
        raise ValueError(f"Range must be an integer, got {bound!r}") from None
    if bound < 0 or bound >= UINT32_LIMIT:
        raise ValueError(f"Range must fit in 32 unsigned bits, got {bound}")
    return bound


def _checked_draw(draw) -> int:
    n = operator.index(draw())
    if n < 0 or n > UINT32_MASK:
        raise ValueError(f"Source produced a value outside the 32-bit range: {n}")
    return n


def split_product(n: int, bound: int) -> tuple[int, int]:
    """Return ``(high, low)`` words of the 64-bit product ``n * bound``."""
    product = n * bound
    return (product >> 32) & UINT32_MASK, product & UINT32_MASK


def rejection_threshold(bound: int) -> int:
    """Return ``2**32 % bound`` computed as ``(-bound) % bound`` in uint32."""
    if bound == 0:
        raise ZeroRangeError("Rejection threshold is undefined for range 0")
    return ((-bound) & UINT32_MASK) % bound


def sample_bounded(bound: int, source: DrawSource) -> int:
    """Return an integer uniformly distributed over ``[0, bound)``.

    *source* is a :class:`~bounded_rng.core.sources.Uniform32Source` or a
    zero-argument callable returning a uniform 32-bit integer. Draws are
    consumed strictly in order. The rejection loop has no retry cap; the
    expected number of draws is below 2 for every bound and about 1 for
    bounds much smaller than ``2**32``.

    Raises:
        ZeroRangeError: if *bound* is 0. No draw is consumed.
        ValueError: if *bound* or a draw does not fit in 32 unsigned bits.
    """
    bound = _check_bound(bound)
    if bound == 0:
        raise ZeroRangeError("Cannot sample uniformly from the empty range [0, 0)")

    draw = as_draw(source)
    high, low = split_product(_checked_draw(draw), bound)

    # low >= bound implies low >= threshold, so no division is needed.
    if low >= bound:
        return high

    threshold = rejection_threshold(bound)
    while low < threshold:
        high, low = split_product(_checked_draw(draw), bound)
    return high

"""Named bounded reducers, the unbiased sampler plus biased baselines.

The baselines exist so the uniformity check has something to catch: both
map a 32-bit draw straight onto ``[0, bound)`` without rejection, so some
outputs receive one more preimage than others whenever ``bound`` does not
divide ``2**32``.

Only the modulo bias is coarse enough for the chi-square check. Modulo
doubles the weight of the first ``2**32 % bound`` values, so a wide bound
folded into a few bins exposes it. Multiply-shift spreads its extra
preimages evenly across the range with a short period. Folded bins average
that out, and per-value bins would need far more samples than is practical.
Its bias shows up in an exact count of preimages, not in sampling.
"""
from __future__ import annotations

from typing import Callable

from bounded_rng.core.sampler import ZeroRangeError, sample_bounded, split_product
from bounded_rng.core.sources import DrawSource, as_draw

Reducer = Callable[[int, DrawSource], int]


def multiply_shift(bound: int, source: DrawSource) -> int:
    if bound == 0:
        raise ZeroRangeError("Cannot sample uniformly from the empty range [0, 0)")
    high, _low = split_product(as_draw(source)(), bound)
    return high


def modulo(bound: int, source: DrawSource) -> int:
    if bound == 0:
        raise ZeroRangeError("Cannot sample uniformly from the empty range [0, 0)")
    return as_draw(source)() % bound


_REDUCER_BY_NAME: dict[str, Reducer] = {
    "lemire": sample_bounded,
    "multiply-shift": multiply_shift,
    "modulo": modulo,
}

REDUCER_NAMES = tuple(_REDUCER_BY_NAME)


def resolve_reducer(name: str) -> Reducer:
    key = name.strip().lower()
    if key not in _REDUCER_BY_NAME:
        raise ValueError(f"Unknown method {name!r}; expected one of {', '.join(REDUCER_NAMES)}")
    return _REDUCER_BY_NAME[key]

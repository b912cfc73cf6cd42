"""Uniform 32-bit sources consumed by the bounded sampler.

The sampler only needs ``next_u32()``. Anything with that method, or a bare
zero-argument callable returning a 32-bit integer, can be passed in. The
concrete sources below cover a numpy ``Generator``, a pure-Python PCG32, the
``rand()``-style 31-bit composition and scripted replay for tests.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Iterable, Protocol, Union, runtime_checkable

import numpy as np

_UINT32_MASK = 0xFFFFFFFF
_UINT64_MASK = 0xFFFFFFFFFFFFFFFF
_PCG_MULTIPLIER = 6364136223846793005


@runtime_checkable
class Uniform32Source(Protocol):
    def next_u32(self) -> int:
        ...


DrawSource = Union[Uniform32Source, Callable[[], int]]


class SourceExhaustedError(RuntimeError):
    """Raised when a scripted source has no values left to replay."""


def as_draw(source: DrawSource) -> Callable[[], int]:
    """Normalise *source* into a zero-argument draw callable."""
    next_u32 = getattr(source, "next_u32", None)
    if callable(next_u32):
        return next_u32
    if callable(source):
        return source
    raise TypeError(f"Expected a Uniform32Source or callable, got {type(source).__name__}")


class GeneratorSource:
    """Hand out 32-bit draws from a numpy Generator, one block at a time."""

    def __init__(self, rng: np.random.Generator, block_size: int = 4096) -> None:
        if block_size <= 0:
            raise ValueError(f"block_size must be positive, got {block_size}")
        self._rng = rng
        self._block_size = int(block_size)
        self._block: list[int] = []
        self._cursor = 0

    @classmethod
    def from_seed(cls, seed: int | None = None, block_size: int = 4096) -> "GeneratorSource":
        return cls(np.random.default_rng(seed), block_size=block_size)

    def _refill(self) -> None:
        values = self._rng.integers(0, _UINT32_MASK + 1, size=self._block_size, dtype=np.uint64)
        self._block = values.tolist()
        self._cursor = 0

    def next_u32(self) -> int:
        if self._cursor >= len(self._block):
            self._refill()
        value = self._block[self._cursor]
        self._cursor += 1
        return value


@dataclass
class PCG32Source:
    """PCG32 (XSH-RR 64/32) generator.

    ``state`` and ``inc`` are the raw 64-bit registers; use :meth:`seeded` for
    the usual ``(initstate, initseq)`` seeding.
    """

    state: int
    inc: int = 1442695040888963407

    @classmethod
    def seeded(cls, initstate: int, initseq: int = 54) -> "PCG32Source":
        source = cls(state=0, inc=((initseq << 1) | 1) & _UINT64_MASK)
        source.next_u32()
        source.state = (source.state + initstate) & _UINT64_MASK
        source.next_u32()
        return source

    def next_u32(self) -> int:
        oldstate = self.state & _UINT64_MASK
        self.state = (oldstate * _PCG_MULTIPLIER + (self.inc | 1)) & _UINT64_MASK
        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & _UINT32_MASK
        rot = oldstate >> 59
        return ((xorshifted >> rot) | (xorshifted << ((-rot) & 31))) & _UINT32_MASK


class Rand31Source:
    """Build 32-bit draws from a generator that only yields 31 bits per call.

    Bits 0-30 come from one call and bit 31 from the lowest bit of the next,
    the way a C ``rand()`` with ``RAND_MAX == 2**31 - 1`` is stretched to a
    full word.
    """

    def __init__(self, seed: int | None = None, rand31: Callable[[], int] | None = None) -> None:
        if rand31 is None:
            generator = random.Random(seed)
            rand31 = lambda: generator.getrandbits(31)  # noqa: E731
        self._rand31 = rand31

    def next_u32(self) -> int:
        result = self._rand31() & 0x7FFFFFFF
        result |= (self._rand31() & 1) << 31
        return result


class ScriptedSource:
    """Replay a fixed sequence of 32-bit values and count the draws."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values = tuple(int(value) for value in values)
        self.draws = 0

    def next_u32(self) -> int:
        if self.draws >= len(self.values):
            raise SourceExhaustedError(f"Scripted source exhausted after {self.draws} draws")
        value = self.values[self.draws]
        self.draws += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self.values) - self.draws


class CountingSource:
    """Pass draws through from *inner* unchanged while counting them."""

    def __init__(self, inner: DrawSource) -> None:
        self._draw = as_draw(inner)
        self.draws = 0

    def next_u32(self) -> int:
        self.draws += 1
        return self._draw()

"""Small shared utilities: PRNG, running average, hash table, integer helpers."""

from __future__ import annotations

import time
from typing import Callable, Generic, TypeVar

__all__ = [
    "PRNG",
    "RunningAverage",
    "HashTable",
    "sigmoid",
    "mul_hi64",
    "now",
]

_MASK64 = (1 << 64) - 1
_MASK32 = (1 << 32) - 1

T = TypeVar("T")


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def now() -> int:
    """Milliseconds from a monotonic clock."""
    return time.monotonic_ns() // 1_000_000


class PRNG:
    """xorshift64star pseudo-random number generator with a 64-bit state."""

    _MULTIPLIER = 2685821657736338717

    def __init__(self, seed: int) -> None:
        seed &= _MASK64
        if not seed:
            raise ValueError("PRNG seed must be non-zero")
        self._state = seed

    def rand64(self) -> int:
        """Return the next 64-bit unsigned value."""
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & _MASK64
        s ^= s >> 27
        self._state = s
        return (s * self._MULTIPLIER) & _MASK64

    def sparse_rand(self) -> int:
        """Return a 64-bit value with about one bit in eight set."""
        return self.rand64() & self.rand64() & self.rand64()


class RunningAverage:
    """Integer running average of a series of values."""

    PERIOD = 4096
    RESOLUTION = 1024

    def __init__(self) -> None:
        self._average = 0

    def set(self, p: int, q: int) -> None:
        """Reset the average to the rational value p / q."""
        self._average = _tdiv(p * self.PERIOD * self.RESOLUTION, q)

    def update(self, v: int) -> None:
        """Fold the value v into the average."""
        self._average = self.RESOLUTION * v + _tdiv(
            (self.PERIOD - 1) * self._average, self.PERIOD
        )

    def is_greater(self, a: int, b: int) -> bool:
        """True if the average is strictly greater than a / b."""
        return b * self._average > a * (self.PERIOD * self.RESOLUTION)

    def value(self) -> int:
        """The average rounded toward zero."""
        return _tdiv(self._average, self.PERIOD * self.RESOLUTION)


class HashTable(Generic[T]):
    """Fixed-size table of entries indexed by the low bits of a key."""

    def __init__(self, factory: Callable[[], T], size: int) -> None:
        if size <= 0 or size & (size - 1):
            raise ValueError("HashTable size must be a positive power of two")
        self._size = size
        self._table = [factory() for _ in range(size)]

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, key: int) -> T:
        return self._table[(key & _MASK32) & (self._size - 1)]


def sigmoid(t: int, x0: int, y0: int, c: int, p: int, q: int) -> int:
    """Integer sigmoid centred on (x0, y0) with amplitude p / q and slope set by c."""
    if c <= 0:
        raise ValueError("c must be positive")
    if q == 0:
        raise ValueError("q must be non-zero")
    d = t - x0
    return y0 + _tdiv(p * d, q * (abs(d) + c))


def mul_hi64(a: int, b: int) -> int:
    """High 64 bits of the 128-bit product of two unsigned 64-bit values."""
    return ((a & _MASK64) * (b & _MASK64)) >> 64
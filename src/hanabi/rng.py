"""Seeded pseudo-random generator.

Mulberry32: 32-bit integer arithmetic only, so a given seed yields the same
sequence on every platform and in every implementation of the algorithm.
"""

from __future__ import annotations

_MASK = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


class DeterministicGenerator:
    """Infinite stream of floats in [0, 1) driven by an integer seed."""

    def __init__(self, seed: int):
        self.seed = seed
        self._state = seed & _MASK

    def next_float(self) -> float:
        self._state = (self._state + _INCREMENT) & _MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / _TWO_POW_32

    def randrange(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        if n <= 0:
            raise ValueError(f"randrange() needs a positive bound, got {n}")
        return int(self.next_float() * n)

    def choice(self, items):
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.randrange(len(items))]

    def __iter__(self) -> "DeterministicGenerator":
        return self

    def __next__(self) -> float:
        return self.next_float()

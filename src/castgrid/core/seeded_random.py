"""Seeded pseudo-random stream used for the daily grid.

The digest and the stream are fixed algorithms, not ``random.Random``, so a
date key produces the same draws in every process and on every platform:

- ``hash_string``: 32-bit polynomial rolling hash, ``h = h * 31 + ord(ch)``
  over the code points of the seed, starting from 0.
- ``SeededRandom``: mulberry32. The only state is one 32-bit counter.
- ``SeededRandom.shuffle``: Fisher-Yates from the last index down to 1,
  swapping ``i`` with ``floor(next_float() * (i + 1))``; ``n - 1`` draws.
"""

from __future__ import annotations

from typing import List, TypeVar

T = TypeVar("T")

MASK_32 = 0xFFFFFFFF
_GOLDEN_STEP = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def hash_string(seed: str) -> int:
    """Return the unsigned 32-bit rolling hash of ``seed``."""

    value = 0
    for char in seed:
        value = (value * 31 + ord(char)) & MASK_32
    return value


def _imul(left: int, right: int) -> int:
    return (left * right) & MASK_32


class SeededRandom:
    """Deterministic float stream in ``[0, 1)``."""

    def __init__(self, seed: int) -> None:
        self._state = seed & MASK_32

    @classmethod
    def from_text(cls, seed: str) -> "SeededRandom":
        return cls(hash_string(seed))

    def next_float(self) -> float:
        self._state = (self._state + _GOLDEN_STEP) & MASK_32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK_32
        return ((t ^ (t >> 14)) & MASK_32) / _TWO_POW_32

    def next_index(self, size: int) -> int:
        """Draw a uniform index in ``[0, size)``."""

        return int(self.next_float() * size)

    def shuffle(self, items: List[T]) -> List[T]:
        """Shuffle ``items`` in place and return the same list."""

        for i in range(len(items) - 1, 0, -1):
            j = self.next_index(i + 1)
            items[i], items[j] = items[j], items[i]
        return items

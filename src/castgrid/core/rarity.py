"""Popularity-to-rarity scoring (core domain)."""

from __future__ import annotations

import math
from typing import Iterable

from castgrid.core.models import Movie

MAX_RARITY = 100
MIN_RARITY = 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, like browser ``Math.round``."""

    return int(math.floor(value + 0.5))


def calculate_rarity(popularity: float) -> int:
    """Map a movie popularity to a 0..100 rarity score.

    Unknown or zero popularity is maximally rare. Otherwise the score drops by
    40 points per decade of ``popularity + 1`` and is clamped to the range.
    """

    if popularity <= 0:
        return MAX_RARITY
    rarity = MAX_RARITY - 40 * math.log10(popularity + 1)
    return round_half_up(max(MIN_RARITY, min(MAX_RARITY, rarity)))


def total_rarity(movies: Iterable[Movie]) -> int:
    return sum(calculate_rarity(movie.popularity) for movie in movies)

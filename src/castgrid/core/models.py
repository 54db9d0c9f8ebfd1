"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to the JSON dataset layout or the storage schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class Actor:
    """A performer that can be placed on a row or column of the grid."""

    id: int
    name: str
    profile_path: Optional[str] = None


@dataclass(frozen=True)
class Movie:
    """A movie that can connect two actors."""

    id: int
    title: str
    popularity: float
    poster_path: Optional[str] = None
    release_year: int = 0


@dataclass(frozen=True)
class Corpus:
    """The full, read-only actor/movie dataset.

    ``actor_movies`` and ``movie_actors`` keep the dataset order of ids, since
    shared-movie listings and the degenerate fallback depend on it.
    """

    actors: Tuple[Actor, ...]
    movies: Tuple[Movie, ...]
    actor_movies: Mapping[int, Tuple[int, ...]]
    movie_actors: Mapping[int, Tuple[int, ...]]


@dataclass(frozen=True)
class DailyGrid:
    """Three row actors and three column actors for one date key."""

    row_actors: Tuple[Actor, ...]
    col_actors: Tuple[Actor, ...]
    date: str
    puzzle_number: int
    strategy: str


@dataclass(frozen=True)
class GameScore:
    correct: int
    rarity: int


@dataclass(frozen=True)
class CellResult:
    """Outcome of a single guess."""

    movie: Optional[Movie]
    correct: bool


@dataclass(frozen=True)
class PlayerStats:
    """Aggregate counters persisted across days."""

    games_played: int = 0
    games_won: int = 0
    current_streak: int = 0
    max_streak: int = 0
    total_rarity: int = 0


@dataclass(frozen=True)
class SavedGame:
    """Serializable per-day game state, keyed by date in the game-state store."""

    grid: Tuple[Tuple[Optional[int], ...], ...]
    used_movies: Tuple[int, ...] = field(default_factory=tuple)
    guesses_remaining: int = 9
    stats_recorded: bool = False

"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the grid generator expects so settings and tests can build it safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

# Marvel Cinematic Universe releases. Grids with too many actors from this
# pool all connect through the same handful of movies.
MCU_MOVIE_IDS: FrozenSet[int] = frozenset(
    {
        10138,  # Iron Man
        1726,  # Iron Man 2
        68721,  # Iron Man 3
        10195,  # Thor
        76338,  # Thor: The Dark World
        284053,  # Thor: Ragnarok
        616037,  # Thor: Love and Thunder
        1771,  # Captain America: The First Avenger
        100402,  # Captain America: The Winter Soldier
        271110,  # Captain America: Civil War
        24428,  # The Avengers
        99861,  # Avengers: Age of Ultron
        299536,  # Avengers: Infinity War
        299534,  # Avengers: Endgame
        118340,  # Guardians of the Galaxy
        283995,  # Guardians of the Galaxy Vol. 2
        447365,  # Guardians of the Galaxy Vol. 3
        299537,  # Captain Marvel
        505642,  # Black Panther
        284054,  # Black Panther: Wakanda Forever
        429617,  # Spider-Man: Homecoming
        315635,  # Spider-Man: Homecoming (alt)
        634649,  # Spider-Man: No Way Home
        497698,  # Black Widow
        566525,  # Shang-Chi
        524434,  # Eternals
        453395,  # Doctor Strange
        284052,  # Doctor Strange in the Multiverse of Madness
        533535,  # Deadpool & Wolverine
    }
)


@dataclass(frozen=True)
class PoolStep:
    """Pool size used up to and including ``max_puzzle``."""

    max_puzzle: int
    size: int


# Week 1 draws from the 30 best-connected actors, widening over two months.
DEFAULT_POOL_SCHEDULE: Tuple[PoolStep, ...] = (
    PoolStep(max_puzzle=7, size=30),
    PoolStep(max_puzzle=14, size=60),
    PoolStep(max_puzzle=30, size=100),
    PoolStep(max_puzzle=60, size=150),
)

DEFAULT_CURATED_ROWS: Tuple[str, ...] = ("Matt Damon", "Brad Pitt", "Robert Downey Jr.")
DEFAULT_CURATED_COLS: Tuple[str, ...] = ("Samuel L. Jackson", "Chris Evans", "Scarlett Johansson")


@dataclass(frozen=True)
class FranchiseConfig:
    """Saturation cap for actors heavily tied to one franchise."""

    movie_ids: FrozenSet[int] = MCU_MOVIE_IDS
    heavy_threshold: int = 3
    max_heavy_actors: int = 2


@dataclass(frozen=True)
class GeneratorConfig:
    """Tuning for every tier of the daily grid search."""

    max_attempts: int = 500
    reshuffle_every: int = 50
    pool_schedule: Tuple[PoolStep, ...] = DEFAULT_POOL_SCHEDULE
    # None means the whole corpus once the schedule runs out.
    final_pool_size: Optional[int] = None
    franchise: FranchiseConfig = FranchiseConfig()
    curated_rows: Tuple[str, ...] = DEFAULT_CURATED_ROWS
    curated_cols: Tuple[str, ...] = DEFAULT_CURATED_COLS
    exhaustive_top_n: int = 30

    def __post_init__(self) -> None:
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {self.max_attempts}")
        if self.reshuffle_every <= 0:
            raise ValueError(f"reshuffle_every must be > 0, got {self.reshuffle_every}")
        if self.exhaustive_top_n < 0:
            raise ValueError(f"exhaustive_top_n must be >= 0, got {self.exhaustive_top_n}")

        previous: Optional[PoolStep] = None
        for step in self.pool_schedule:
            if step.size <= 0:
                raise ValueError(f"Pool size must be positive, got {step.size}")
            if previous is not None and (
                step.max_puzzle <= previous.max_puzzle or step.size < previous.size
            ):
                raise ValueError("pool_schedule must grow with the puzzle number")
            previous = step
        if (
            previous is not None
            and self.final_pool_size is not None
            and self.final_pool_size < previous.size
        ):
            raise ValueError("final_pool_size must not shrink the last scheduled pool")

"""Daily game session rules (core domain).

A session tracks one player's board for one ``DailyGrid``. It never touches
storage itself; callers restore from and persist ``SavedGame`` values.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from castgrid.core.corpus_index import CorpusIndex
from castgrid.core.models import CellResult, DailyGrid, GameScore, Movie, SavedGame
from castgrid.core.rarity import total_rarity

LOGGER = logging.getLogger(__name__)

GRID_SIZE = 3
INITIAL_GUESSES = 9


class GuessRejected(ValueError):
    """Raised when a guess targets a cell that cannot take one."""


def empty_board() -> List[List[Optional[Movie]]]:
    return [[None] * GRID_SIZE for _ in range(GRID_SIZE)]


class GameSession:
    """Board, remaining guesses and used movies for one day."""

    def __init__(
        self,
        grid: DailyGrid,
        index: CorpusIndex,
        saved: Optional[SavedGame] = None,
    ) -> None:
        self._grid = grid
        self._index = index
        self._board = empty_board()
        self._used_movies: set[int] = set()
        self._guesses_remaining = INITIAL_GUESSES
        self.stats_recorded = False
        if saved is not None:
            self._restore(saved)

    def _restore(self, saved: SavedGame) -> None:
        for row, cells in enumerate(saved.grid[:GRID_SIZE]):
            for col, movie_id in enumerate(cells[:GRID_SIZE]):
                if movie_id is None:
                    continue
                # Ids missing from the current corpus come back as empty cells.
                self._board[row][col] = self._index.get_movie(movie_id)
        self._used_movies = set(saved.used_movies)
        self._guesses_remaining = saved.guesses_remaining
        self.stats_recorded = saved.stats_recorded

    @property
    def grid(self) -> DailyGrid:
        return self._grid

    @property
    def board(self) -> List[List[Optional[Movie]]]:
        return [list(row) for row in self._board]

    @property
    def guesses_remaining(self) -> int:
        return self._guesses_remaining

    @property
    def used_movies(self) -> frozenset[int]:
        return frozenset(self._used_movies)

    @property
    def is_complete(self) -> bool:
        all_filled = all(cell is not None for row in self._board for cell in row)
        return all_filled or self._guesses_remaining <= 0

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
            raise GuessRejected(f"Cell ({row}, {col}) is outside the grid")

    def valid_movies(self, row: int, col: int) -> List[Movie]:
        """Unused movies that would fill the cell, most popular first."""

        self._check_cell(row, col)
        row_actor = self._grid.row_actors[row]
        col_actor = self._grid.col_actors[col]
        movies = [
            movie
            for movie in (
                self._index.get_movie(movie_id)
                for movie_id in self._index.shared_movies(row_actor.id, col_actor.id)
            )
            if movie is not None and movie.id not in self._used_movies
        ]
        movies.sort(key=lambda movie: -movie.popularity)
        return movies

    def guess(self, row: int, col: int, movie_id: int) -> CellResult:
        """Apply one guess. Wrong answers cost a guess; right ones fill the cell."""

        self._check_cell(row, col)
        if self.is_complete:
            raise GuessRejected("The game is already complete")
        if self._board[row][col] is not None:
            raise GuessRejected(f"Cell ({row}, {col}) is already filled")

        movie = self._index.get_movie(movie_id)
        row_actor = self._grid.row_actors[row]
        col_actor = self._grid.col_actors[col]
        correct = (
            movie is not None
            and movie_id not in self._used_movies
            and movie_id in self._index.shared_movies(row_actor.id, col_actor.id)
        )

        if correct:
            self._board[row][col] = movie
            self._used_movies.add(movie_id)
        else:
            self._guesses_remaining -= 1
        LOGGER.debug(
            "Guess %s at (%s, %s) for %s: %s",
            movie_id,
            row,
            col,
            self._grid.date,
            "correct" if correct else "wrong",
        )
        return CellResult(movie=movie, correct=correct)

    def score(self) -> GameScore:
        filled = [cell for row in self._board for cell in row if cell is not None]
        return GameScore(correct=len(filled), rarity=total_rarity(filled))

    def to_saved(self) -> SavedGame:
        return SavedGame(
            grid=tuple(
                tuple(cell.id if cell is not None else None for cell in row) for row in self._board
            ),
            used_movies=tuple(sorted(self._used_movies)),
            guesses_remaining=self._guesses_remaining,
            stats_recorded=self.stats_recorded,
        )

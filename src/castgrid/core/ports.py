"""Ports (interfaces) used around the core.

Ports define the minimal contracts for observability and game-state storage
so the generator can be reused with different backends.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from castgrid.core.models import DailyGrid, PlayerStats, SavedGame


class GenerationObserver(Protocol):
    """Receives generator outcomes that callers may want to surface."""

    def tier_exhausted(self, date_key: str, strategy: str) -> None:
        ...

    def grid_generated(self, grid: DailyGrid) -> None:
        ...

    def generation_failed(self, date_key: str) -> None:
        ...


class GameStateStore(Protocol):
    """Per-day game state and running statistics.

    The generator never touches this store; the game layer reads saved state
    before a session and writes it back after each move.
    """

    def get_game(self, date_key: str) -> Optional[SavedGame]:
        ...

    def set_game(self, date_key: str, saved: SavedGame) -> None:
        ...

    def get_stats(self) -> PlayerStats:
        ...

    def set_stats(self, stats: PlayerStats) -> None:
        ...

    def list_game_dates(self) -> List[str]:
        ...

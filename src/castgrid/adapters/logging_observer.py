"""Generation observer that reports through the standard logging tree."""

from __future__ import annotations

import logging

from castgrid.core.models import DailyGrid

LOGGER = logging.getLogger(__name__)


class LoggingGenerationObserver:
    """Log generator outcomes and count fall-throughs for the CLI summary."""

    def __init__(self, logger: logging.Logger = LOGGER) -> None:
        self._logger = logger
        self.exhausted: list[tuple[str, str]] = []
        self.failures: list[str] = []

    def tier_exhausted(self, date_key: str, strategy: str) -> None:
        self.exhausted.append((date_key, strategy))
        self._logger.info("Fallback taken for %s after %s search", date_key, strategy)

    def grid_generated(self, grid: DailyGrid) -> None:
        self._logger.info(
            "Puzzle #%s (%s): rows=%s cols=%s",
            grid.puzzle_number,
            grid.date,
            ", ".join(actor.name for actor in grid.row_actors),
            ", ".join(actor.name for actor in grid.col_actors),
        )

    def generation_failed(self, date_key: str) -> None:
        # Recoverable: the degenerate grid is still served to the player.
        self.failures.append(date_key)
        self._logger.error("Degenerate grid served for %s", date_key)

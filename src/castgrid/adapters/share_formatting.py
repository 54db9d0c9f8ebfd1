"""Shared text formatting for finished games.

Keeping formatting here prevents drift between the CLI commands and keeps the
share text identical wherever it is produced.
"""

from __future__ import annotations

from typing import Optional, Sequence

from castgrid.core.models import GameScore, PlayerStats
from castgrid.core.numbering import DateLike, puzzle_number, resolve_date_key
from castgrid.core.stats import average_rarity, win_rate

FILLED = "\U0001F7E9"
EMPTY = "\U0001F7E5"
DEFAULT_TITLE = "Cast Grid - Movies \U0001F3AC"


def format_board(cells: Sequence[Sequence[Optional[object]]]) -> str:
    """One line of filled/empty glyphs per row."""

    return "\n".join("".join(FILLED if cell else EMPTY for cell in row) for row in cells)


def share_text(
    cells: Sequence[Sequence[Optional[object]]],
    score: GameScore,
    date: DateLike,
    title: str = DEFAULT_TITLE,
    share_url: Optional[str] = None,
) -> str:
    """Render the spoiler-free summary of a finished board."""

    lines = [
        f"{title} #{puzzle_number(date)}",
        resolve_date_key(date),
        "",
        format_board(cells),
        "",
        f"Score: {score.correct}/9",
        f"Rarity: {score.rarity}",
    ]
    if share_url:
        lines.extend(["", f"Play at: {share_url}"])
    return "\n".join(lines)


def format_stats(stats: PlayerStats) -> str:
    lines = [
        f"Played: {stats.games_played}",
        f"Win %: {win_rate(stats)}",
        f"Streak: {stats.current_streak}",
        f"Max: {stats.max_streak}",
        f"Average rarity: {average_rarity(stats)}",
    ]
    return "\n".join(lines)

"""Running player statistics (core domain)."""

from __future__ import annotations

from castgrid.core.models import GameScore, PlayerStats
from castgrid.core.rarity import round_half_up

WINNING_SCORE = 9


def record_result(stats: PlayerStats, score: GameScore) -> PlayerStats:
    """Return the stats after one finished game. Only a full board is a win."""

    won = score.correct == WINNING_SCORE
    streak = stats.current_streak + 1 if won else 0
    return PlayerStats(
        games_played=stats.games_played + 1,
        games_won=stats.games_won + (1 if won else 0),
        current_streak=streak,
        max_streak=max(stats.max_streak, streak),
        total_rarity=stats.total_rarity + score.rarity,
    )


def win_rate(stats: PlayerStats) -> int:
    if stats.games_played <= 0:
        return 0
    return round_half_up(stats.games_won / stats.games_played * 100)


def average_rarity(stats: PlayerStats) -> int:
    if stats.games_played <= 0:
        return 0
    return round_half_up(stats.total_rarity / stats.games_played)

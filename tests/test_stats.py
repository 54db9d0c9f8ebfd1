from __future__ import annotations

from castgrid.core.models import GameScore, PlayerStats
from castgrid.core.stats import average_rarity, record_result, win_rate


def test_win_extends_streak() -> None:
    stats = record_result(PlayerStats(), GameScore(correct=9, rarity=300))
    stats = record_result(stats, GameScore(correct=9, rarity=100))

    assert stats == PlayerStats(
        games_played=2,
        games_won=2,
        current_streak=2,
        max_streak=2,
        total_rarity=400,
    )


def test_loss_resets_streak_but_keeps_max() -> None:
    stats = PlayerStats(games_played=3, games_won=3, current_streak=3, max_streak=3, total_rarity=90)
    stats = record_result(stats, GameScore(correct=8, rarity=40))

    assert stats.current_streak == 0
    assert stats.max_streak == 3
    assert stats.games_won == 3
    assert stats.games_played == 4
    assert stats.total_rarity == 130


def test_rates_are_zero_without_games() -> None:
    assert win_rate(PlayerStats()) == 0
    assert average_rarity(PlayerStats()) == 0


def test_rates_round_half_up() -> None:
    stats = PlayerStats(games_played=8, games_won=1, total_rarity=20)
    assert win_rate(stats) == 13  # 12.5
    assert average_rarity(stats) == 3  # 2.5

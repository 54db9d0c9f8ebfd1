from __future__ import annotations

from castgrid.core.models import Movie
from castgrid.core.rarity import calculate_rarity, round_half_up, total_rarity


def test_zero_and_negative_popularity_are_maximally_rare() -> None:
    assert calculate_rarity(0) == 100
    assert calculate_rarity(-3.5) == 100


def test_known_values() -> None:
    # 100 - 40 * log10(10) = 60
    assert calculate_rarity(9) == 60
    # 100 - 40 * log10(100) = 20
    assert calculate_rarity(99) == 20
    # Very popular movies clamp at zero.
    assert calculate_rarity(1_000_000) == 0


def test_small_popularity_is_continuous_with_zero() -> None:
    assert calculate_rarity(0.0001) == 100


def test_rarity_is_bounded_and_non_increasing() -> None:
    previous = 100
    for step in range(0, 5000):
        value = calculate_rarity(step * 0.37)
        assert 0 <= value <= 100
        assert value <= previous
        previous = value


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_total_rarity_sums_cells() -> None:
    movies = [
        Movie(id=1, title="A", popularity=9),
        Movie(id=2, title="B", popularity=0),
    ]
    assert total_rarity(movies) == 160

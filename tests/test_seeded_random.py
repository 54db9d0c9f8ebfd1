from __future__ import annotations

from castgrid.core.seeded_random import MASK_32, SeededRandom, hash_string


def test_hash_string_is_polynomial_rolling_hash() -> None:
    assert hash_string("") == 0
    assert hash_string("a") == 97
    assert hash_string("ab") == 97 * 31 + 98


def test_hash_string_wraps_to_32_bits() -> None:
    value = hash_string("2026-01-29" * 20)
    assert 0 <= value <= MASK_32

    expected = 0
    for char in "2026-01-29":
        expected = (expected * 31 + ord(char)) % 2**32
    assert hash_string("2026-01-29") == expected


def test_streams_from_same_seed_match() -> None:
    first = SeededRandom.from_text("2026-02-14")
    second = SeededRandom.from_text("2026-02-14")
    assert [first.next_float() for _ in range(50)] == [second.next_float() for _ in range(50)]


def test_streams_from_different_seeds_differ() -> None:
    first = SeededRandom.from_text("2026-02-14")
    second = SeededRandom.from_text("2026-02-15")
    assert [first.next_float() for _ in range(10)] != [second.next_float() for _ in range(10)]


def test_next_float_stays_in_unit_interval() -> None:
    stream = SeededRandom(0)
    for _ in range(2000):
        value = stream.next_float()
        assert 0.0 <= value < 1.0


def test_shuffle_is_deterministic_and_in_place() -> None:
    items = list(range(10))
    result = SeededRandom(1234).shuffle(items)
    assert result is items
    assert sorted(items) == list(range(10))
    assert items == SeededRandom(1234).shuffle(list(range(10)))


def test_shuffle_consumes_one_draw_per_swap() -> None:
    shuffled = SeededRandom(99)
    shuffled.shuffle(list("abcde"))

    reference = SeededRandom(99)
    for _ in range(4):
        reference.next_float()

    assert shuffled.next_float() == reference.next_float()


def test_shuffle_swaps_from_the_end() -> None:
    stream = SeededRandom(7)
    draws = [stream.next_float() for _ in range(3)]

    expected = ["a", "b", "c", "d"]
    for i, draw in zip(range(3, 0, -1), draws):
        j = int(draw * (i + 1))
        expected[i], expected[j] = expected[j], expected[i]

    assert SeededRandom(7).shuffle(["a", "b", "c", "d"]) == expected


def test_shuffle_of_short_sequences_draws_nothing() -> None:
    stream = SeededRandom(5)
    assert stream.shuffle([]) == []
    assert stream.shuffle(["only"]) == ["only"]
    assert stream.next_float() == SeededRandom(5).next_float()

"""Shared fixtures for the card pool simulator tests."""
from typing import Iterable

import pytest

from cardsim.core.pool import CardPool
from cardsim.core.random_source import SeededRandomSource, UniformRandomSource


class ScriptedRandomSource(UniformRandomSource):
    """Replays queued range draws; every other draw is zero.

    Constant shuffle keys keep the deck in load order, since the pool's
    reshuffle is a stable sort.
    """

    def __init__(self, ranges: Iterable[int] = ()):
        self.ranges = list(ranges)
        self.range_calls = 0

    def next_uint32(self) -> int:
        return 0

    def fill_bytes(self, count: int) -> bytes:
        return bytes(count)

    def next_in_range(self, lo: int, hi: int) -> int:
        self.range_calls += 1
        if self.ranges:
            value = self.ranges.pop(0)
            assert lo <= value < hi, f"scripted value {value} outside [{lo}, {hi})"
            return value
        return lo

    def spawn(self, key: int) -> "ScriptedRandomSource":
        return self


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandomSource


@pytest.fixture
def seeded_rng():
    return SeededRandomSource(1234)


@pytest.fixture
def standard_deck():
    """Sixty cards: four each of 1..10 and four each of -1..-5."""
    return [value for value in range(1, 11) for _ in range(4)] + \
           [value for value in range(-1, -6, -1) for _ in range(4)]


@pytest.fixture
def deck_file(tmp_path, standard_deck):
    path = tmp_path / "cards.csv"
    path.write_text(",".join(str(card) for card in standard_deck))
    return path


@pytest.fixture
def seeded_pool(standard_deck, seeded_rng):
    return CardPool.from_cards(standard_deck, seeded_rng)

"""Card pool that owns the canonical deck and deals per-game hands."""
from pathlib import Path
from typing import Iterable, List, Optional, Union
import logging
import threading

from .cards import Card, parse_deck
from .random_source import CryptoRandomSource, UniformRandomSource


logger = logging.getLogger(__name__)


class CardPool:
    """Loads the deck once and hands out freshly shuffled deals.

    Dealing and reshuffling happen in one critical section, so a pool can
    be shared by every game running in the same process.
    """

    def __init__(
        self,
        deck_path: Union[str, Path] = "cards.csv",
        rng: Optional[UniformRandomSource] = None
    ):
        self.deck_path = Path(deck_path)
        self.rng = rng or CryptoRandomSource()
        self._sorted_cards: tuple = ()
        self._cards: List[Card] = []
        self._lock = threading.Lock()

    @classmethod
    def from_cards(
        cls,
        cards: Iterable[Card],
        rng: Optional[UniformRandomSource] = None
    ) -> "CardPool":
        """Build an initialized pool from in-memory cards."""
        pool = cls(rng=rng)
        pool._load(list(cards))
        return pool

    def initialize(self) -> int:
        """Read the deck file and shuffle it.

        Raises:
            OSError: If the deck file cannot be read.
        """
        text = self.deck_path.read_text()
        cards, coerced = parse_deck(text)
        if coerced:
            logger.warning(
                "%d malformed token(s) in %s were read as 0-value cards",
                coerced, self.deck_path
            )
        self._load(cards)
        logger.info("Found %d valid cards.", self.card_count)
        return self.card_count

    def _load(self, cards: List[Card]):
        self._sorted_cards = tuple(cards)
        with self._lock:
            self._shuffle()

    @property
    def card_count(self) -> int:
        return len(self._sorted_cards)

    @property
    def cards(self) -> tuple:
        """The canonical deck in load order."""
        return self._sorted_cards

    def deal_hands(self, player_count: int) -> List[List[Card]]:
        """Distribute the whole deck to `player_count` seats.

        Cards go to seats in descending order starting from a random seat,
        wrapping from seat 0 to the last seat.
        """
        if player_count < 1:
            raise ValueError(f"Cannot deal to {player_count} players")

        hands: List[List[Card]] = [[] for _ in range(player_count)]
        with self._lock:
            seat = self.rng.next_in_range(0, player_count)
            logger.debug("Dealing cards starting from player #%d", seat)
            for card in self._cards:
                if seat < 0:
                    seat = player_count - 1
                hands[seat].append(card)
                seat -= 1
            self._shuffle()
        return hands

    def _shuffle(self):
        # Stable sort on fresh random keys; caller holds the lock
        keyed = [(self.rng.next_uint32(), card) for card in self._sorted_cards]
        keyed.sort(key=lambda pair: pair[0])
        self._cards = [card for _, card in keyed]

    def spawn(self, key: int) -> "CardPool":
        """Copy the deck into a pool with an independent random stream."""
        pool = CardPool(self.deck_path, self.rng.spawn(key))
        pool._load(list(self._sorted_cards))
        return pool

    def __getstate__(self):
        state = self.__dict__.copy()
        del state["_lock"]
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._lock = threading.Lock()

    def __repr__(self):
        return f"CardPool({self.card_count} cards from {self.deck_path})"

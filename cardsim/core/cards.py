"""Card values, deck parsing and per-player hands."""
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional, Tuple


# Cards are plain ints: positive values award points, negative values penalize.
Card = int


def is_award(card: Card) -> bool:
    """Award cards add their value to the player's own score.

    Anything else, a coerced zero included, is held as a penalty card.
    """
    return card > 0


def parse_card(token: str) -> Optional[Card]:
    """Parse one deck token, returning None if it is not an integer."""
    try:
        return int(token.strip())
    except ValueError:
        return None


def parse_deck(text: str) -> Tuple[List[Card], int]:
    """Parse a comma-separated deck.

    Malformed tokens become 0-value cards rather than being dropped.

    Returns:
        The parsed cards and the number of tokens that had to be coerced.
    """
    cards = []
    coerced = 0
    for token in text.split(","):
        card = parse_card(token)
        if card is None:
            card = 0
            coerced += 1
        cards.append(card)
    return cards, coerced


@dataclass
class Hand:
    """A player's cards split into the undealt queue and the two held piles."""
    queued: Deque[Card] = field(default_factory=deque)
    positive: List[Card] = field(default_factory=list)
    negative: List[Card] = field(default_factory=list)

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> "Hand":
        return cls(queued=deque(cards))

    def draw(self) -> Optional[Card]:
        """Move the next queued card into the pile matching its sign."""
        if not self.queued:
            return None
        card = self.queued.popleft()
        if is_award(card):
            self.positive.append(card)
        else:
            self.negative.append(card)
        return card

    @property
    def held_count(self) -> int:
        return len(self.positive) + len(self.negative)

    @property
    def total_count(self) -> int:
        """Cards in all three partitions."""
        return self.held_count + len(self.queued)

    def __str__(self):
        return f"{self.positive} and {self.negative} ({len(self.queued)} queued)"

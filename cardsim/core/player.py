"""Players and their turn-decision policy."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence
import logging

from .cards import Card, Hand
from .game_state import GameRules
from .random_source import CryptoRandomSource, UniformRandomSource


logger = logging.getLogger(__name__)


class ActionType(Enum):
    """Kinds of action a player can take on a turn.

    DISCARD is part of the action vocabulary but the policy never chooses it.
    """
    AWARD = "award"
    PENALIZE = "penalize"
    DISCARD = "discard"
    SKIP = "skip"


@dataclass(frozen=True)
class Decision:
    """What the active player chose to do this turn."""
    action: ActionType
    points: int = 0
    target_index: int = 0

    def __str__(self):
        if self.action == ActionType.AWARD:
            return f"Award {self.points} points to #{self.target_index}"
        elif self.action == ActionType.PENALIZE:
            return f"Penalize {self.points} points from #{self.target_index}"
        elif self.action == ActionType.SKIP:
            return "Skip this round"
        return "Discarded"


def select_leader_index(
    self_index: int,
    scores: Sequence[int],
    rng: UniformRandomSource
) -> int:
    """Find the opponent with the highest score.

    Ties are broken uniformly at random; the random source is only
    consulted when more than one opponent shares the top score.
    """
    opponents = [i for i in range(len(scores)) if i != self_index]
    if not opponents:
        raise ValueError("A leader needs at least one other player")

    top_score = max(scores[i] for i in opponents)
    leaders = [i for i in opponents if scores[i] == top_score]
    if len(leaders) == 1:
        return leaders[0]
    return rng.choice(leaders)


class Player:
    """A seat at the table: tag, score and hand."""

    def __init__(
        self,
        tag: str,
        cards: Iterable[Card],
        rules: Optional[GameRules] = None,
        rng: Optional[UniformRandomSource] = None
    ):
        self.tag = tag
        self.score = 0
        self.rules = rules or GameRules()
        self.rng = rng or CryptoRandomSource()
        self.hand = Hand.from_cards(cards)
        for _ in range(self.rules.initial_hand_size):
            self.hand.draw()

    @property
    def positive_cards(self) -> List[Card]:
        return self.hand.positive

    @property
    def negative_cards(self) -> List[Card]:
        return self.hand.negative

    @property
    def queued_cards(self) -> List[Card]:
        return list(self.hand.queued)

    @property
    def has_positive_cards(self) -> bool:
        return bool(self.hand.positive)

    @property
    def has_negative_cards(self) -> bool:
        return bool(self.hand.negative)

    @property
    def has_cards_left(self) -> bool:
        """Whether a card can be played now; queued cards do not count."""
        return self.has_positive_cards or self.has_negative_cards

    @property
    def is_exhausted(self) -> bool:
        return self.hand.total_count == 0

    @property
    def card_count(self) -> int:
        return self.hand.total_count

    def turn(self, self_index: int, scores: Sequence[int]) -> Decision:
        """Choose this turn's action and refill the hand by one card."""
        if not self.has_cards_left:
            logger.debug("%s: no cards to play, skipping", self.tag)
            return Decision(ActionType.SKIP, target_index=self_index)

        leader_index = select_leader_index(self_index, scores, self.rng)
        winning_card = self._exact_win_card()

        if winning_card is not None:
            decision = self._play_award(winning_card, self_index)
        elif (self.has_negative_cards
              and scores[leader_index] >= self.rules.penalty_threshold):
            decision = self._play_penalty(leader_index)
        elif self.has_positive_cards:
            decision = self._play_award(max(self.hand.positive), self_index)
        else:
            decision = self._play_penalty(leader_index)

        self.hand.draw()
        logger.debug("%s: %s, holding %s", self.tag, decision, self.hand)
        return decision

    def _exact_win_card(self) -> Optional[Card]:
        """A positive card that lands exactly on the target score, if any."""
        needed = self.rules.target_score - self.score
        return needed if needed in self.hand.positive else None

    def _play_award(self, card: Card, self_index: int) -> Decision:
        self.hand.positive.remove(card)
        return Decision(ActionType.AWARD, points=card, target_index=self_index)

    def _play_penalty(self, leader_index: int) -> Decision:
        # Closest to zero is the mildest penalty still in hand
        card = max(self.hand.negative)
        self.hand.negative.remove(card)
        return Decision(ActionType.PENALIZE, points=card, target_index=leader_index)

    def award(self, points: int):
        """Add points to the player's score."""
        self.score += points

    def penalize(self, points: int):
        """Apply a (negative) penalty; the score never drops below zero."""
        self.score = max(0, self.score + points)

    def __str__(self):
        return f"Player {self.tag}, Score: {self.score}"

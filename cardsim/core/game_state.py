"""Rules, state and result value types for a single playout."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


PLAYER_TAGS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DRAW_SENTINEL = "*"


@dataclass(frozen=True)
class GameRules:
    """Constants that shape every playout."""
    target_score: int = 30
    penalty_threshold: int = 20
    initial_hand_size: int = 5

    def __post_init__(self):
        if self.target_score <= 0:
            raise ValueError("Target score must be positive")
        # An empty starting hand would skip forever without drawing
        if self.initial_hand_size < 1:
            raise ValueError("Initial hand size must be at least 1")


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WINNER = "winner"
    DRAW = "draw"


@dataclass
class GameState:
    """Mutable per-game bookkeeping owned by one engine."""
    player_count: int
    active_index: int = 0
    turns: int = 0
    status: GameStatus = GameStatus.IN_PROGRESS
    scores: List[int] = field(default_factory=list)

    @property
    def is_finished(self) -> bool:
        return self.status != GameStatus.IN_PROGRESS


@dataclass(frozen=True)
class ResultRecord:
    """Outcome of one finished playout."""
    turns: int
    is_draw: bool
    winner: str = DRAW_SENTINEL

    def __post_init__(self):
        # Exactly one of "drawn" and "has a winner tag" may hold
        if self.is_draw == (self.winner != DRAW_SENTINEL):
            raise ValueError(
                f"Result must be either a draw or have a winner, got "
                f"is_draw={self.is_draw}, winner={self.winner!r}"
            )

    @classmethod
    def won(cls, turns: int, winner: str) -> "ResultRecord":
        return cls(turns=turns, is_draw=False, winner=winner)

    @classmethod
    def drawn(cls, turns: int) -> "ResultRecord":
        return cls(turns=turns, is_draw=True)

    @property
    def has_winner(self) -> bool:
        return not self.is_draw

    def to_csv_row(self) -> List[str]:
        return [str(self.turns), "true" if self.is_draw else "false", self.winner]

    def __str__(self):
        if self.is_draw:
            return f"Draw in {self.turns} turns"
        return f"Winner: {self.winner} won in {self.turns} turns"

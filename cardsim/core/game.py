"""Turn loop and termination logic for one playout."""
from typing import List, Optional
import logging

from .game_state import (
    DRAW_SENTINEL, PLAYER_TAGS, GameRules, GameState, GameStatus, ResultRecord
)
from .player import ActionType, Decision, Player
from .pool import CardPool
from .random_source import UniformRandomSource


logger = logging.getLogger(__name__)


class GameEngine:
    """Runs one game from the deal to a winner or a draw.

    Players take turns round-robin starting from a random seat. After every
    decision the engine checks whether somebody reached the target score
    (a win) or every player has run out of cards (a draw).
    """

    def __init__(
        self,
        pool: CardPool,
        player_count: int = 4,
        rules: Optional[GameRules] = None,
        rng: Optional[UniformRandomSource] = None
    ):
        if not 2 <= player_count <= len(PLAYER_TAGS):
            raise ValueError(
                f"Player count must be between 2 and {len(PLAYER_TAGS)}, got {player_count}"
            )

        self.rules = rules or GameRules()
        self.rng = rng or pool.rng
        self.state = GameState(
            player_count=player_count,
            active_index=self.rng.next_in_range(0, player_count)
        )
        self.players: List[Player] = self._seat_players(pool)
        self.state.scores = self.scores
        self._result: Optional[ResultRecord] = None

    def _seat_players(self, pool: CardPool) -> List[Player]:
        hands = pool.deal_hands(self.player_count)
        return [
            Player(PLAYER_TAGS[index], hand, self.rules, self.rng)
            for index, hand in enumerate(hands)
        ]

    @property
    def player_count(self) -> int:
        return self.state.player_count

    @property
    def turns(self) -> int:
        return self.state.turns

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def active_index(self) -> int:
        return self.state.active_index

    @property
    def scores(self) -> List[int]:
        return [player.score for player in self.players]

    @property
    def winner(self) -> str:
        """Tag of the first seat at or above the target score, else the sentinel."""
        for player in self.players:
            if player.score >= self.rules.target_score:
                return player.tag
        return DRAW_SENTINEL

    def play_turn(self) -> Decision:
        """Advance the game by one decision."""
        if self.state.is_finished:
            raise RuntimeError("Game is already finished")

        self.state.turns += 1
        if self.state.active_index == self.player_count:
            self.state.active_index = 0

        active = self.state.active_index
        decision = self.players[active].turn(active, self.scores)
        logger.debug("Turn %d: #%d decided to %s", self.state.turns, active, decision)
        self._apply(active, decision)

        self.state.scores = self.scores
        self.state.status = self._evaluate_status()
        if not self.state.is_finished:
            self.state.active_index += 1
        return decision

    def _apply(self, active: int, decision: Decision):
        if decision.action == ActionType.AWARD:
            self.players[active].award(decision.points)
        elif decision.action == ActionType.PENALIZE:
            if not 0 <= decision.target_index < self.player_count:
                raise IndexError(f"Penalty targets missing seat #{decision.target_index}")
            self.players[decision.target_index].penalize(decision.points)

    def _evaluate_status(self) -> GameStatus:
        if self.winner != DRAW_SENTINEL:
            return GameStatus.WINNER
        if all(player.is_exhausted for player in self.players):
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    def simulate(self) -> ResultRecord:
        """Play until the game ends and return its result."""
        if self._result is not None:
            return self._result

        while not self.state.is_finished:
            self.play_turn()

        if self.state.status == GameStatus.WINNER:
            self._result = ResultRecord.won(self.turns, self.winner)
        else:
            self._result = ResultRecord.drawn(self.turns)
        logger.debug("%s", self._result)
        return self._result

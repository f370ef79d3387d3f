"""Default settings for a simulation batch."""
from dataclasses import dataclass
from typing import Optional
import multiprocessing

from .core.game_state import GameRules


@dataclass
class SimulationConfig:
    player_count: int = 4
    num_simulations: int = 2_000_000
    target_score: int = 30
    penalty_threshold: int = 20
    initial_hand_size: int = 5
    deck_path: str = "cards.csv"
    output_path: str = "output.csv"
    progress_every: int = 10_000
    num_workers: Optional[int] = None
    use_processes: bool = True
    seed: Optional[int] = None

    def __post_init__(self):
        if self.num_workers is None:
            self.num_workers = multiprocessing.cpu_count()

    def rules(self) -> GameRules:
        return GameRules(
            target_score=self.target_score,
            penalty_threshold=self.penalty_threshold,
            initial_hand_size=self.initial_hand_size,
        )

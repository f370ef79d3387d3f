"""Aggregation of playout results into summary statistics."""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

import numpy as np

from ..core.game_state import DRAW_SENTINEL, ResultRecord


@dataclass
class SimulationReport:
    """Summary of a batch of playouts."""
    num_simulations: int
    winner_counts: Dict[str, int] = field(default_factory=dict)
    average_turns: float = 0.0
    median_turns: float = 0.0
    min_turns: int = 0
    max_turns: int = 0
    elapsed: float = 0.0

    @property
    def draw_count(self) -> int:
        return self.winner_counts.get(DRAW_SENTINEL, 0)

    def rates(self) -> Dict[str, float]:
        """Winner tag -> percentage of all runs, in tag order."""
        if not self.num_simulations:
            return {}
        return {
            tag: 100.0 * count / self.num_simulations
            for tag, count in sorted(self.winner_counts.items())
        }

    def __str__(self) -> str:
        lines = [f"Simulation Results ({self.num_simulations} games):"]
        lines.append("Winner\tTimes\tRate")
        for tag, rate in self.rates().items():
            lines.append(f"{tag}\t{self.winner_counts[tag]}\t{rate:.2f}%")
        lines.append(f"Average turn count is {self.average_turns:.2f} turns.")
        return "\n".join(lines)


def aggregate_results(results: Iterable[ResultRecord], elapsed: float = 0.0) -> SimulationReport:
    """Reduce results to a winner histogram and turn statistics.

    Draws are counted under the draw sentinel. The reduction does not
    depend on the order of `results`.
    """
    results: List[ResultRecord] = list(results)
    if not results:
        return SimulationReport(num_simulations=0, elapsed=elapsed)

    turns = np.array([result.turns for result in results])
    return SimulationReport(
        num_simulations=len(results),
        winner_counts=dict(Counter(result.winner for result in results)),
        average_turns=float(np.mean(turns)),
        median_turns=float(np.median(turns)),
        min_turns=int(np.min(turns)),
        max_turns=int(np.max(turns)),
        elapsed=elapsed,
    )

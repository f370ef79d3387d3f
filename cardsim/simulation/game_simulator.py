"""Parallel driver that runs many independent playouts."""
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional
import logging
import math
import multiprocessing

from ..core.game import GameEngine
from ..core.game_state import GameRules, ResultRecord
from ..core.pool import CardPool


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class GameSimulator:
    """Fans playouts out over a worker pool and gathers their results."""

    def __init__(self, num_workers: Optional[int] = None, use_processes: bool = True):
        self.num_workers = num_workers or multiprocessing.cpu_count()
        self.use_processes = use_processes

    def _executor(self) -> Executor:
        if self.use_processes:
            return ProcessPoolExecutor(max_workers=self.num_workers)
        return ThreadPoolExecutor(max_workers=self.num_workers)

    def simulate_games(
        self,
        pool: CardPool,
        num_simulations: int,
        player_count: int = 4,
        rules: Optional[GameRules] = None,
        progress_every: int = 10000,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[ResultRecord]:
        """Run `num_simulations` games and return their results.

        Args:
            pool: Initialized card pool; shared by threads, copied per chunk
                when running in processes
            num_simulations: Number of playouts
            player_count: Seats per game
            rules: Game constants, defaults to the standard rules
            progress_every: Upper bound on playouts per submitted chunk;
                progress is reported whenever a chunk completes
            progress_callback: Called with (completed, total)
        """
        if num_simulations < 0:
            raise ValueError("Number of simulations cannot be negative")
        if progress_every < 1:
            raise ValueError("Progress interval must be at least 1")
        rules = rules or GameRules()

        # Spread work over all workers; progress_every only caps the chunk size
        chunk_size = max(1, min(progress_every, math.ceil(num_simulations / self.num_workers)))
        chunks = [
            min(chunk_size, num_simulations - start)
            for start in range(0, num_simulations, chunk_size)
        ]
        logger.debug(
            "Submitting %d chunk(s) of up to %d games to %d worker(s)",
            len(chunks), chunk_size, self.num_workers
        )

        all_results: List[ResultRecord] = []
        completed = 0
        with self._executor() as executor:
            futures = [
                executor.submit(
                    self._run_simulations,
                    pool,
                    n_sims,
                    player_count,
                    rules,
                    chunk_id if self.use_processes else None
                )
                for chunk_id, n_sims in enumerate(chunks)
            ]

            for future in as_completed(futures):
                results = future.result()
                all_results.extend(results)
                completed += len(results)
                if progress_callback:
                    progress_callback(completed, num_simulations)

        return all_results

    @staticmethod
    def _run_simulations(
        pool: CardPool,
        num_simulations: int,
        player_count: int,
        rules: GameRules,
        chunk_id: Optional[int] = None
    ) -> List[ResultRecord]:
        """Run a chunk of games, collecting into a worker-local list."""
        if chunk_id is not None:
            # Each process chunk gets its own random stream
            pool = pool.spawn(chunk_id)

        return [
            GameEngine(pool, player_count, rules).simulate()
            for _ in range(num_simulations)
        ]

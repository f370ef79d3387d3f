from datetime import datetime
from typing import List
import time

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from ..config import SimulationConfig
from ..core.game_state import ResultRecord
from ..core.pool import CardPool
from ..core.random_source import CryptoRandomSource, SeededRandomSource
from ..simulation import GameSimulator, SimulationReport, aggregate_results, append_results_csv


console = Console()


class BatchCLI:
    """Command-line front end for a batch of simulated games."""

    def __init__(self, config: SimulationConfig):
        self.config = config
        rng = SeededRandomSource(config.seed) if config.seed is not None else CryptoRandomSource()
        self.pool = CardPool(config.deck_path, rng)
        self.simulator = GameSimulator(config.num_workers, config.use_processes)

    def load_deck(self) -> int:
        count = self.pool.initialize()
        console.print(f"Found {count} valid cards.")
        return count

    def run_simulations(self) -> List[ResultRecord]:
        """Run the batch with a live progress bar."""
        config = self.config
        console.print(
            f"Using {config.player_count} players in {config.num_simulations} simulations.\n"
        )
        console.print(f"Simulation started at {datetime.now():%Y-%m-%d %H:%M:%S}.")

        with Progress(
            TextColumn("[cyan]Completed"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("simulate", total=config.num_simulations)
            results = self.simulator.simulate_games(
                self.pool,
                config.num_simulations,
                player_count=config.player_count,
                rules=config.rules(),
                progress_every=config.progress_every,
                progress_callback=lambda done, total: progress.update(task, completed=done),
            )
        return results

    def display_report(self, report: SimulationReport):
        """Show the winner histogram and turn statistics."""
        table = Table(title=f"Results ({report.num_simulations} games)")
        table.add_column("Winner", style="cyan")
        table.add_column("Times", style="magenta", justify="right")
        table.add_column("Rate", style="green", justify="right")

        for tag, rate in report.rates().items():
            table.add_row(tag, str(report.winner_counts[tag]), f"{rate:.2f}%")

        console.print(table)
        console.print(f"Average turn count is {report.average_turns:.2f} turns.")
        console.print(
            f"[dim]Median {report.median_turns:.0f}, "
            f"min {report.min_turns}, max {report.max_turns} turns[/dim]\n"
        )

    def run(self) -> SimulationReport:
        self.load_deck()

        started = time.perf_counter()
        results = self.run_simulations()
        elapsed = time.perf_counter() - started
        console.print(
            f"\nSimulation completed at {datetime.now():%Y-%m-%d %H:%M:%S}; "
            f"elapsed {elapsed:.2f}s.\n"
        )

        report = aggregate_results(results, elapsed)
        self.display_report(report)

        console.print(f"Appending to {self.config.output_path}...")
        append_results_csv(self.config.output_path, results)
        console.print("[green]Results written.[/green]")
        return report

import logging

import click
from rich.logging import RichHandler

from ..config import SimulationConfig
from .interface import BatchCLI, console


DEFAULTS = SimulationConfig(num_workers=1)


@click.command()
@click.option('--players', '-p', type=click.IntRange(2, 26), default=DEFAULTS.player_count,
              show_default=True, help='Players per game')
@click.option('--simulations', '-n', type=click.IntRange(min=1), default=DEFAULTS.num_simulations,
              show_default=True, help='Number of games to simulate')
@click.option('--target-score', type=click.IntRange(min=1), default=DEFAULTS.target_score,
              show_default=True, help='Score that wins a game')
@click.option('--penalty-threshold', type=int, default=DEFAULTS.penalty_threshold,
              show_default=True, help='Leader score at which penalties are played first')
@click.option('--hand-size', type=click.IntRange(min=1), default=DEFAULTS.initial_hand_size,
              show_default=True, help='Cards drawn at the start of a game')
@click.option('--deck', '-d', type=click.Path(dir_okay=False), default=DEFAULTS.deck_path,
              show_default=True, help='Comma-separated deck file')
@click.option('--output', '-o', type=click.Path(dir_okay=False), default=DEFAULTS.output_path,
              show_default=True, help='CSV file results are appended to')
@click.option('--progress-every', type=click.IntRange(min=1), default=DEFAULTS.progress_every,
              show_default=True, help='Games between progress updates')
@click.option('--workers', '-w', type=click.IntRange(min=1), default=None,
              help='Worker count (defaults to CPU count)')
@click.option('--threads', is_flag=True, help='Use threads instead of processes')
@click.option('--seed', type=click.IntRange(min=0), default=None,
              help='Seed for a reproducible run (process mode only)')
@click.option('--verbose', '-v', is_flag=True, help='Log every deal and turn')
def main(players, simulations, target_score, penalty_threshold, hand_size, deck, output,
         progress_every, workers, threads, seed, verbose):
    """Simulate many games and report the winner distribution."""
    if seed is not None and threads:
        # Threads draw from one seeded stream in scheduling order
        raise click.UsageError("--seed cannot be combined with --threads")

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    config = SimulationConfig(
        player_count=players,
        num_simulations=simulations,
        target_score=target_score,
        penalty_threshold=penalty_threshold,
        initial_hand_size=hand_size,
        deck_path=deck,
        output_path=output,
        progress_every=progress_every,
        num_workers=workers,
        use_processes=not threads,
        seed=seed,
    )

    cli = BatchCLI(config)
    try:
        cli.run()
    except OSError as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    main()

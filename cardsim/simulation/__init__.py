"""Simulation module for the card pool game."""
from .game_simulator import GameSimulator
from .report import SimulationReport, aggregate_results
from .csv_log import append_results_csv

__all__ = [
    "GameSimulator",
    "SimulationReport",
    "aggregate_results",
    "append_results_csv",
]

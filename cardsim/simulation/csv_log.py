"""Append-only CSV log of playout results."""
from pathlib import Path
from typing import Iterable, Union
import csv

from ..core.game_state import ResultRecord


CSV_HEADER = ("turns", "isDraw", "winner")


def append_results_csv(path: Union[str, Path], results: Iterable[ResultRecord]) -> int:
    """Append a header line followed by one row per result.

    Every call writes its own header, so a file holds one block per batch.
    Returns the number of result rows written.
    """
    rows = 0
    with open(path, "a", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for result in results:
            writer.writerow(result.to_csv_row())
            rows += 1
    return rows

"""
batch.py

Replays the solver over a whole solution list to measure how it performs.

Every game is independent: worker processes receive the master word list and
the opening word once, through the pool initializer, and each builds its own
game state per solution.
"""

import logging
from collections import Counter
from typing import Dict, NamedTuple

from tqdm import tqdm

from .entropy import pool_context, resolve_workers
from .game import SimulatedGame


log = logging.getLogger(__name__)

_BATCH_WORKER_STATE = {}


class BatchSummary(NamedTuple):
    games: int
    solved: int
    failed: int
    mean_rounds: float
    histogram: Dict[int, int]


def _init_batch_worker(words, opening):
    _BATCH_WORKER_STATE["words"] = words
    _BATCH_WORKER_STATE["opening"] = opening


def _worker_play(solution):
    words = _BATCH_WORKER_STATE["words"]
    opening = _BATCH_WORKER_STATE["opening"]
    return SimulatedGame(words, solution, opening, workers=1).run()


def run_batch(words, solutions, opening, workers=None, progress=True):
    """
    Play one simulated game per solution and return the GameRecords in the
    order of SOLUTIONS.

    WORKERS > 1 plays games in parallel processes (None means one per CPU).
    With PROGRESS a tqdm bar is shown and every finished game is written
    above it.
    """
    words = tuple(words)
    solutions = list(solutions)
    worker_count = min(resolve_workers(workers), max(1, len(solutions)))
    bar = tqdm(total=len(solutions), desc="Games", disable=not progress)

    records = []
    try:
        if worker_count == 1:
            for solution in solutions:
                record = SimulatedGame(words, solution, opening, workers=1).run()
                records.append(record)
                if progress:
                    tqdm.write(str(record))
                bar.update(1)
        else:
            log.debug("playing %d games on %d workers", len(solutions), worker_count)
            ctx = pool_context()
            with ctx.Pool(
                processes=worker_count,
                initializer=_init_batch_worker,
                initargs=(words, opening),
            ) as pool:
                for record in pool.imap(_worker_play, solutions, chunksize=4):
                    records.append(record)
                    if progress:
                        tqdm.write(str(record))
                    bar.update(1)
    finally:
        bar.close()

    return records


def summarize(records) -> BatchSummary:
    """Aggregate statistics over a batch of GameRecords."""
    records = list(records)
    solved_rounds = [r.rounds for r in records if r.solved]
    histogram = Counter(solved_rounds)
    mean_rounds = sum(solved_rounds) / len(solved_rounds) if solved_rounds else 0.0
    return BatchSummary(
        games=len(records),
        solved=len(solved_rounds),
        failed=len(records) - len(solved_rounds),
        mean_rounds=mean_rounds,
        histogram={k: histogram[k] for k in sorted(histogram)},
    )


def format_summary(summary: BatchSummary) -> str:
    lines = [
        f"Games: {summary.games:,}  solved: {summary.solved:,}  failed: {summary.failed:,}",
        f"Average rounds (solved games): {summary.mean_rounds:.4f}",
        "Rounds distribution:",
    ]
    for rounds, count in summary.histogram.items():
        lines.append(f"  {rounds}: {count:,}")
    if summary.failed:
        lines.append(f"  X: {summary.failed:,}")
    return "\n".join(lines)

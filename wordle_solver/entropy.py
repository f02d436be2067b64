"""
entropy.py

Entropy of a guess against the current solution space, and ranking of every
allowed guess by that entropy.
"""

import logging
import multiprocessing as mp
import os
from typing import NamedTuple

import numpy as np

from .patterns import Pattern, score_codes
from .words import Word, encode_words


log = logging.getLogger(__name__)

# Below this many guesses a process pool costs more than it saves.
MIN_PARALLEL_WORDS = 256

_EVAL_WORKER_STATE = {}


class Evaluation(NamedTuple):
    word: Word
    entropy: float

    def __str__(self):
        return f"{self.word} ({self.entropy:.3f})"


def entropy_from_counts(counts):
    """Compute Shannon entropy in bits from bucket counts."""
    counts = np.asarray(counts)
    total = counts.sum()
    if total == 0:
        return 0.0
    probs = counts[counts > 0] / total
    h = -np.sum(probs * np.log2(probs))
    return float(h) if h > 0 else 0.0


def pattern_histogram(guess_letters, space_letters):
    """Number of solutions in the space falling into each of the Pattern.MAX buckets."""
    return np.bincount(score_codes(guess_letters, space_letters), minlength=Pattern.MAX)


def _as_letters(words):
    if isinstance(words, np.ndarray):
        return words
    return encode_words(list(words))


def entropy(word, space):
    """
    Expected information in bits that guessing WORD reveals, assuming the
    answer is uniformly distributed over SPACE.

    SPACE is a collection of Words or an already encoded letter array.
    """
    space_letters = _as_letters(space)
    guess_letters = encode_words([word])[0]
    return entropy_from_counts(pattern_histogram(guess_letters, space_letters))


def _entropies(guess_letters, space_letters):
    return np.array(
        [entropy_from_counts(pattern_histogram(g, space_letters)) for g in guess_letters],
        dtype=np.float64,
    )


def _init_eval_worker(guess_letters, space_letters):
    _EVAL_WORKER_STATE["guess_letters"] = guess_letters
    _EVAL_WORKER_STATE["space_letters"] = space_letters


def _worker_eval_chunk(task):
    start, end = task
    guess_letters = _EVAL_WORKER_STATE["guess_letters"]
    space_letters = _EVAL_WORKER_STATE["space_letters"]
    return start, _entropies(guess_letters[start:end], space_letters)


def pool_context():
    start_methods = mp.get_all_start_methods()
    start_method = "fork" if "fork" in start_methods else "spawn"
    return mp.get_context(start_method)


def resolve_workers(workers):
    worker_count = workers if workers is not None else (os.cpu_count() or 1)
    return max(1, int(worker_count))


def _parallel_entropies(guess_letters, space_letters, worker_count):
    n_words = guess_letters.shape[0]
    chunk_size = -(-n_words // (worker_count * 4))
    tasks = [
        (start, min(start + chunk_size, n_words))
        for start in range(0, n_words, chunk_size)
    ]
    entropies = np.empty(n_words, dtype=np.float64)

    ctx = pool_context()
    with ctx.Pool(
        processes=worker_count,
        initializer=_init_eval_worker,
        initargs=(guess_letters, space_letters),
    ) as pool:
        for start, chunk in pool.imap_unordered(_worker_eval_chunk, tasks):
            entropies[start:start + chunk.size] = chunk

    return entropies


def evaluate_all(words, space, workers=None):
    """
    Evaluate every word in WORDS against SPACE.

    Returns Evaluations sorted by descending entropy; equal entropies keep
    the order of WORDS. WORKERS > 1 spreads the words over a process pool
    (None means one worker per CPU); results are the same either way.
    """
    words = list(words)
    guess_letters = encode_words(words)
    space_letters = _as_letters(space)
    worker_count = resolve_workers(workers)

    if worker_count > 1 and len(words) >= MIN_PARALLEL_WORDS:
        log.debug(
            "evaluating %d words against %d solutions on %d workers",
            len(words), space_letters.shape[0], worker_count,
        )
        entropies = _parallel_entropies(guess_letters, space_letters, worker_count)
    else:
        entropies = _entropies(guess_letters, space_letters)

    order = np.argsort(-entropies, kind="stable")
    return [Evaluation(words[i], float(entropies[i])) for i in order]

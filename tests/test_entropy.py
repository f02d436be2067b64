import inspect
import math

import numpy as np
import pytest

from wordle_solver.entropy import (
    MIN_PARALLEL_WORDS,
    Evaluation,
    entropy,
    entropy_from_counts,
    evaluate_all,
    pattern_histogram,
)
from wordle_solver.patterns import Pattern
from wordle_solver.words import Word, encode_words


def test_entropy_from_counts():
    assert entropy_from_counts([4]) == 0.0
    assert entropy_from_counts([1, 1]) == pytest.approx(1.0)
    assert entropy_from_counts([1, 1, 1, 1, 0, 0]) == pytest.approx(2.0)
    assert entropy_from_counts([2, 1, 1]) == pytest.approx(1.5)
    assert entropy_from_counts([0, 0]) == 0.0


def test_histogram_covers_every_pattern(sample_words):
    letters = encode_words(sample_words)
    counts = pattern_histogram(letters[0], letters)
    assert counts.shape == (Pattern.MAX,)
    assert counts.sum() == len(sample_words)
    assert counts[Pattern.all_green().code] == 1


def test_entropy_bounds(sample_words):
    n = len(sample_words)
    for word in sample_words:
        h = entropy(word, sample_words)
        assert 0.0 <= h <= math.log2(n) + 1e-9


def test_entropy_of_single_candidate_is_zero():
    assert entropy(Word("crane"), [Word("tears")]) == 0.0


def test_entropy_of_empty_space_is_zero():
    assert entropy(Word("crane"), []) == 0.0


def test_perfect_split_reaches_log2():
    space = [Word("tears"), Word("bears"), Word("fears"), Word("gears")]
    # t/b/f/g each land in their own bucket
    assert entropy(Word("tbfgx"), space) == pytest.approx(2.0)
    # every candidate gives the same pattern: nothing learned
    assert entropy(Word("zzzzz"), space) == 0.0


def test_entropy_accepts_encoded_space(sample_words):
    letters = encode_words(sample_words)
    assert entropy(Word("crane"), letters) == entropy(Word("crane"), sample_words)


def test_evaluate_all_sorted_descending(sample_words):
    evaluations = evaluate_all(sample_words, sample_words)
    assert len(evaluations) == len(sample_words)
    assert all(isinstance(e, Evaluation) for e in evaluations)
    scores = [e.entropy for e in evaluations]
    assert scores == sorted(scores, reverse=True)
    assert {e.word for e in evaluations} == set(sample_words)
    for e in evaluations:
        assert e.entropy == pytest.approx(entropy(e.word, sample_words))


def test_evaluate_all_ties_keep_list_order():
    space = [Word("tears")]
    words = [Word("crane"), Word("slate"), Word("abase")]
    evaluations = evaluate_all(words, space)
    assert [e.word for e in evaluations] == words
    assert all(e.entropy == 0.0 for e in evaluations)


def test_evaluation_str():
    assert str(Evaluation(Word("tears"), 1.23456)) == "tears (1.235)"


def test_parallel_matches_serial(sample_words):
    words = (sample_words * (MIN_PARALLEL_WORDS // len(sample_words) + 1))
    space = sample_words[:25]
    serial = evaluate_all(words, space, workers=1)
    parallel = evaluate_all(words, space, workers=2)
    assert [e.word for e in parallel] == [e.word for e in serial]
    np.testing.assert_allclose(
        [e.entropy for e in parallel], [e.entropy for e in serial]
    )


def test_default_workers_use_every_cpu(sample_words, monkeypatch):
    assert inspect.signature(evaluate_all).parameters["workers"].default is None
    monkeypatch.setattr("wordle_solver.entropy.os.cpu_count", lambda: 2)
    words = sample_words * (MIN_PARALLEL_WORDS // len(sample_words) + 1)
    space = sample_words[:25]
    default = evaluate_all(words, space)
    assert [e.word for e in default] == [e.word for e in evaluate_all(words, space, workers=1)]

"""
game.py

Round-by-round game state and the three ways of playing on top of it.

GameState is an immutable value: advance() returns the next state and never
touches the previous one, so every game owns its state and only the master
word list is ever shared.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Tuple

import numpy as np

from .entropy import evaluate_all
from .patterns import Pattern, score, score_codes
from .words import Word, encode_words


log = logging.getLogger(__name__)

MAX_ROUNDS = 6
ROUNDS_EXHAUSTED = MAX_ROUNDS + 1
DEFAULT_OPENING = "tears"
TOP_SUGGESTIONS = 5


class GameOver(RuntimeError):
    """Raised when a finished game is asked to play another round."""


class GameStatus(Enum):
    IN_PROGRESS = "in progress"
    WON = "won"
    LOST_EMPTY = "no fitting word in the list"
    LOST_ROUNDS_EXHAUSTED = "rounds exhausted"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


def filter_space(space, guess, observed):
    """
    Keep the members of SPACE that would have produced OBSERVED for GUESS.

    Order of the survivors is preserved.
    """
    space = tuple(space)
    if not space:
        return space
    codes = score_codes(encode_words([guess])[0], encode_words(space))
    keep = np.flatnonzero(codes == observed.code)
    return tuple(space[i] for i in keep)


@dataclass(frozen=True)
class GameState:
    words: Tuple[Word, ...]
    space: Tuple[Word, ...]
    round: int = 0
    status: GameStatus = GameStatus.IN_PROGRESS
    guesses: Tuple[Word, ...] = field(default=())

    @property
    def solution(self):
        """The single remaining candidate, if the space has narrowed to one."""
        return self.space[0] if len(self.space) == 1 else None


def new_game(words) -> GameState:
    words = tuple(words)
    return GameState(words=words, space=words)


def advance(state: GameState, guess: Word, feedback) -> GameState:
    """
    Play one round.

    FEEDBACK is either the observed Pattern (assisted play) or the secret
    Word (the engine knows the answer and scores the guess itself).
    Terminal conditions are checked in order: won, empty space, rounds
    exhausted.
    """
    if state.status.is_terminal:
        raise GameOver(f"game already finished: {state.status.value}")

    if isinstance(feedback, Word):
        observed = score(guess, feedback)
        won = guess == feedback
    else:
        observed = feedback
        won = None

    rnd = state.round + 1
    space = filter_space(state.space, guess, observed)
    if won is None:
        won = len(space) == 1

    if won:
        status = GameStatus.WON
    elif not space:
        status = GameStatus.LOST_EMPTY
    elif rnd > MAX_ROUNDS:
        status = GameStatus.LOST_ROUNDS_EXHAUSTED
    else:
        status = GameStatus.IN_PROGRESS

    log.debug(
        "round %d: %s -> %s, %d -> %d candidates (%s)",
        rnd, guess, observed, len(state.space), len(space), status.name,
    )
    return replace(
        state, space=space, round=rnd, status=status, guesses=state.guesses + (guess,)
    )


def choose_guess(state: GameState, opening: Word, workers=None) -> Word:
    """
    Pick the engine's next guess.

    The first round always plays OPENING. A single remaining candidate is
    guessed directly. Otherwise the word of the full list with the highest
    entropy against the current space wins.
    """
    if state.round == 0:
        return opening
    if len(state.space) == 1:
        return state.space[0]
    return evaluate_all(state.words, state.space, workers=workers)[0].word


class AssistedGame:
    """Suggest guesses to someone playing elsewhere and narrow on their feedback."""

    def __init__(self, words, workers=None):
        self.state = new_game(words)
        self.workers = workers

    @property
    def status(self):
        return self.state.status

    @property
    def space(self):
        return self.state.space

    @property
    def round(self):
        return self.state.round

    def suggestions(self, limit=TOP_SUGGESTIONS):
        return evaluate_all(self.state.words, self.state.space, workers=self.workers)[:limit]

    def submit(self, guess: Word, pattern: Pattern) -> GameStatus:
        self.state = advance(self.state, guess, pattern)
        return self.state.status


class PlayGame:
    """The program holds a secret drawn from RNG and scores the player's guesses."""

    def __init__(self, words, rng=None):
        words = tuple(words)
        rng = rng if rng is not None else np.random.default_rng()
        self.secret = words[int(rng.integers(len(words)))]
        self.state = new_game(words)

    @property
    def status(self):
        return self.state.status

    @property
    def round(self):
        return self.state.round

    def guess(self, word: Word) -> Pattern:
        self.state = advance(self.state, word, self.secret)
        return score(word, self.secret)


@dataclass
class GameRecord:
    solution: Word
    guesses: List[Word]
    rounds: int

    @property
    def solved(self) -> bool:
        return bool(self.guesses) and self.guesses[-1] == self.solution

    def __str__(self):
        guesses = ", ".join(str(g) for g in self.guesses)
        return f"Game ({self.solution}) ({len(self.guesses)} entries): {guesses}"


class SimulatedGame:
    """The engine plays against a known SOLUTION, opening with OPENING."""

    def __init__(self, words, solution: Word, opening: Word, workers=None):
        self.state = new_game(words)
        self.solution = solution
        self.opening = opening
        self.workers = workers

    @classmethod
    def random(cls, words, opening: Word, rng=None, workers=None):
        """Self-play against a secret drawn from WORDS with RNG."""
        words = tuple(words)
        rng = rng if rng is not None else np.random.default_rng()
        solution = words[int(rng.integers(len(words)))]
        return cls(words, solution, opening, workers=workers)

    def step(self) -> Word:
        guess = choose_guess(self.state, self.opening, workers=self.workers)
        self.state = advance(self.state, guess, self.solution)
        return guess

    def run(self) -> GameRecord:
        while not self.state.status.is_terminal:
            self.step()
        if self.state.status is GameStatus.WON:
            rounds = self.state.round
        else:
            rounds = ROUNDS_EXHAUSTED
        return GameRecord(self.solution, list(self.state.guesses), rounds)

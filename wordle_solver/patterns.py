"""
patterns.py

Wordle feedback patterns and the scorer that produces them.

A pattern holds one colour per position and is stored as a base-3 integer:

    0 = black (gray)
    1 = yellow
    2 = green

Position i contributes colour * 3**i, so every pattern maps to a dense code
in [0, 3**WORD_LENGTH) that can index a histogram directly.
"""

from enum import IntEnum

import numpy as np

from .words import ALPHABET_SIZE, WORD_LENGTH


class MalformedPattern(ValueError):
    """Raised when text cannot be turned into a Pattern."""


class Color(IntEnum):
    BLACK = 0
    YELLOW = 1
    GREEN = 2

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {Color.BLACK: "b", Color.YELLOW: "y", Color.GREEN: "g"}
_COLORS_BY_SYMBOL = {symbol: color for color, symbol in _SYMBOLS.items()}

# BASES[i] == 3**i
BASES = tuple(3**i for i in range(WORD_LENGTH + 1))


class Pattern:
    __slots__ = ("code",)

    MAX = BASES[WORD_LENGTH]

    def __init__(self, code: int = 0):
        if not 0 <= code < self.MAX:
            raise MalformedPattern(f"pattern code {code} outside [0, {self.MAX})")
        self.code = int(code)

    @classmethod
    def from_code(cls, code: int) -> "Pattern":
        return cls(code)

    @classmethod
    def from_colors(cls, colors) -> "Pattern":
        colors = list(colors)
        if len(colors) != WORD_LENGTH:
            raise MalformedPattern(
                f"pattern needs {WORD_LENGTH} colours, got {len(colors)}"
            )
        pattern = cls()
        for i, color in enumerate(colors):
            pattern.set(i, Color(color))
        return pattern

    @classmethod
    def all_green(cls) -> "Pattern":
        return cls.from_colors([Color.GREEN] * WORD_LENGTH)

    @classmethod
    def parse(cls, text: str) -> "Pattern":
        """
        Parse feedback typed as WORD_LENGTH symbols from {b, y, g}.

        Surrounding whitespace is ignored and upper case is accepted. Any
        other length or symbol raises MalformedPattern.
        """
        text = text.strip().lower()
        if len(text) != WORD_LENGTH:
            raise MalformedPattern(
                f"pattern <{text}> has bad length {len(text)}, expected {WORD_LENGTH}"
            )
        pattern = cls()
        for i, ch in enumerate(text):
            try:
                color = _COLORS_BY_SYMBOL[ch]
            except KeyError:
                raise MalformedPattern(
                    f"unknown symbol {ch!r}. Use g = green, y = yellow, b = black."
                ) from None
            pattern.set(i, color)
        return pattern

    def set(self, i: int, color: Color):
        if not 0 <= i < WORD_LENGTH:
            raise IndexError(f"pattern position {i} out of range")
        lower = self.code % BASES[i]
        higher = self.code // BASES[i + 1] * BASES[i + 1]
        self.code = lower + higher + BASES[i] * int(color)

    def colors(self):
        return tuple(self[i] for i in range(WORD_LENGTH))

    def is_solved(self) -> bool:
        return self.code == ALL_GREEN_CODE

    def to_display_string(self) -> str:
        return "".join(color.symbol for color in self.colors())

    def __getitem__(self, i) -> Color:
        if not 0 <= i < WORD_LENGTH:
            raise IndexError(f"pattern position {i} out of range")
        return Color(self.code % BASES[i + 1] // BASES[i])

    def __len__(self):
        return WORD_LENGTH

    def __eq__(self, other):
        if not isinstance(other, Pattern):
            return NotImplemented
        return self.code == other.code

    # set() mutates code; compare or use .code as a key instead
    __hash__ = None

    def __str__(self):
        return self.to_display_string()

    def __repr__(self):
        return f"Pattern({self.to_display_string()!r})"


ALL_GREEN_CODE = sum(int(Color.GREEN) * BASES[i] for i in range(WORD_LENGTH))


def score(guess, solution) -> Pattern:
    """
    Feedback for entering GUESS in a game whose answer is SOLUTION.

    1. Positions where guess and solution agree are green. Every other
       solution letter is counted.
    2. Left to right, each remaining guess letter with a positive count is
       yellow and uses up one count. Everything else stays black.

    A letter repeated in the guess more often than in the solution is only
    yellow for as many occurrences as are left, earliest positions first.
    """
    pattern = Pattern()
    guess_letters = guess.letter_indices()
    solution_letters = solution.letter_indices()
    counts = [0] * ALPHABET_SIZE

    for i in range(WORD_LENGTH):
        if guess_letters[i] == solution_letters[i]:
            pattern.set(i, Color.GREEN)
        else:
            counts[solution_letters[i]] += 1

    for i in range(WORD_LENGTH):
        if pattern[i] is Color.GREEN:
            continue
        letter = guess_letters[i]
        if counts[letter] > 0:
            pattern.set(i, Color.YELLOW)
            counts[letter] -= 1

    return pattern


_GREEN_WEIGHTS = np.array([int(Color.GREEN) * BASES[i] for i in range(WORD_LENGTH)])
_YELLOW_WEIGHTS = np.array([int(Color.YELLOW) * BASES[i] for i in range(WORD_LENGTH)])


def score_codes(guess_letters: np.ndarray, solutions: np.ndarray) -> np.ndarray:
    """
    Pattern codes for one guess against many solutions at once.

    guess_letters: shape (WORD_LENGTH,) alphabet indices
    solutions:     shape (n, WORD_LENGTH) alphabet indices

    Returns shape (n,) codes, identical to score(guess, s).code per row.
    Yellows are handed out left to right per letter, the same way score()
    consumes its counters.
    """
    n = solutions.shape[0]
    green = solutions == guess_letters
    codes = green.astype(np.int64) @ _GREEN_WEIGHTS
    open_slots = ~green
    handed_out = {}

    for i in range(WORD_LENGTH):
        letter = int(guess_letters[i])
        if letter not in handed_out:
            handed_out[letter] = np.zeros(n, dtype=np.int64)
        available = ((solutions == letter) & open_slots).sum(axis=1) - handed_out[letter]
        yellow = open_slots[:, i] & (available > 0)
        handed_out[letter] += yellow
        codes += yellow * _YELLOW_WEIGHTS[i]

    return codes

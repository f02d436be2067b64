"""
words.py

Fixed-length words and word lists.

A Word is an immutable value of exactly WORD_LENGTH lowercase letters.
Word lists are newline-separated, one word per line, and may come from any
text or byte stream.
"""

import string

import numpy as np


WORD_LENGTH = 5
ALPHABET = string.ascii_lowercase
ALPHABET_SIZE = len(ALPHABET)
_ORD_A = ord("a")


class MalformedWord(ValueError):
    """Raised when text cannot be turned into a Word."""


class Word:
    __slots__ = ("_text",)

    def __init__(self, text):
        if len(text) != WORD_LENGTH:
            raise MalformedWord(
                f"word <{text}> has bad length {len(text)}, expected {WORD_LENGTH}"
            )
        bad = [ch for ch in text if ch not in ALPHABET]
        if bad:
            raise MalformedWord(f"word <{text}> contains disallowed character {bad[0]!r}")
        self._text = text

    @classmethod
    def parse(cls, text: str) -> "Word":
        """Trim and lower-case TEXT, then validate it as a Word."""
        return cls(text.strip().lower())

    @property
    def text(self) -> str:
        return self._text

    def letter_indices(self):
        """Letters as 0-25 alphabet indices."""
        return [ord(ch) - _ORD_A for ch in self._text]

    def __getitem__(self, index):
        return self._text[index]

    def __len__(self):
        return WORD_LENGTH

    def __iter__(self):
        return iter(self._text)

    def __eq__(self, other):
        if not isinstance(other, Word):
            return NotImplemented
        return self._text == other._text

    def __hash__(self):
        return hash(self._text)

    def __getstate__(self):
        return self._text

    def __setstate__(self, state):
        self._text = state

    def __str__(self):
        return self._text

    def __repr__(self):
        return f"Word({self._text!r})"


def read_words(stream):
    """
    Read a newline-separated word list from STREAM.

    STREAM may yield str or bytes lines. Blank lines are skipped; any other
    line must parse as a Word or MalformedWord is raised with its line number.
    """
    words = []
    for lineno, line in enumerate(stream, start=1):
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise MalformedWord(f"line {lineno}: not valid UTF-8 text ({exc.reason})") from exc
        if not line.strip():
            continue
        try:
            words.append(Word.parse(line))
        except MalformedWord as exc:
            raise MalformedWord(f"line {lineno}: {exc}") from exc
    return words


def load_word_list(path):
    """Load a newline-separated word list file into a list of Words."""
    with open(path, "rb") as f:
        return read_words(f)


def encode_words(words) -> np.ndarray:
    """
    Encode WORDS as an (n, WORD_LENGTH) uint8 array of alphabet indices.

    This is the layout the vectorised scorer works on.
    """
    if not words:
        return np.zeros((0, WORD_LENGTH), dtype=np.uint8)
    raw = "".join(w.text for w in words).encode("ascii")
    letters = np.frombuffer(raw, dtype=np.uint8) - np.uint8(_ORD_A)
    return letters.reshape(len(words), WORD_LENGTH)

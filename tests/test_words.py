import io
import pickle

import numpy as np
import pytest

from wordle_solver.words import (
    WORD_LENGTH,
    MalformedWord,
    Word,
    encode_words,
    load_word_list,
    read_words,
)


def test_parse_trims_and_lowercases():
    assert Word.parse("  Crane\n") == Word("crane")


@pytest.mark.parametrize("text", ["", "tear", "tearss", "te rs", "tear5", "téars"])
def test_parse_rejects_malformed(text):
    with pytest.raises(MalformedWord):
        Word.parse(text)


def test_constructor_does_not_trim():
    with pytest.raises(MalformedWord):
        Word(" tears")


def test_value_semantics():
    a = Word("tears")
    b = Word.parse("TEARS")
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != Word("bears")
    assert a != "tears"


def test_indexing_and_text():
    word = Word("crane")
    assert word[0] == "c"
    assert word[4] == "e"
    assert len(word) == WORD_LENGTH
    assert list(word) == ["c", "r", "a", "n", "e"]
    assert str(word) == "crane"
    assert word.letter_indices() == [2, 17, 0, 13, 4]


def test_pickle_round_trip():
    word = Word("crane")
    assert pickle.loads(pickle.dumps(word)) == word


def test_read_words_from_bytes_skips_blank_lines():
    stream = io.BytesIO(b"tears\n\nbears\r\n  \ncrane")
    assert read_words(stream) == [Word("tears"), Word("bears"), Word("crane")]


def test_read_words_from_text():
    assert read_words(io.StringIO("tears\nbears\n")) == [Word("tears"), Word("bears")]


def test_read_words_reports_line_number():
    with pytest.raises(MalformedWord, match="line 3"):
        read_words(io.StringIO("tears\nbears\nbear\n"))


def test_read_words_rejects_undecodable_bytes():
    with pytest.raises(MalformedWord, match="line 2: not valid UTF-8"):
        read_words(io.BytesIO(b"tears\n\xff\xfeabc\ncrane\n"))


def test_load_word_list(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("tears\nbears\n")
    assert load_word_list(path) == [Word("tears"), Word("bears")]


def test_encode_words():
    letters = encode_words([Word("abcde"), Word("zzzzz")])
    assert letters.shape == (2, WORD_LENGTH)
    assert letters.dtype == np.uint8
    assert letters.tolist() == [[0, 1, 2, 3, 4], [25, 25, 25, 25, 25]]


def test_encode_no_words():
    assert encode_words([]).shape == (0, WORD_LENGTH)

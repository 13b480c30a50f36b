import pytest

from inkwell.llm.text_utils import (
    extract_last_partial_word,
    strip_trailing_punctuation,
    truncate_to_tail,
    word_count,
)
from inkwell.llm.writing_stage import classify_mode, classify_position, classify_stage


def _words(n: int) -> str:
    return " ".join(["word"] * n)


# ============================================================
# TEXT UTILS
# ============================================================

def test_truncate_keeps_the_tail():
    text = "".join(chr(ord("a") + i % 26) for i in range(600))
    out = truncate_to_tail(text, 500)

    assert len(out) == 500
    assert out == text[-500:]
    assert truncate_to_tail(out, 500) == out


def test_truncate_short_text_unchanged():
    assert truncate_to_tail("short", 500) == "short"
    assert truncate_to_tail("x" * 500) == "x" * 500


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("hello world!!!", "hello world"),
        ("hello, world", "hello, world"),
        ("  padded words.  ", "padded words"),
        ("mixed?!.,", "mixed"),
        ("", ""),
    ],
)
def test_strip_trailing_punctuation(raw, expected):
    assert strip_trailing_punctuation(raw) == expected


def test_extract_last_partial_word():
    assert extract_last_partial_word("the quick bro") == "bro"
    assert extract_last_partial_word("single") == "single"
    assert extract_last_partial_word("ends with space   ") == "space"
    assert extract_last_partial_word("") == ""


def test_word_count_ignores_whitespace_runs():
    assert word_count("   \n\t ") == 0
    assert word_count(" a  b\nc ") == 3


# ============================================================
# CLASSIFIERS
# ============================================================

@pytest.mark.parametrize(
    "n, expected",
    [(0, "opening"), (49, "opening"), (50, "middle"), (299, "middle"), (300, "closing")],
)
def test_classify_position_boundaries(n, expected):
    assert classify_position(_words(n)) == expected


@pytest.mark.parametrize(
    "n, expected",
    [(0, "start"), (1, "establish"), (19, "establish"), (20, "continue"), (500, "continue")],
)
def test_classify_stage_boundaries(n, expected):
    assert classify_stage(_words(n)) == expected


def test_whitespace_only_counts_as_zero_words():
    assert classify_stage("   \n  ") == "start"
    assert classify_position("\t\t") == "opening"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("I was walk", "word"),
        ("Version 2", "word"),
        ("I was walking ", "word"),
        ("Trailing spaces   ", "word"),
        ("Done.  ", "bridge"),
        ("   ", "bridge"),
        ("End of line\n", "bridge"),
        ("A full sentence.", "bridge"),
        ("", "bridge"),
    ],
)
def test_classify_mode(text, expected):
    assert classify_mode(text) == expected

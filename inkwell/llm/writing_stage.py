# inkwell/llm/writing_stage.py
"""
Rule-based writing-state classification.

Purpose:
- Decide word vs bridge mode from the text before the cursor
- Place the cursor in the document (opening / middle / closing)
- Measure how far the writer has got (start / establish / continue)

NO ML
NO LLM
Pure functions only
"""

from typing import Literal

from inkwell.llm.text_utils import word_count


Mode = Literal["word", "bridge"]
Position = Literal["opening", "middle", "closing"]
Stage = Literal["start", "establish", "continue"]

MODES = ("word", "bridge")
POSITIONS = ("opening", "middle", "closing")
STAGES = ("start", "establish", "continue")


# ------------------------------------------------------------
# THRESHOLDS (WORDS)
# ------------------------------------------------------------

OPENING_MAX_WORDS = 50
MIDDLE_MAX_WORDS = 300
ESTABLISH_MAX_WORDS = 20


def classify_position(full_text: str) -> Position:
    words = word_count(full_text)
    if words < OPENING_MAX_WORDS:
        return "opening"
    if words < MIDDLE_MAX_WORDS:
        return "middle"
    return "closing"


def classify_stage(preceding_text: str) -> Stage:
    words = word_count(preceding_text)
    if words == 0:
        return "start"
    if words < ESTABLISH_MAX_WORDS:
        return "establish"
    return "continue"


def classify_mode(text_before_cursor: str) -> Mode:
    """
    Same rule the editor applies before choosing an endpoint mode.

    Trailing spaces are trimmed first; then a letter or digit at the end
    means "word" completion, anything else (newline, punctuation, empty
    page) means "bridge".
    """
    text = (text_before_cursor or "").rstrip(" ")
    if text and text[-1].isalnum():
        return "word"
    return "bridge"

# inkwell/llm/text_utils.py
"""
Text helpers for the suggestion pipeline.

Purpose:
- Keep only the most recent text window sent to the model
- Clean model output before it reaches the editor

NO model calls
NO side effects
"""

import re

from inkwell.config import MAX_PRECEDING_TEXT

_TRAILING_PUNCT = re.compile(r"[.,!?]+$")


def truncate_to_tail(text: str, max_chars: int = MAX_PRECEDING_TEXT) -> str:
    """
    Keep the LAST max_chars characters; recency beats the beginning.
    """
    if len(text) <= max_chars:
        return text
    return text[len(text) - max_chars:]


def strip_trailing_punctuation(text: str) -> str:
    if not text:
        return ""
    return _TRAILING_PUNCT.sub("", text.strip())


def extract_last_partial_word(text: str) -> str:
    trimmed = text.rstrip()
    idx = trimmed.rfind(" ")
    return trimmed if idx == -1 else trimmed[idx + 1:]


def word_count(text: str) -> int:
    if not text:
        return 0
    return len(text.split())

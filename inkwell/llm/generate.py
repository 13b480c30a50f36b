# inkwell/llm/generate.py

"""
Suggestion generation on top of the external model.

CRITICAL GUARANTEES:
- NEVER raises: every model failure becomes a failed GenerationResult
- Failed results carry empty text, so collapsing them is always safe
- Output is trimmed and stripped of trailing punctuation, nothing more
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from inkwell.llm.prompts import (
    build_bridge_prompt,
    build_next_prompt,
    build_thesis_prompt,
    build_word_prompt,
)
from inkwell.llm.text_utils import strip_trailing_punctuation
from inkwell.memory.session_store import SessionContext

logger = logging.getLogger(__name__)


# ============================================================
# TOKEN / SAMPLING BUDGETS
# ============================================================

THESIS_MAX_TOKENS = 80
WORD_MAX_TOKENS = 5
BRIDGE_MAX_TOKENS = 20
NEXT_MAX_TOKENS = 120

WORD_TEMPERATURE = 0.3
BRIDGE_TEMPERATURE = 0.7
NEXT_TEMPERATURE = 0.7


# ============================================================
# RESULT TYPES
# ============================================================

@dataclass(frozen=True)
class GenerationResult:
    text: str = ""
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, reason: str) -> "GenerationResult":
        return cls(text="", failure=reason)


@dataclass(frozen=True)
class NextSuggestion:
    phrase: str = ""
    angle: str = ""
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_payload(self) -> dict:
        return {"phrase": self.phrase, "angle": self.angle}


# ============================================================
# HELPERS
# ============================================================

def _call(llm, label: str, system: str, user: str, max_tokens: int, temperature: float):
    """
    Returns (raw_text, failure_reason).
    """
    try:
        raw = llm.complete(
            system=system,
            user=user,
            max_tokens=max_tokens,
            temperature=temperature,
        )
    except Exception as e:
        logger.error("[LLM] %s call failed: %s", label, e, exc_info=True)
        return "", f"{type(e).__name__}: {e}"

    if not isinstance(raw, str):
        logger.error("[LLM] %s returned non-text output", label)
        return "", "non-text output"

    return raw, None


def parse_next_payload(raw: str) -> NextSuggestion:
    """
    Pull the first {...last } span out of raw model output and parse it.
    Anything unparseable collapses to an empty phrase / angle.
    """
    if not raw:
        return NextSuggestion(failure="empty output")

    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or end < start:
        return NextSuggestion(failure="no JSON object in output")

    try:
        parsed = json.loads(raw[start:end + 1])
    except ValueError as e:
        return NextSuggestion(failure=f"invalid JSON: {e}")

    if not isinstance(parsed, dict):
        return NextSuggestion(failure="JSON payload is not an object")

    phrase = parsed.get("phrase")
    angle = parsed.get("angle")

    return NextSuggestion(
        phrase=strip_trailing_punctuation(phrase) if isinstance(phrase, str) else "",
        angle=angle.strip() if isinstance(angle, str) else "",
    )


# ============================================================
# THESIS (ONCE PER SESSION)
# ============================================================

def derive_thesis(llm, outline: str, style: str = "", tone: str = "") -> GenerationResult:
    prompt = build_thesis_prompt(outline, style, tone)
    raw, failure = _call(llm, "thesis", prompt.system, prompt.user, THESIS_MAX_TOKENS, BRIDGE_TEMPERATURE)
    if failure:
        return GenerationResult.failed(failure)
    return GenerationResult(text=raw.strip())


# ============================================================
# WORD MODE
# ============================================================

def get_word_suggestion(llm, preceding_text: str) -> GenerationResult:
    prompt = build_word_prompt(preceding_text)
    raw, failure = _call(llm, "word", prompt.system, prompt.user, WORD_MAX_TOKENS, WORD_TEMPERATURE)
    if failure:
        return GenerationResult.failed(failure)
    return GenerationResult(text=strip_trailing_punctuation(raw))


# ============================================================
# BRIDGE MODE
# ============================================================

def get_bridge_suggestion(
    llm,
    preceding_text: str,
    context: SessionContext,
    stage: str = "continue",
    position: Optional[str] = "middle",
) -> GenerationResult:
    prompt = build_bridge_prompt(context, preceding_text, stage, position)
    raw, failure = _call(llm, "bridge", prompt.system, prompt.user, BRIDGE_MAX_TOKENS, BRIDGE_TEMPERATURE)
    if failure:
        return GenerationResult.failed(failure)
    return GenerationResult(text=strip_trailing_punctuation(raw))


# ============================================================
# NEXT SECTION
# ============================================================

def get_next_suggestion(
    llm,
    last_paragraph: str,
    context: SessionContext,
    current_section: Optional[str] = None,
) -> NextSuggestion:
    prompt = build_next_prompt(last_paragraph, context, current_section or None)
    raw, failure = _call(llm, "next", prompt.system, prompt.user, NEXT_MAX_TOKENS, NEXT_TEMPERATURE)
    if failure:
        return NextSuggestion(failure=failure)

    result = parse_next_payload(raw)
    if not result.ok:
        logger.error("[LLM] next output unusable: %s", result.failure)
    return result

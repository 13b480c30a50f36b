# inkwell/llm/prompts.py

"""
Prompt templates and builders for Inkwell suggestions.

DESIGN:
- Bridge variants are DATA: one table keyed by (stage, position)
- One renderer builds every bridge prompt
- start / establish ignore position; continue branches three ways
- Unknown combinations fall back to continue / middle
- The thesis line exists only when a thesis exists

Length and format rules below are requests to the model, not guarantees.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from inkwell.llm.text_utils import extract_last_partial_word
from inkwell.memory.session_store import SessionContext


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    intro: str
    task: str
    goals: Tuple[str, ...]
    empty_rule: str
    user: str
    # blank page has no preceding text to locate in the outline
    locate_section: bool = True


# ============================================================
# SHARED FRAGMENTS
# ============================================================

THESIS_LINE = 'The article\'s core argument: "{thesis}"'

LOCATE_SECTION = (
    "Before you answer, work out which part of the outline the writer is "
    "on right now, judging by their preceding text. Let that section steer "
    "the suggestion, not the outline as a whole."
)

OUTPUT_RULES = (
    "Return ONLY the words. No punctuation at the end. "
    "No explanation. No preamble."
)

CONTINUE_USER = 'Continue this naturally: "{preceding_text}"'

SENTENCE_COMPLETE_RULE = (
    "If the sentence already feels complete, return an empty string."
)


# ============================================================
# BRIDGE VARIANTS (stage, position) -> template
# ============================================================

BRIDGE_TEMPLATES: Dict[Tuple[str, Optional[str]], PromptTemplate] = {
    ("start", None): PromptTemplate(
        name="start",
        intro="You are a writing assistant helping a writer who is facing a blank page.",
        task="Suggest the first 5-7 words of an opening sentence that:",
        goals=(
            "Hooks the reader from the first line",
            "Sounds natural in a {tone} voice",
            "Sets up the premise described in the outline",
        ),
        empty_rule="If you cannot come up with a helpful opening, return an empty string.",
        user="Give me the first words to start this piece.",
        locate_section=False,
    ),
    ("establish", None): PromptTemplate(
        name="establish",
        intro="You are a writing assistant helping a writer establish their opening.",
        task="Suggest the next 5-7 words that:",
        goals=(
            "Read as a natural extension of what they started",
            "Keep the voice of their opening",
            "Move the thought forward without finishing it",
        ),
        empty_rule="If the thought already feels complete, return an empty string.",
        user=CONTINUE_USER,
    ),
    ("continue", "opening"): PromptTemplate(
        name="continue_opening",
        intro="You are a writing assistant helping a writer build momentum in their opening paragraph.",
        task="Suggest the next 5-7 words that:",
        goals=(
            "Keep the voice and energy they have set up",
            "Develop or support the opening premise",
            "Bridge to their next thought without closing the sentence",
        ),
        empty_rule=SENTENCE_COMPLETE_RULE,
        user=CONTINUE_USER,
    ),
    ("continue", "middle"): PromptTemplate(
        name="continue_middle",
        intro="You are a writing assistant helping a writer keep their flow through the body of the piece.",
        task="Suggest the next 5-7 words that:",
        goals=(
            "Push the argument or narrative forward",
            "Match the tone and style already on the page",
            "Act as a bridge, not a conclusion",
        ),
        empty_rule=SENTENCE_COMPLETE_RULE,
        user=CONTINUE_USER,
    ),
    ("continue", "closing"): PromptTemplate(
        name="continue_closing",
        intro="You are a writing assistant helping a writer bring their piece to a close.",
        task="Suggest the next 5-7 words that:",
        goals=(
            "Move the piece toward resolution",
            "Hold the same tone without introducing new ideas",
            "Help the writer land the piece cleanly",
        ),
        empty_rule=SENTENCE_COMPLETE_RULE,
        user=CONTINUE_USER,
    ),
}

FALLBACK_KEY = ("continue", "middle")


def select_template(stage: str, position: Optional[str]) -> PromptTemplate:
    if stage in ("start", "establish"):
        return BRIDGE_TEMPLATES[(stage, None)]
    return BRIDGE_TEMPLATES.get((stage, position), BRIDGE_TEMPLATES[FALLBACK_KEY])


# ============================================================
# RENDERING
# ============================================================

def _context_block(context: SessionContext) -> str:
    lines = [f'Their piece is about: "{context.outline}"']
    if context.thesis:
        lines.append(THESIS_LINE.format(thesis=context.thesis))
    lines.append(f"Style: {context.style}")
    lines.append(f"Tone: {context.tone}")
    return "\n".join(lines)


def render_template(
    template: PromptTemplate,
    context: SessionContext,
    preceding_text: str,
) -> PromptPair:
    goals = "\n".join(
        "- " + g.format(tone=context.tone) for g in template.goals
    )

    sections = [template.intro, _context_block(context)]
    if template.locate_section:
        sections.append(LOCATE_SECTION)
    sections.append(f"{template.task}\n{goals}")
    sections.append(f"{OUTPUT_RULES}\n{template.empty_rule}")

    return PromptPair(
        system="\n\n".join(sections),
        user=template.user.format(preceding_text=preceding_text),
    )


def build_bridge_prompt(
    context: SessionContext,
    preceding_text: str,
    stage: str,
    position: Optional[str],
) -> PromptPair:
    return render_template(select_template(stage, position), context, preceding_text)


# ============================================================
# WORD MODE
# ============================================================

WORD_SYSTEM_PROMPT = """
You are a word completion assistant.
Predict the single next word the writer is most likely to type.

Rules:
- Return ONLY one word, nothing else
- No punctuation, no explanation
- If the text ends mid-word, complete that word
- If the text ends at a word boundary, predict the next word
""".strip()


def build_word_prompt(preceding_text: str) -> PromptPair:
    user = f'What is the next word? "{preceding_text}"'

    if preceding_text and not preceding_text[-1].isspace():
        partial = extract_last_partial_word(preceding_text)
        if partial:
            user += f'\nThe writer is in the middle of typing "{partial}".'

    return PromptPair(system=WORD_SYSTEM_PROMPT, user=user)


# ============================================================
# NEXT SECTION (PHRASE + ANGLE)
# ============================================================

def build_next_prompt(
    last_paragraph: str,
    context: SessionContext,
    current_section: Optional[str] = None,
) -> PromptPair:
    parts = [
        "You are a writing assistant helping a writer move on to their next section.",
        _context_block(context).replace(
            "Their piece is about:", "Their full outline:", 1
        ),
    ]

    if current_section:
        parts.append(
            "The writer just finished this section of the outline:\n"
            f'"{current_section}"'
        )

    parts.append(f'Their last paragraph:\n"{last_paragraph}"')

    if current_section:
        parts.append(
            f'Using the outline, work out what logically comes AFTER "{current_section}".\n'
            "That is where your suggestion should go."
        )
    else:
        parts.append(
            "Using the outline, work out what logically comes after what they just wrote.\n"
            "That is where your suggestion should go."
        )

    parts.append(
        "Return a JSON object with exactly two fields:\n"
        f'- "phrase": the first 5-7 words that open the next section, in a natural {context.tone} voice. No punctuation at the end.\n'
        '- "angle": one concrete sentence naming the topic or argument to develop next. '
        "Use actual concepts from the outline, not generic advice."
    )
    parts.append(
        "Return ONLY valid JSON. No explanation. No preamble. No markdown backticks.\n"
        'If you cannot find a helpful next section, return: {"phrase": "", "angle": ""}'
    )

    return PromptPair(system="\n\n".join(parts), user="What should I write next?")


# ============================================================
# THESIS
# ============================================================

def build_thesis_prompt(outline: str, style: str, tone: str) -> PromptPair:
    user = f"""Here is an article outline: "{outline}"
Style: {style} | Tone: {tone}

In one sentence, state the concrete argument or solution this article makes.
Be specific: name the actual methods, tools, or outcomes in the outline.
If the outline mentions technologies, libraries, or metrics, include them.

Return ONLY that one sentence. No preamble. No punctuation at the end."""
    return PromptPair(system="", user=user)

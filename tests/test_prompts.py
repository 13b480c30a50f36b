import pytest

from inkwell.llm.prompts import (
    BRIDGE_TEMPLATES,
    build_bridge_prompt,
    build_next_prompt,
    build_word_prompt,
    select_template,
)
from inkwell.memory.session_store import SessionContext

CTX = SessionContext(outline="How X reduces Y", style="essay", tone="warm")
CTX_THESIS = SessionContext(
    outline="How X reduces Y", style="essay", tone="warm",
    thesis="X cuts Y by 40% using caching",
)


def test_exactly_five_bridge_variants():
    names = {t.name for t in BRIDGE_TEMPLATES.values()}
    assert len(BRIDGE_TEMPLATES) == 5
    assert names == {
        "start", "establish", "continue_opening", "continue_middle", "continue_closing",
    }


@pytest.mark.parametrize("position", ["opening", "middle", "closing", None])
def test_start_and_establish_ignore_position(position):
    assert select_template("start", position).name == "start"
    assert select_template("establish", position).name == "establish"


@pytest.mark.parametrize(
    "position, expected",
    [("opening", "continue_opening"), ("middle", "continue_middle"), ("closing", "continue_closing")],
)
def test_continue_branches_by_position(position, expected):
    assert select_template("continue", position).name == expected


@pytest.mark.parametrize("stage, position", [("continue", "nowhere"), ("weird", "opening"), ("continue", None)])
def test_unknown_combination_falls_back_to_middle(stage, position):
    assert select_template(stage, position).name == "continue_middle"


def test_blank_page_uses_start_variant():
    prompt = build_bridge_prompt(CTX, "", "start", None)
    same = build_bridge_prompt(CTX, "", "start", "closing")

    assert prompt == same
    assert prompt.user == "Give me the first words to start this piece."
    assert "blank page" in prompt.system


def test_thesis_line_omitted_when_empty():
    for (stage, position) in BRIDGE_TEMPLATES:
        prompt = build_bridge_prompt(CTX, "Some text", stage, position)
        assert "core argument" not in prompt.system


def test_thesis_line_follows_outline_line_once():
    prompt = build_bridge_prompt(CTX_THESIS, "Some text", "continue", "middle")
    lines = prompt.system.splitlines()

    thesis_lines = [i for i, line in enumerate(lines) if "core argument" in line]
    assert len(thesis_lines) == 1

    idx = thesis_lines[0]
    assert lines[idx - 1] == 'Their piece is about: "How X reduces Y"'
    assert lines[idx] == 'The article\'s core argument: "X cuts Y by 40% using caching"'


def test_templates_carry_context_and_output_rules():
    prompt = build_bridge_prompt(CTX, "The results show", "continue", "closing")

    assert "Style: essay" in prompt.system
    assert "Tone: warm" in prompt.system
    assert "5-7 words" in prompt.system
    assert "No punctuation at the end" in prompt.system
    assert "return an empty string" in prompt.system
    assert "without introducing new ideas" in prompt.system
    assert prompt.user == 'Continue this naturally: "The results show"'


def test_start_prompt_uses_tone_in_goals():
    prompt = build_bridge_prompt(CTX, "", "start", None)
    assert "in a warm voice" in prompt.system


def test_word_prompt_hints_partial_word():
    mid = build_word_prompt("The quick bro")
    assert 'typing "bro"' in mid.user

    boundary = build_word_prompt("The quick ")
    assert "typing" not in boundary.user


def test_next_prompt_section_hint_is_optional():
    without = build_next_prompt("Last para.", CTX_THESIS)
    assert "just finished this section" not in without.system
    assert "core argument" in without.system
    assert 'Their full outline: "How X reduces Y"' in without.system

    with_section = build_next_prompt("Last para.", CTX, "Benchmarks")
    assert '"Benchmarks"' in with_section.system
    assert 'comes AFTER "Benchmarks"' in with_section.system
    assert with_section.user == "What should I write next?"

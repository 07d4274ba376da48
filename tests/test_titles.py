from __future__ import annotations

from agent.core.prompt import (
    REGENERATION_INSTRUCTION,
    SCOPE_REMINDER_MESSAGE,
    TITLE_SYSTEM_PROMPT,
    TITLES_POSTSCRIPT,
    TITLES_PREAMBLE,
)
from agent.titles import TitleGenerationService, build_messages, format_titles
from conftest import NUMBERED_TITLES, FakeGateway


def test_numbered_output_is_wrapped():
    reply = format_titles(f"\n  {NUMBERED_TITLES}  \n")
    assert reply == f"{TITLES_PREAMBLE}\n\n{NUMBERED_TITLES}\n\n{TITLES_POSTSCRIPT}"


def test_numbered_line_after_intro_is_accepted():
    output = "好的，以下是標題：\n1. 第一個標題"
    assert format_titles(output).startswith(TITLES_PREAMBLE)


def test_unnumbered_output_becomes_scope_reminder():
    assert format_titles("抱歉，我無法回答這個問題。") == SCOPE_REMINDER_MESSAGE
    assert format_titles("6. out of range\n0. also out") == SCOPE_REMINDER_MESSAGE
    assert format_titles("- 1. indented bullet") == SCOPE_REMINDER_MESSAGE
    assert format_titles("") == SCOPE_REMINDER_MESSAGE


def test_regeneration_changes_system_instruction():
    first = build_messages("transcript", is_regeneration=False)
    again = build_messages("transcript", is_regeneration=True)

    assert first[0]["content"] == TITLE_SYSTEM_PROMPT
    assert again[0]["content"] == TITLE_SYSTEM_PROMPT + REGENERATION_INSTRUCTION
    assert first[1] == again[1] == {"role": "user", "content": "transcript"}


def test_generate_calls_gateway_once_at_title_temperature():
    gateway = FakeGateway([NUMBERED_TITLES])
    reply = TitleGenerationService(gateway).generate("some transcript")

    assert len(gateway.calls) == 1
    assert gateway.calls[0]["temperature"] == 0.7
    assert NUMBERED_TITLES in reply


def test_generate_hides_off_policy_output():
    gateway = FakeGateway(["Here is a poem about the sea instead."])
    reply = TitleGenerationService(gateway).generate("some transcript")
    assert reply == SCOPE_REMINDER_MESSAGE

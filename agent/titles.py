from __future__ import annotations

import logging
import re

from agent.core.prompt import (
    REGENERATION_INSTRUCTION,
    SCOPE_REMINDER_MESSAGE,
    TITLE_SYSTEM_PROMPT,
    TITLES_POSTSCRIPT,
    TITLES_PREAMBLE,
)
from agent.llm import CompletionGateway


logger = logging.getLogger("titlebot.titles")

TITLE_TEMPERATURE = 0.7

NUMBERED_LINE = re.compile(r"^[1-5]\.", re.MULTILINE)


def build_messages(text: str, is_regeneration: bool = False) -> list:
    system = TITLE_SYSTEM_PROMPT
    if is_regeneration:
        system += REGENERATION_INSTRUCTION
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": text},
    ]


def format_titles(output: str) -> str:
    """Wrap a numbered list of titles, or fall back to the scope reminder."""
    titles = (output or "").strip()
    if not NUMBERED_LINE.search(titles):
        return SCOPE_REMINDER_MESSAGE
    return f"{TITLES_PREAMBLE}\n\n{titles}\n\n{TITLES_POSTSCRIPT}"


class TitleGenerationService:
    def __init__(self, gateway: CompletionGateway) -> None:
        self.gateway = gateway

    def generate(self, text: str, is_regeneration: bool = False) -> str:
        # Gateway errors propagate to the caller
        output = self.gateway.complete(
            build_messages(text, is_regeneration), temperature=TITLE_TEMPERATURE
        )
        reply = format_titles(output)
        if reply == SCOPE_REMINDER_MESSAGE:
            logger.warning(
                "Generated output failed the numbered-list check (%s chars), sending scope reminder",
                len(output or ""),
            )
        else:
            logger.info("Generated titles: regeneration=%s", is_regeneration)
        return reply

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from agent.core.memory import ConversationMemory
from agent.core.prompt import (
    ABOUT_MESSAGE,
    CLARIFICATION_PROMPT,
    EMPTY_MESSAGE_REPLY,
    HELP_MESSAGE,
    NO_HISTORY_MESSAGE,
    TRANSCRIPT_HELP_MESSAGE,
)
from agent.intent import Intent, IntentClassifier, default_rules
from agent.llm import CompletionGateway, GeminiCompletionGateway
from agent.titles import TitleGenerationService
from config.settings import Settings, get_settings


logger = logging.getLogger("titlebot.agent")

CLARIFY_TEMPERATURE = 0.6


class ResponseOrchestrator:
    """Turns one inbound message into one reply.

    Memory is written only for GENERATE_TITLE and read only for REGENERATE.
    Gateway failures during title generation or clarification propagate.
    """

    def __init__(
        self,
        classifier: IntentClassifier,
        memory: ConversationMemory,
        titles: TitleGenerationService,
        gateway: CompletionGateway,
    ) -> None:
        self.classifier = classifier
        self.memory = memory
        self.titles = titles
        self.gateway = gateway
        self._handlers: Dict[Intent, Callable[[str, str], str]] = {
            Intent.HELP: lambda sender, text: HELP_MESSAGE,
            Intent.TRANSCRIPT: lambda sender, text: TRANSCRIPT_HELP_MESSAGE,
            Intent.ABOUT_BOT: lambda sender, text: ABOUT_MESSAGE,
            Intent.REGENERATE: self._regenerate,
            Intent.GENERATE_TITLE: self._generate,
            Intent.UNKNOWN: self._clarify,
        }

    def respond(self, sender: str, text: str) -> str:
        intent = self.classifier.classify(text)
        return self.dispatch(intent, sender, text)

    def dispatch(self, intent: Intent, sender: str, text: str) -> str:
        return self._handlers[intent](sender, text)

    def _regenerate(self, sender: str, text: str) -> str:
        previous = self.memory.last_input(sender)
        if previous is None:
            logger.info("Regenerate requested with no history: sender=%s", sender)
            return NO_HISTORY_MESSAGE
        return self.titles.generate(previous, is_regeneration=True)

    def _generate(self, sender: str, text: str) -> str:
        self.memory.remember(sender, text)
        return self.titles.generate(text, is_regeneration=False)

    def _clarify(self, sender: str, text: str) -> str:
        if not text.strip():
            return EMPTY_MESSAGE_REPLY
        messages = [
            {"role": "system", "content": CLARIFICATION_PROMPT},
            {"role": "user", "content": text},
        ]
        return self.gateway.complete(messages, temperature=CLARIFY_TEMPERATURE)


def build_agent(
    settings: Optional[Settings] = None,
    gateway: Optional[CompletionGateway] = None,
    memory: Optional[ConversationMemory] = None,
) -> ResponseOrchestrator:
    settings = settings or get_settings()
    if gateway is None:
        gateway = GeminiCompletionGateway(settings)
    if memory is None:
        memory = ConversationMemory(
            capacity=settings.memory_capacity,
            max_senders=settings.memory_max_senders,
            ttl_seconds=settings.memory_ttl_seconds,
        )
    classifier = IntentClassifier(default_rules(gateway, settings.long_text_threshold))
    return ResponseOrchestrator(
        classifier=classifier,
        memory=memory,
        titles=TitleGenerationService(gateway),
        gateway=gateway,
    )

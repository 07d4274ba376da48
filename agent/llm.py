from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import Settings, get_settings


logger = logging.getLogger("titlebot.llm")


class GatewayError(RuntimeError):
    """The text-generation backend failed or returned nothing usable."""


class ConfigurationError(RuntimeError):
    pass


class CompletionGateway(Protocol):
    def complete(self, messages: Sequence[Dict[str, str]], temperature: float) -> str:
        ...


def to_lc_messages(messages: Sequence[Dict[str, str]]) -> List[BaseMessage]:
    converted: List[BaseMessage] = []
    for item in messages or []:
        role = (item.get("role") or "").lower()
        content = item.get("content") or ""
        if role == "system":
            if not content:
                continue
            converted.append(SystemMessage(content=content))
        elif role in ("assistant", "ai", "bot"):
            if not content:
                continue
            converted.append(AIMessage(content=content))
        else:
            # Default unknown to HumanMessage for safety
            converted.append(HumanMessage(content=content))
    return converted


def _content_text(content) -> str:
    if isinstance(content, str):
        return content
    # Gemini may answer with a list of content parts
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text") or "")
    return "".join(parts)


class GeminiCompletionGateway:
    """Single-shot chat completion on Gemini through LangChain.

    One chat model is built per temperature and reused.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        if not self.settings.google_api_key:
            raise ConfigurationError(
                "GOOGLE_API_KEY not set. Please configure it in environment or .env"
            )
        self._models: Dict[float, ChatGoogleGenerativeAI] = {}

    def _model(self, temperature: float) -> ChatGoogleGenerativeAI:
        llm = self._models.get(temperature)
        if llm is None:
            llm = ChatGoogleGenerativeAI(
                model=self.settings.gemini_model,
                google_api_key=self.settings.google_api_key,
                temperature=temperature,
                top_p=self.settings.top_p,
                timeout=self.settings.model_timeout,
                max_retries=0,
            )
            self._models[temperature] = llm
        return llm

    def complete(self, messages: Sequence[Dict[str, str]], temperature: float) -> str:
        logger.info(
            "Completion request: model=%s temperature=%s messages=%s",
            self.settings.gemini_model,
            temperature,
            len(messages),
        )
        try:
            result = self._model(temperature).invoke(to_lc_messages(messages))
        except Exception as exc:
            raise GatewayError(f"Completion call failed: {exc}") from exc

        text = _content_text(result.content)
        if not text.strip():
            raise GatewayError("Completion call returned empty content")
        return text

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pytest

from agent.agent import build_agent
from agent.core.memory import ConversationMemory
from config.settings import Settings


class FakeGateway:
    """Completion gateway double; answers from a queue, or raises when given an exception."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def complete(self, messages: Sequence[Dict[str, str]], temperature: float) -> str:
        self.calls.append({"messages": list(messages), "temperature": temperature})
        if not self.responses:
            raise AssertionError("unexpected completion call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeDelivery:
    def __init__(self, ok: bool = True):
        self.ok = ok
        self.sent: List[tuple] = []

    def send(self, reply_token: str, text: str) -> bool:
        self.sent.append((reply_token, text))
        return self.ok


def make_settings(**overrides) -> Settings:
    settings = Settings()
    settings.google_api_key = "test-key"
    settings.line_channel_access_token = "line-token"
    settings.line_reply_url = "https://line.test/v2/bot/message/reply"
    settings.memory_capacity = 3
    settings.memory_max_senders = 100
    settings.memory_ttl_seconds = 0
    settings.long_text_threshold = 50
    settings.reply_on_generation_failure = False
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


NUMBERED_TITLES = "\n".join(
    [
        "1. 三十歲前該懂的理財順序",
        "2. 存錢不難，難在方向對不對",
        "3. 為什麼你存不到第一桶金？",
        "4. 月光族最常忽略的三個支出",
        "5. 一次看懂穩健理財的關鍵",
    ]
)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def memory() -> ConversationMemory:
    return ConversationMemory(capacity=3)


@pytest.fixture
def orchestrator(settings, gateway, memory):
    return build_agent(settings=settings, gateway=gateway, memory=memory)

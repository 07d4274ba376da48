"""Intent classification for inbound chat messages.

Classification is an ordered chain of rules, first match wins. The cheap
pattern rules run first; a single zero-temperature model call decides only
short messages none of them recognised.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import List, Optional, Sequence

from agent.core.prompt import INTENT_CLASSIFIER_PROMPT
from agent.llm import CompletionGateway


logger = logging.getLogger("titlebot.intent")

CLASSIFY_TEMPERATURE = 0.0


class Intent(str, enum.Enum):
    HELP = "help"
    TRANSCRIPT = "transcript"
    ABOUT_BOT = "about_bot"
    REGENERATE = "regenerate"
    GENERATE_TITLE = "generate_title"
    UNKNOWN = "unknown"


TRANSCRIPT_PATTERN = re.compile(
    r"逐字稿|取得字幕|字幕檔|怎麼取得|怎麼拿|怎樣拿|怎樣產出|transcript|subtitle"
)
HELP_PATTERN = re.compile(
    r"怎麼用|如何使用|使用方式|使用說明|使用教學|有什麼功能|help|how to use|usage"
)
ABOUT_PATTERN = re.compile(
    r"你是誰|誰做的|誰開發|開發者是|你的作者|你的設定|用什麼模型|哪個模型|"
    r"who are you|who made|who built|about you|which model"
)
REGENERATE_PATTERN = re.compile(
    r"再給|再來一|再一次|再試|換一批|換一組|重新產生|重新生成|重新給|不夠好|不太好|不滿意|不喜歡|"
    r"give me another|another one|try again|not good|regenerate|retry|more options"
)


def normalize(text: str) -> str:
    return (text or "").strip().casefold()


class PatternRule:
    def __init__(self, intent: Intent, pattern: "re.Pattern[str]") -> None:
        self.intent = intent
        self.pattern = pattern

    def match(self, text: str) -> Optional[Intent]:
        if self.pattern.search(normalize(text)):
            return self.intent
        return None


class LengthRule:
    """Long input is taken as transcript content without asking the model."""

    def __init__(self, threshold: int = 50) -> None:
        self.threshold = threshold

    def match(self, text: str) -> Optional[Intent]:
        if len((text or "").strip()) > self.threshold:
            return Intent.GENERATE_TITLE
        return None


class ModelRule:
    """Terminal rule: one yes/no question to the completion gateway.

    Never raises; a failed call classifies as UNKNOWN.
    """

    def __init__(self, gateway: CompletionGateway) -> None:
        self.gateway = gateway

    def match(self, text: str) -> Optional[Intent]:
        messages = [
            {"role": "system", "content": INTENT_CLASSIFIER_PROMPT},
            {"role": "user", "content": text},
        ]
        try:
            answer = self.gateway.complete(messages, temperature=CLASSIFY_TEMPERATURE)
        except Exception as exc:
            logger.warning("Intent fallback call failed, treating as unknown: %s", exc)
            return Intent.UNKNOWN

        if is_yes(answer):
            return Intent.GENERATE_TITLE
        return Intent.UNKNOWN


def is_yes(answer: str) -> bool:
    cleaned = normalize(answer).strip(" .。!！\"'`")
    return cleaned.startswith("yes") or cleaned in {"是", "是的", "y"}


def default_rules(gateway: CompletionGateway, long_text_threshold: int = 50) -> List:
    return [
        PatternRule(Intent.TRANSCRIPT, TRANSCRIPT_PATTERN),
        PatternRule(Intent.HELP, HELP_PATTERN),
        PatternRule(Intent.ABOUT_BOT, ABOUT_PATTERN),
        PatternRule(Intent.REGENERATE, REGENERATE_PATTERN),
        LengthRule(long_text_threshold),
        ModelRule(gateway),
    ]


class IntentClassifier:
    def __init__(self, rules: Sequence) -> None:
        self.rules = list(rules)

    def classify(self, text: str) -> Intent:
        if not normalize(text):
            return Intent.UNKNOWN
        for rule in self.rules:
            intent = rule.match(text)
            if intent is not None:
                logger.info(
                    "Classified message as %s by %s (len=%s)",
                    intent.value,
                    type(rule).__name__,
                    len(text),
                )
                return intent
        return Intent.UNKNOWN

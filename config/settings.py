from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here.
    """

    app_env: str = os.getenv("APP_ENV", "development")
    google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    top_p: float = float(os.getenv("MODEL_TOP_P", "0.9"))
    model_timeout: float = float(os.getenv("MODEL_TIMEOUT", "60"))

    line_channel_access_token: Optional[str] = os.getenv("LINE_CHANNEL_ACCESS_TOKEN")
    line_reply_url: str = os.getenv(
        "LINE_REPLY_URL", "https://api.line.me/v2/bot/message/reply"
    )

    memory_capacity: int = int(os.getenv("MEMORY_CAPACITY", "3"))
    memory_max_senders: int = int(os.getenv("MEMORY_MAX_SENDERS", "10000"))
    # 0 disables expiry
    memory_ttl_seconds: float = float(os.getenv("MEMORY_TTL_SECONDS", "0"))

    long_text_threshold: int = int(os.getenv("LONG_TEXT_THRESHOLD", "50"))
    reply_on_generation_failure: bool = _env_bool("REPLY_ON_GENERATION_FAILURE")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

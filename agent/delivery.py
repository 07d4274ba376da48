from __future__ import annotations

import logging
from typing import Optional

import httpx

from config.settings import Settings, get_settings


logger = logging.getLogger("titlebot.delivery")

# LINE rejects text messages longer than this
MAX_TEXT_LENGTH = 5000


class LineReplyClient:
    """Sends a reply to the conversation a reply token came from.

    Best effort: failures are logged and reported as False, never retried.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client

    def send(self, reply_token: str, text: str) -> bool:
        token = self.settings.line_channel_access_token
        if not token:
            logger.error("LINE_CHANNEL_ACCESS_TOKEN not configured, reply dropped")
            return False
        if not reply_token:
            logger.warning("Missing reply token, reply dropped")
            return False

        payload = {
            "replyToken": reply_token,
            "messages": [{"type": "text", "text": text[:MAX_TEXT_LENGTH]}],
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        try:
            if self._client is not None:
                response = self._client.post(
                    self.settings.line_reply_url, json=payload, headers=headers
                )
                response.raise_for_status()
            else:
                with httpx.Client(timeout=10.0) as client:
                    response = client.post(
                        self.settings.line_reply_url, json=payload, headers=headers
                    )
                    response.raise_for_status()
        except httpx.HTTPError as exc:
            detail = ""
            if isinstance(exc, httpx.HTTPStatusError):
                detail = exc.response.text[:500]
            logger.warning("Reply delivery failed: %s %s", exc, detail)
            return False

        logger.info("Reply delivered: %s chars", len(text))
        return True

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
import logging
from pydantic import BaseModel, Field, ValidationError

from agent.agent import ResponseOrchestrator, build_agent
from agent.core.prompt import GENERATION_FAILED_MESSAGE
from agent.delivery import LineReplyClient
from agent.llm import ConfigurationError
from config.settings import Settings, get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("titlebot")

app = FastAPI(title="Short Video Title Assistant", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class EventSource(BaseModel):
    type: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")
    group_id: Optional[str] = Field(None, alias="groupId")
    room_id: Optional[str] = Field(None, alias="roomId")

    @property
    def sender(self) -> Optional[str]:
        return self.user_id or self.group_id or self.room_id


class MessageContent(BaseModel):
    type: str
    text: Optional[str] = None


class MessageEvent(BaseModel):
    type: str
    reply_token: Optional[str] = Field(None, alias="replyToken")
    source: Optional[EventSource] = None
    message: Optional[MessageContent] = None


@lru_cache(maxsize=1)
def _build_orchestrator() -> ResponseOrchestrator:
    return build_agent()


def get_orchestrator() -> Optional[ResponseOrchestrator]:
    try:
        return _build_orchestrator()
    except ConfigurationError as exc:
        logger.error("Agent unavailable: %s", exc)
        return None


@lru_cache(maxsize=1)
def get_delivery() -> LineReplyClient:
    return LineReplyClient()


def _parse_event(raw: Any) -> Optional[MessageEvent]:
    try:
        event = MessageEvent.model_validate(raw)
    except ValidationError as exc:
        logger.info("Skipping malformed event: %s", exc.error_count())
        return None
    if event.type != "message" or event.message is None or event.message.type != "text":
        return None
    if event.message.text is None:
        return None
    return event


def process_events(
    events: List[Any],
    orchestrator: ResponseOrchestrator,
    delivery: LineReplyClient,
    settings: Settings,
) -> int:
    """Answer each text event in order. Returns the number of replies delivered."""
    delivered = 0
    for raw in events:
        event = _parse_event(raw)
        if event is None:
            continue

        text = event.message.text
        sender = (event.source.sender if event.source else None) or event.reply_token or ""
        try:
            reply = orchestrator.respond(sender, text)
        except Exception as exc:
            logger.exception("Reply generation failed: sender=%s error=%s", sender, exc)
            if not settings.reply_on_generation_failure:
                continue
            reply = GENERATION_FAILED_MESSAGE

        if delivery.send(event.reply_token or "", reply):
            delivered += 1
    return delivered


@app.post("/webhook")
async def webhook(
    request: Request,
    orchestrator: Optional[ResponseOrchestrator] = Depends(get_orchestrator),
    delivery: LineReplyClient = Depends(get_delivery),
    settings: Settings = Depends(get_settings),
):
    # Always acknowledge so the platform does not redeliver
    body = await request.body()
    try:
        payload = json.loads(body) if body else None
    except (ValueError, UnicodeDecodeError):
        logger.warning("Webhook body is not JSON (%s bytes)", len(body))
        return {"status": "ok"}

    events = payload.get("events") if isinstance(payload, dict) else None
    if not isinstance(events, list):
        logger.info("Webhook without an events list, ignoring")
        return {"status": "ok"}

    logger.info("Incoming webhook: events=%s", len(events))
    if orchestrator is None:
        return {"status": "ok"}
    try:
        delivered = await run_in_threadpool(
            process_events, events, orchestrator, delivery, settings
        )
    except Exception as exc:
        logger.exception("Webhook processing failed: %s", exc)
        return {"status": "ok"}
    logger.info("Webhook processed: replies=%s", delivered)
    return {"status": "ok"}


@app.get("/", response_class=PlainTextResponse)
def index():
    return "LINE 短影音標題產生器運行中"


@app.get("/health")
def health():
    return {"status": "ok"}

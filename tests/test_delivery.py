from __future__ import annotations

import json

import httpx

from agent.delivery import MAX_TEXT_LENGTH, LineReplyClient
from conftest import make_settings


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_send_posts_reply_with_bearer_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    sender = LineReplyClient(make_settings(), client=_client(handler))
    assert sender.send("rt-1", "hello") is True

    request = seen[0]
    assert str(request.url) == "https://line.test/v2/bot/message/reply"
    assert request.headers["Authorization"] == "Bearer line-token"
    assert json.loads(request.content) == {
        "replyToken": "rt-1",
        "messages": [{"type": "text", "text": "hello"}],
    }


def test_long_text_is_truncated():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    LineReplyClient(make_settings(), client=_client(handler)).send("rt", "字" * 6000)
    assert len(bodies[0]["messages"][0]["text"]) == MAX_TEXT_LENGTH


def test_http_error_is_reported_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Invalid reply token"})

    sender = LineReplyClient(make_settings(), client=_client(handler))
    assert sender.send("expired", "hello") is False


def test_transport_error_is_reported_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    sender = LineReplyClient(make_settings(), client=_client(handler))
    assert sender.send("rt", "hello") is False


def test_missing_credentials_skip_the_call():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("should not be called")

    no_token = LineReplyClient(
        make_settings(line_channel_access_token=None), client=_client(handler)
    )
    assert no_token.send("rt", "hello") is False

    no_reply_token = LineReplyClient(make_settings(), client=_client(handler))
    assert no_reply_token.send("", "hello") is False

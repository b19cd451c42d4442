from __future__ import annotations

import json

import httpx
import pytest

from app.application.exceptions import ChannelError
from app.application.ports.message_platform import Button, ListRow
from app.infrastructure.whatsapp.whapi_client import WhapiClient
from app.infrastructure.whatsapp.whapi_platform import WhapiPlatform


def _platform(handler) -> WhapiPlatform:
    client = WhapiClient(api_token="token-1", base_url="https://gate.test/", transport=httpx.MockTransport(handler))
    return WhapiPlatform(client)


def test_buttons_payload_and_auth_header():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"sent": True})

    _platform(handler).send_buttons("923001234567", "Pick one", [Button(id="buy", title="A very long button title here")])

    assert seen["url"] == "https://gate.test/messages/interactive"
    assert seen["auth"] == "Bearer token-1"
    button = seen["body"]["action"]["buttons"][0]
    assert button == {"type": "quick_reply", "id": "buy", "title": "A very long button t"}


def test_list_rows_truncated():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={})

    rows = [ListRow(id="qty_1", title="1", description="d" * 100), ListRow(id="qty_2", title="2")]
    _platform(handler).send_list("1", "How many?", "Select Quantity Now!!", rows, "Quantity")

    wire = seen["body"]["action"]["list"]
    assert wire["label"] == "Select Quantity Now!"
    assert len(wire["sections"][0]["rows"][0]["description"]) == 72
    assert "description" not in wire["sections"][0]["rows"][1]


def test_error_status_raises_channel_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "bad token"}})

    with pytest.raises(ChannelError):
        _platform(handler).send_text("1", "hello")


def test_media_download():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, content=b"\xff\xd8jpeg")

    assert _platform(handler).fetch_media_bytes("https://gate.test/media/abc") == b"\xff\xd8jpeg"
    assert seen["url"] == "https://gate.test/media/abc"
    assert seen["auth"] == "Bearer token-1"


def test_media_on_other_host_is_fetched_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["host"] = request.url.host
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, content=b"OggS")

    assert _platform(handler).fetch_media_bytes("https://attacker.example/a.ogg") == b"OggS"
    assert seen["host"] == "attacker.example"
    assert seen["auth"] is None


def test_network_error_raises_channel_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ChannelError):
        _platform(handler).fetch_media_bytes("https://gate.test/media/abc")

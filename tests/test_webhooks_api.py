from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.api import webhooks
from app.core.config import settings
from app.domain.entities.inbound_event import Modality
from app.main import app


class RecordingUseCase:
    def __init__(self) -> None:
        self.events = []

    def handle(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def use_case(monkeypatch):
    recorder = RecordingUseCase()
    monkeypatch.setattr(webhooks, "get_handle_incoming_message_use_case", lambda: recorder)
    monkeypatch.setattr(settings, "WHATSAPP_VERIFY_TOKEN", "verify-me")
    return recorder


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_verification_echoes_challenge(client, use_case):
    resp = client.get(
        "/webhooks/whatsapp",
        params={"hub.mode": "subscribe", "hub.verify_token": "verify-me", "hub.challenge": "12345"},
    )

    assert resp.status_code == 200
    assert resp.text == "12345"


def test_verification_wrong_token(client, use_case):
    resp = client.get("/webhooks/whatsapp", params={"hub.mode": "subscribe", "hub.verify_token": "nope"})

    assert resp.status_code == 403


def test_bare_get_is_ok(client, use_case):
    assert client.get("/webhooks/whatsapp").json() == {"status": "ok"}


def test_post_queues_each_inbound_message(client, use_case):
    payload = {
        "messages": [
            {"id": "m1", "chat_id": "923001234567@s.whatsapp.net", "type": "text", "text": {"body": "hi"}},
            {"id": "m2", "from_me": True, "chat_id": "923001234567@s.whatsapp.net", "type": "text", "text": {"body": "x"}},
            {
                "id": "m3",
                "chat_id": "923001234567@s.whatsapp.net",
                "type": "reply",
                "reply": {"type": "buttons_reply", "buttons_reply": {"id": "ButtonsV3:lang_en"}},
            },
        ]
    }

    resp = client.post("/webhooks/whatsapp", json=payload)

    assert resp.status_code == 200
    assert [e.modality for e in use_case.events] == [Modality.TEXT, Modality.BUTTON]
    assert use_case.events[1].button_id == "lang_en"


def test_post_invalid_json(client, use_case):
    resp = client.post("/webhooks/whatsapp", content=b"{not json", headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert use_case.events == []

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import BaseModel, Field

from app.application.utils.messages import (
    BUTTON_AGENT,
    BUTTON_BUY,
    BUTTON_NEXT,
    BUTTON_PAYMENT_COD,
    BUTTON_PAYMENT_EASYPAISA,
)
from app.domain.entities.inbound_event import InboundEvent, Modality


logger = logging.getLogger(__name__)

WHATSAPP_SUFFIX = "@s.whatsapp.net"
VOICE_TYPES = ("audio", "voice", "ptt")

# Whapi.Cloud sometimes delivers a button tap as an "action" carrying only the
# button title. Titles are matched by substring in both languages.
ACTION_TITLE_KEYWORDS: list[tuple[tuple[str, ...], str]] = [
    (("buy", "خرید"), BUTTON_BUY),
    (("next", "اگل"), BUTTON_NEXT),
    (("agent", "ایجنٹ"), BUTTON_AGENT),
    (("easypaisa", "ایزی"), BUTTON_PAYMENT_EASYPAISA),
    (("cash", "کیش"), BUTTON_PAYMENT_COD),
]

_BUTTON_PREFIX = re.compile(r"^ButtonsV3:")
_LIST_PREFIX = re.compile(r"^ListV3:")


def match_action_title(title: str) -> str | None:
    lowered = title.lower().strip()
    for keywords, button_id in ACTION_TITLE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return button_id
    return None


class WebhookEventDTO(BaseModel):
    """Whapi.Cloud webhook body: an array of channel messages."""

    messages: list[dict[str, Any]] = Field(default_factory=list)

    def extract_events(self, media_base_url: str = "https://gate.whapi.cloud") -> list[InboundEvent]:
        events: list[InboundEvent] = []
        for msg in self.messages or []:
            if msg.get("from_me"):
                continue

            identity = _identity(msg)
            if not identity:
                continue

            event = _normalize(msg, identity, media_base_url)
            if event is None:
                logger.info("Unsupported webhook message skipped", extra={"wa_id": identity, "reason": msg.get("type")})
                continue
            events.append(event)
        return events


def _identity(msg: dict[str, Any]) -> str | None:
    chat_id = msg.get("chat_id")
    if chat_id:
        return str(chat_id).replace(WHATSAPP_SUFFIX, "")
    sender = msg.get("from")
    return str(sender) if sender else None


def _timestamp(msg: dict[str, Any]) -> int | None:
    try:
        return int(msg["timestamp"])
    except (KeyError, TypeError, ValueError):
        return None


def _media_ref(media: dict[str, Any] | None, media_base_url: str) -> str | None:
    if not media:
        return None
    if media.get("link"):
        return str(media["link"])
    if media.get("id"):
        return f"{media_base_url.rstrip('/')}/media/{media['id']}"
    return None


def _normalize(msg: dict[str, Any], identity: str, media_base_url: str) -> InboundEvent | None:
    base = {
        "identity": identity,
        "message_id": str(msg["id"]) if msg.get("id") else None,
        "timestamp": _timestamp(msg),
    }
    msg_type = msg.get("type")

    if msg_type == "text":
        text = msg.get("text")
        if isinstance(text, dict):
            text = text.get("body")
        if text is None:
            return None
        return InboundEvent(modality=Modality.TEXT, text=str(text), **base)

    if msg_type == "interactive":
        interactive = msg.get("interactive") or {}
        if interactive.get("type") == "button_reply":
            reply = interactive.get("button_reply") or {}
            return InboundEvent(modality=Modality.BUTTON, button_id=str(reply.get("id") or ""), **base)
        if interactive.get("type") == "list_reply":
            reply = interactive.get("list_reply") or {}
            return InboundEvent(modality=Modality.LIST, list_id=str(reply.get("id") or ""), **base)
        return None

    if msg_type == "reply":
        reply = msg.get("reply") or {}
        if reply.get("type") == "buttons_reply" and reply.get("buttons_reply"):
            button_id = _BUTTON_PREFIX.sub("", str(reply["buttons_reply"].get("id") or ""))
            return InboundEvent(modality=Modality.BUTTON, button_id=button_id, **base)
        if reply.get("type") == "list_reply" and reply.get("list_reply"):
            list_id = _LIST_PREFIX.sub("", str(reply["list_reply"].get("id") or ""))
            return InboundEvent(modality=Modality.LIST, list_id=list_id, **base)
        return None

    if msg_type == "action":
        action = msg.get("action") or {}
        button_id = action.get("id") or action.get("button_id")
        title = action.get("body") or action.get("title")
        if button_id:
            return InboundEvent(modality=Modality.BUTTON, button_id=str(button_id), **base)
        if title:
            matched = match_action_title(str(title))
            if matched:
                return InboundEvent(modality=Modality.BUTTON, button_id=matched, **base)
            return InboundEvent(modality=Modality.TEXT, text=str(title), **base)
        return None

    if msg_type == "image":
        media_ref = _media_ref(msg.get("image"), media_base_url)
        if not media_ref:
            return None
        return InboundEvent(modality=Modality.IMAGE, media_ref=media_ref, **base)

    if msg_type in VOICE_TYPES:
        media = msg.get("audio") or msg.get("voice") or msg.get("ptt")
        media_ref = _media_ref(media, media_base_url)
        if not media_ref:
            return None
        return InboundEvent(modality=Modality.VOICE, media_ref=media_ref, **base)

    return None

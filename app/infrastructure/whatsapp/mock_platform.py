from __future__ import annotations

import logging
from typing import Any

from app.application.ports.message_platform import Button, ListRow, MessagePlatformPort


class MockWhatsAppPlatform(MessagePlatformPort):
    """Records outbound messages instead of sending them. Media refs resolve to fixed bytes."""

    def __init__(self, media: dict[str, bytes] | None = None) -> None:
        self.sent: list[dict[str, Any]] = []
        self._media = dict(media or {})
        self._logger = logging.getLogger(__name__)

    def _record(self, kind: str, recipient_id: str, **payload: Any) -> None:
        entry = {"kind": kind, "to": recipient_id, **payload}
        self.sent.append(entry)
        self._logger.info("Mock send to WhatsApp", extra={"wa_id": recipient_id, "reason": kind, "text": payload.get("text")})

    def send_text(self, recipient_id: str, text: str) -> None:
        self._record("text", recipient_id, text=text)

    def send_buttons(self, recipient_id: str, text: str, buttons: list[Button]) -> None:
        self._record("buttons", recipient_id, text=text, buttons=list(buttons))

    def send_list(
        self,
        recipient_id: str,
        text: str,
        button_label: str,
        rows: list[ListRow],
        section_title: str,
    ) -> None:
        self._record(
            "list",
            recipient_id,
            text=text,
            button_label=button_label,
            rows=list(rows),
            section_title=section_title,
        )

    def send_image(self, recipient_id: str, image_ref: str, caption: str | None = None) -> None:
        self._record("image", recipient_id, image_ref=image_ref, text=caption)

    def send_audio(self, recipient_id: str, audio_ref: str) -> None:
        self._record("audio", recipient_id, audio_ref=audio_ref)

    def fetch_media_bytes(self, media_ref: str) -> bytes:
        return self._media.get(media_ref, media_ref.encode("utf-8"))

from __future__ import annotations

from app.application.ports.message_platform import Button, ListRow, MessagePlatformPort
from app.infrastructure.whatsapp.whapi_client import WhapiClient


class WhapiPlatform(MessagePlatformPort):
    def __init__(self, client: WhapiClient) -> None:
        self._client = client

    def send_text(self, recipient_id: str, text: str) -> None:
        self._client.send_text(to=recipient_id, body=text)

    def send_buttons(self, recipient_id: str, text: str, buttons: list[Button]) -> None:
        self._client.send_buttons(
            to=recipient_id,
            body=text,
            buttons=[{"id": b.id, "title": b.title} for b in buttons[: self.MAX_BUTTONS]],
        )

    def send_list(
        self,
        recipient_id: str,
        text: str,
        button_label: str,
        rows: list[ListRow],
        section_title: str,
    ) -> None:
        self._client.send_list(
            to=recipient_id,
            body=text,
            label=button_label,
            rows=[{"id": r.id, "title": r.title, "description": r.description} for r in rows[: self.MAX_LIST_ROWS]],
            section_title=section_title,
        )

    def send_image(self, recipient_id: str, image_ref: str, caption: str | None = None) -> None:
        self._client.send_image(to=recipient_id, media=image_ref, caption=caption)

    def send_audio(self, recipient_id: str, audio_ref: str) -> None:
        self._client.send_audio(to=recipient_id, media=audio_ref)

    def fetch_media_bytes(self, media_ref: str) -> bytes:
        return self._client.download_media(media_ref)

from __future__ import annotations

import logging

from app.application.ports.message_platform import Button, ListRow, MessagePlatformPort
from app.application.utils.messages import audio_url, bilingual


class SendReplyUseCase:
    """
    Outbound side of a turn.

    Text, buttons, lists and images go out in call order and failures propagate.
    Companion audio prompts are best-effort: a failed audio send is logged and dropped.
    With `enabled=False` nothing is sent and every message is logged instead.
    """

    def __init__(
        self,
        platform: MessagePlatformPort,
        enabled: bool = True,
        audio_enabled: bool = True,
        audio_base_url: str = "http://localhost:8000",
    ) -> None:
        self._platform = platform
        self._enabled = enabled
        self._audio_enabled = audio_enabled
        self._audio_base_url = audio_base_url
        self._logger = logging.getLogger(__name__)

    def _skip(self, recipient_id: str, kind: str, text: str | None = None) -> bool:
        if self._enabled:
            return False
        self._logger.info("WOULD_SEND_REPLY", extra={"wa_id": recipient_id, "reason": kind, "text": text})
        return True

    def execute(self, recipient_id: str, text: str) -> bool:
        """Send a reply. Returns True if actually sent, False if skipped."""
        if self._skip(recipient_id, "text", text):
            return False
        self._platform.send_text(recipient_id=recipient_id, text=text)
        return True

    def send_buttons(self, recipient_id: str, text: str, buttons: list[Button]) -> bool:
        if len(buttons) > MessagePlatformPort.MAX_BUTTONS:
            raise ValueError(f"At most {MessagePlatformPort.MAX_BUTTONS} buttons can be sent")
        if self._skip(recipient_id, "buttons", text):
            return False
        self._platform.send_buttons(recipient_id=recipient_id, text=text, buttons=buttons)
        return True

    def send_list(self, recipient_id: str, text: str, button_label: str, rows: list[ListRow], section_title: str) -> bool:
        if len(rows) > MessagePlatformPort.MAX_LIST_ROWS:
            raise ValueError(f"At most {MessagePlatformPort.MAX_LIST_ROWS} list rows can be sent")
        if self._skip(recipient_id, "list", text):
            return False
        self._platform.send_list(
            recipient_id=recipient_id,
            text=text,
            button_label=button_label,
            rows=rows,
            section_title=section_title,
        )
        return True

    def send_image(self, recipient_id: str, image_ref: str, caption: str | None = None) -> bool:
        if self._skip(recipient_id, "image", caption):
            return False
        self._platform.send_image(recipient_id=recipient_id, image_ref=image_ref, caption=caption)
        return True

    def audio_prompt(self, recipient_id: str, key: str) -> bool:
        """Companion audio for a message key. Never raises."""
        if not self._audio_enabled:
            return False
        url = audio_url(key, self._audio_base_url)
        if not url:
            return False
        if self._skip(recipient_id, "audio", url):
            return False
        try:
            self._platform.send_audio(recipient_id=recipient_id, audio_ref=url)
        except Exception:
            self._logger.warning(
                "Audio prompt send failed",
                extra={"wa_id": recipient_id, "reason": key},
                exc_info=True,
            )
            return False
        return True

    def prompt(self, recipient_id: str, key: str, **params) -> None:
        """Bilingual text for a message key, then its audio companion."""
        self.execute(recipient_id, bilingual(key, **params))
        self.audio_prompt(recipient_id, key)

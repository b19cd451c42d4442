from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Button:
    id: str
    title: str


@dataclass(frozen=True)
class ListRow:
    id: str
    title: str
    description: str | None = None


class MessagePlatformPort(ABC):
    MAX_BUTTONS = 3
    MAX_LIST_ROWS = 10

    @abstractmethod
    def send_text(self, recipient_id: str, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def send_buttons(self, recipient_id: str, text: str, buttons: list[Button]) -> None:
        """Send an interactive message with at most MAX_BUTTONS quick-reply buttons."""
        raise NotImplementedError

    @abstractmethod
    def send_list(
        self,
        recipient_id: str,
        text: str,
        button_label: str,
        rows: list[ListRow],
        section_title: str,
    ) -> None:
        """Send a single-section list with at most MAX_LIST_ROWS rows."""
        raise NotImplementedError

    @abstractmethod
    def send_image(self, recipient_id: str, image_ref: str, caption: str | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def send_audio(self, recipient_id: str, audio_ref: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def fetch_media_bytes(self, media_ref: str) -> bytes:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Modality(str, Enum):
    TEXT = "text"
    BUTTON = "button"
    LIST = "list"
    IMAGE = "image"
    VOICE = "voice"


@dataclass(frozen=True)
class InboundEvent:
    identity: str
    modality: Modality
    message_id: str | None = None
    text: str | None = None
    button_id: str | None = None
    list_id: str | None = None
    media_ref: str | None = None
    timestamp: int | None = None

    def as_text(self, text: str) -> "InboundEvent":
        """Same event re-expressed as typed text (used after voice transcription)."""
        return InboundEvent(
            identity=self.identity,
            modality=Modality.TEXT,
            message_id=self.message_id,
            text=text,
            timestamp=self.timestamp,
        )

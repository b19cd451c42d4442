from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.field_kind import FieldKind


class LanguageServicePort(ABC):
    @abstractmethod
    def transcribe(
        self,
        audio: bytes,
        language_hint: str | None,
        vocabulary_hint: str | None,
    ) -> str:
        """
        Transcribe a voice recording.

        Raises:
            LLMUpstreamError: provider unreachable or failed
        """
        raise NotImplementedError

    @abstractmethod
    def extract_field(self, text: str, field: FieldKind, language: str) -> str | None:
        """
        Pull a single field value out of free text.

        Returns the candidate as a string (callers re-validate it), or None when
        nothing usable was found or the provider answered in a bad shape.

        Raises:
            LLMUpstreamError: provider unreachable or failed
        """
        raise NotImplementedError

    @abstractmethod
    def cleanup_transcript(self, text: str, field: FieldKind) -> str | None:
        """
        Normalize a raw transcription for the expected field (spoken numbers to
        digits, filler removal, place-name and name spelling fixes).

        Returns None when the provider produced nothing usable.

        Raises:
            LLMUpstreamError: provider unreachable or failed
        """
        raise NotImplementedError

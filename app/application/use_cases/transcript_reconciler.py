from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from app.application.exceptions import LLMUpstreamError, TranscriptionError
from app.application.ports.language_service import LanguageServicePort
from app.application.utils.vocabulary_hints import vocabulary_hint
from app.domain.entities.conversation import Language
from app.domain.entities.field_kind import FieldKind


class TranscriptReconciler:
    """
    Voice input to text for the field the conversation is waiting for.

    Names are transcribed twice in parallel (English and Urdu hints) and the two
    readings are reconciled into one name. Other fields get a single transcription
    in the conversation's language followed by a field-specific cleanup pass.
    Without an expected field the transcription is returned as-is.
    """

    def __init__(self, language_service: LanguageServicePort) -> None:
        self._language_service = language_service
        self._logger = logging.getLogger(__name__)

    def transcribe(self, audio: bytes, field: FieldKind | None, language: Language | None) -> str:
        """
        Raises:
            TranscriptionError: the language service could not produce any text
        """
        try:
            if field == FieldKind.NAME:
                return self._reconcile_name(audio)
            return self._transcribe_single(audio, field, language)
        except LLMUpstreamError as e:
            raise TranscriptionError(f"Transcription failed: {e}") from e

    def _transcribe_single(self, audio: bytes, field: FieldKind | None, language: Language | None) -> str:
        lang = language.value if language else Language.EN.value
        raw = self._language_service.transcribe(audio, lang, vocabulary_hint(field))
        self._logger.debug("Raw transcription", extra={"field": field.value if field else None, "text": raw})
        if field is None or not raw.strip():
            return raw

        cleaned = self._language_service.cleanup_transcript(raw, field)
        if not cleaned:
            return raw
        self._logger.debug("Cleaned transcription", extra={"field": field.value, "text": cleaned})
        return cleaned

    def _reconcile_name(self, audio: bytes) -> str:
        hint = vocabulary_hint(FieldKind.NAME)
        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = {
                lang: pool.submit(self._language_service.transcribe, audio, lang.value, hint)
                for lang in (Language.EN, Language.UR)
            }
            readings: dict[Language, str] = {}
            for lang, future in futures.items():
                try:
                    readings[lang] = future.result()
                except LLMUpstreamError:
                    self._logger.warning("Name transcription failed", extra={"reason": lang.value})

        if not readings:
            raise LLMUpstreamError("Both name transcriptions failed")

        first = readings.get(Language.EN, readings.get(Language.UR, ""))
        self._logger.debug(
            "Name transcriptions",
            extra={"text": f"en={readings.get(Language.EN)!r} ur={readings.get(Language.UR)!r}"},
        )
        if not any(text.strip() for text in readings.values()):
            return first

        combined = "\n".join(
            f"{label}: {readings[lang]}"
            for lang, label in ((Language.EN, "English"), (Language.UR, "Urdu"))
            if lang in readings
        )
        reconciled = self._language_service.cleanup_transcript(combined, FieldKind.NAME)
        return reconciled or first

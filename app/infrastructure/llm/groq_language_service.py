from __future__ import annotations

import json
import logging
from typing import Any

from openai import OpenAI

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.ports.language_service import LanguageServicePort
from app.domain.entities.field_kind import FieldKind
from app.infrastructure.llm.prompts import build_cleanup_prompt, build_extract_prompt


class GroqLanguageService(LanguageServicePort):
    """
    Groq-backed adapter implementing LanguageServicePort through Groq's
    OpenAI-compatible API (chat completions in JSON mode, Whisper transcription).

    Contract guarantees:
    - transcribe returns the transcription text (possibly empty)
    - extract_field returns a candidate string or None
    - cleanup_transcript returns cleaned text or None
    - Raises:
        LLMUpstreamError: networking/provider failures
    An answer in the wrong shape is reported as None, never raised.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.groq.com/openai/v1",
        model: str = "llama-3.3-70b-versatile",
        whisper_model: str = "whisper-large-v3-turbo",
        temperature: float = 0.0,
        timeout: float = 30.0,
    ) -> None:
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self._model = model
        self._whisper_model = whisper_model
        self._temperature = temperature
        self._logger = logging.getLogger(__name__)

    def transcribe(self, audio: bytes, language_hint: str | None, vocabulary_hint: str | None) -> str:
        kwargs: dict[str, Any] = {
            "model": self._whisper_model,
            "file": ("voice.ogg", audio),
            "response_format": "json",
            "temperature": 0,
        }
        if language_hint:
            kwargs["language"] = language_hint
        if vocabulary_hint:
            kwargs["prompt"] = vocabulary_hint

        try:
            resp = self.client.audio.transcriptions.create(**kwargs)
        except Exception as e:
            raise LLMUpstreamError(f"Groq transcription error: {e}") from e

        return (getattr(resp, "text", None) or "").strip()

    def extract_field(self, text: str, field: FieldKind, language: str) -> str | None:
        try:
            data = self._call_json(build_extract_prompt(field, language), text, what="extract")
        except LLMContractError as e:
            self._logger.warning("Extraction contract violation", extra={"field": field.value, "reason": str(e)})
            return None

        value = data.get(field.value)
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str):
            return value.strip() or None
        return None

    def cleanup_transcript(self, text: str, field: FieldKind) -> str | None:
        try:
            data = self._call_json(build_cleanup_prompt(field), text, what="cleanup")
        except LLMContractError as e:
            self._logger.warning("Cleanup contract violation", extra={"field": field.value, "reason": str(e)})
            return None

        cleaned = data.get("cleaned")
        if isinstance(cleaned, (int, float)) and not isinstance(cleaned, bool):
            return str(cleaned)
        if isinstance(cleaned, str):
            return cleaned.strip() or None
        return None

    def _call_json(self, system_prompt: str, user_text: str, what: str) -> dict[str, Any]:
        try:
            resp = self.client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_text},
                ],
                temperature=self._temperature,
                response_format={"type": "json_object"},
            )
        except Exception as e:
            raise LLMUpstreamError(f"Groq API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError(f"{what.capitalize()}: empty response text.")

        data = _parse_json(content, what)
        if not isinstance(data, dict):
            raise LLMContractError(f"{what.capitalize()}: expected a JSON object.")
        return data


def _parse_json(text: str, what: str) -> Any:
    try:
        return json.loads(text)
    except Exception:
        snippet = text[:200].replace("\n", " ")
        raise LLMContractError(f"{what.capitalize()}: invalid JSON. Snippet: {snippet!r}")

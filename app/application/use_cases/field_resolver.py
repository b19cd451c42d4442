from __future__ import annotations

import logging
from typing import Any, Callable

from app.application.exceptions import LLMContractError
from app.application.ports.language_service import LanguageServicePort
from app.application.utils.validators import validate
from app.domain.entities.conversation import Language
from app.domain.entities.field_kind import FieldKind


# A candidate source turns raw input into a value to be validated, or None.
CandidateSource = Callable[[str, FieldKind, "Language | None"], Any]


class FieldResolver:
    """
    Turns raw user text into a trusted field value.

    Candidate sources are tried in order and the first candidate that passes the
    deterministic validator wins. The default order is the raw input itself, then
    language-service extraction, so well-formed input never leaves the process.
    Every candidate is validated regardless of where it came from.
    """

    def __init__(
        self,
        language_service: LanguageServicePort,
        sources: list[CandidateSource] | None = None,
    ) -> None:
        self._language_service = language_service
        self._sources: list[CandidateSource] = sources or [self._raw_input, self._extracted]
        self._logger = logging.getLogger(__name__)

    def resolve(self, raw_input: str | None, field: FieldKind, language: Language | None) -> Any:
        if raw_input is None:
            return None
        for source in self._sources:
            candidate = source(raw_input, field, language)
            if candidate is None:
                continue
            value = validate(field, candidate)
            if value is not None:
                return value
            self._logger.info(
                "Candidate rejected by validator",
                extra={"field": field.value, "reason": getattr(source, "__name__", "source")},
            )
        return None

    def _raw_input(self, raw_input: str, field: FieldKind, language: Language | None) -> Any:
        return raw_input

    def _extracted(self, raw_input: str, field: FieldKind, language: Language | None) -> Any:
        if not raw_input.strip():
            return None
        self._logger.info("Validator miss, trying extraction", extra={"field": field.value})
        lang = language.value if language else Language.EN.value
        try:
            return self._language_service.extract_field(raw_input, field, lang)
        except LLMContractError:
            self._logger.warning("Extraction returned an unusable answer", extra={"field": field.value})
            return None

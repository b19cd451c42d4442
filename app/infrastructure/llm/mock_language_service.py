from __future__ import annotations

import re

from app.application.ports.language_service import LanguageServicePort
from app.domain.entities.field_kind import FieldKind


SPOKEN_DIGITS = {
    "zero": "0", "oh": "0", "one": "1", "two": "2", "three": "3", "four": "4",
    "five": "5", "six": "6", "seven": "7", "eight": "8", "nine": "9",
    "صفر": "0", "ایک": "1", "دو": "2", "تین": "3", "چار": "4",
    "پانچ": "5", "چھ": "6", "سات": "7", "آٹھ": "8", "نو": "9",
}

NAME_FILLERS = re.compile(r"^(my name is|mera naam hai|mera naam|english:|urdu:)\s*", re.IGNORECASE)


def spoken_digits_to_text(text: str) -> str:
    """'zero three double one ...' -> '0311...'. Unknown words are dropped."""
    out: list[str] = []
    repeat = 1
    for word in re.findall(r"[^\s,.\-]+", text.lower()):
        if word in ("double", "triple"):
            repeat = 2 if word == "double" else 3
            continue
        if word.isdigit():
            out.append(word * repeat if len(word) == 1 else word)
        elif word in SPOKEN_DIGITS:
            out.append(SPOKEN_DIGITS[word] * repeat)
        repeat = 1
    return "".join(out)


class MockLanguageService(LanguageServicePort):
    """
    Deterministic offline stand-in.

    Voice payloads are treated as UTF-8 text (the local harness sends the words
    it wants "heard"). Extraction handles spoken digits for phone and quantity
    and strips common name prefixes.
    """

    def transcribe(self, audio: bytes, language_hint: str | None, vocabulary_hint: str | None) -> str:
        return audio.decode("utf-8", errors="ignore").strip()

    def extract_field(self, text: str, field: FieldKind, language: str) -> str | None:
        if field in (FieldKind.PHONE, FieldKind.QUANTITY):
            digits = spoken_digits_to_text(text)
            return digits or None
        if field == FieldKind.NAME:
            cleaned = NAME_FILLERS.sub("", text.strip()).strip(" .,")
            return cleaned or None
        return text.strip() or None

    def cleanup_transcript(self, text: str, field: FieldKind) -> str | None:
        if field == FieldKind.NAME:
            first_line = text.splitlines()[0] if text else ""
            cleaned = NAME_FILLERS.sub("", first_line.strip())
            cleaned = NAME_FILLERS.sub("", cleaned).strip(" .,")
            return cleaned.title() or None
        if field in (FieldKind.PHONE, FieldKind.QUANTITY):
            return spoken_digits_to_text(text) or None
        return text.strip() or None

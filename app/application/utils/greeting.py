from __future__ import annotations

from typing import Iterable


def normalize(text: str) -> str:
    return " ".join(text.lower().split())


def is_greeting(text: str | None, phrases: Iterable[str]) -> bool:
    """A text greets when it equals a configured phrase or starts with the phrase and a space."""
    if not text:
        return False
    normalized = normalize(text)
    for phrase in phrases:
        candidate = normalize(phrase)
        if not candidate:
            continue
        if normalized == candidate or normalized.startswith(candidate + " "):
            return True
    return False

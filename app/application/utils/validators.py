"""
Deterministic field validators.

Each validator is total: it accepts any input, never raises, and returns either
the normalized value or None.
"""
from __future__ import annotations

import re
from typing import Any, Callable

from app.domain.entities.field_kind import FieldKind


QUANTITY_MIN = 1
QUANTITY_MAX = 100
NAME_MAX_LENGTH = 100
ADDRESS_MIN_LENGTH = 5
ADDRESS_MAX_LENGTH = 500

_LOCAL_MOBILE = re.compile(r"^0(3\d{9})$")
_INTERNATIONAL_MOBILE = re.compile(r"^\+?92(3\d{9})$")
_PHONE_NOISE = re.compile(r"[\s\-().]")
_INTEGER = re.compile(r"^\d{1,3}$")

# Extended Arabic-Indic (Urdu) and Arabic-Indic digits
_DIGIT_TABLE = str.maketrans("۰۱۲۳۴۵۶۷۸۹٠١٢٣٤٥٦٧٨٩", "01234567890123456789")

QUANTITY_WORDS: dict[str, int] = {
    # English
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10,
    # Romanized Urdu
    "ek": 1, "aik": 1, "do": 2, "teen": 3, "tin": 3, "char": 4, "chaar": 4,
    "paanch": 5, "panch": 5, "chay": 6, "che": 6, "chhe": 6, "saat": 7,
    "aath": 8, "nau": 9, "das": 10,
    # Urdu script
    "ایک": 1, "دو": 2, "تین": 3, "چار": 4, "پانچ": 5,
    "چھ": 6, "چھے": 6, "سات": 7, "آٹھ": 8, "نو": 9, "دس": 10,
}


def _as_text(raw: Any) -> str | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return str(raw)
    except Exception:
        return None


def validate_phone(raw: Any) -> str | None:
    """Pakistani mobile number -> canonical +92XXXXXXXXXX (10 digits starting with 3)."""
    text = _as_text(raw)
    if not text:
        return None
    cleaned = _PHONE_NOISE.sub("", text.translate(_DIGIT_TABLE))

    match = _LOCAL_MOBILE.match(cleaned) or _INTERNATIONAL_MOBILE.match(cleaned)
    if not match:
        return None

    subscriber = match.group(1)
    if len(subscriber) != 10 or not subscriber.startswith("3"):
        return None
    return f"+92{subscriber}"


def validate_quantity(raw: Any) -> int | None:
    """Integer in [1, 100], as a number, digits, or a word for one..ten."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if QUANTITY_MIN <= raw <= QUANTITY_MAX else None
    if isinstance(raw, float):
        if not raw.is_integer():
            return None
        return validate_quantity(int(raw))

    text = _as_text(raw)
    if not text:
        return None
    cleaned = text.strip().translate(_DIGIT_TABLE).lower()

    if _INTEGER.match(cleaned):
        value = int(cleaned)
        return value if QUANTITY_MIN <= value <= QUANTITY_MAX else None

    return QUANTITY_WORDS.get(cleaned)


def validate_name(raw: Any) -> str | None:
    """1-100 characters after trimming, with at least one Latin or Urdu letter."""
    text = _as_text(raw)
    if text is None:
        return None
    cleaned = text.strip()
    if not 1 <= len(cleaned) <= NAME_MAX_LENGTH:
        return None
    # Digits and punctuation in the Arabic block are not letters
    if not any(ch.isalpha() for ch in cleaned):
        return None
    return cleaned


def validate_address(raw: Any) -> str | None:
    """5-500 characters after trimming. Content is not checked."""
    text = _as_text(raw)
    if text is None:
        return None
    cleaned = text.strip()
    if not ADDRESS_MIN_LENGTH <= len(cleaned) <= ADDRESS_MAX_LENGTH:
        return None
    return cleaned


VALIDATORS: dict[FieldKind, Callable[[Any], Any]] = {
    FieldKind.QUANTITY: validate_quantity,
    FieldKind.NAME: validate_name,
    FieldKind.PHONE: validate_phone,
    FieldKind.ADDRESS: validate_address,
}


def validate(field: FieldKind, raw: Any) -> Any:
    return VALIDATORS[field](raw)

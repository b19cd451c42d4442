from __future__ import annotations

import pytest

from app.application.utils.validators import (
    validate,
    validate_address,
    validate_name,
    validate_phone,
    validate_quantity,
)
from app.domain.entities.field_kind import FieldKind


@pytest.mark.parametrize(
    "raw",
    ["03001234567", "+923001234567", "923001234567", "0300-1234567", "+92 300 1234567", "(0300) 123 4567"],
)
def test_phone_formats_normalize_to_canonical(raw):
    assert validate_phone(raw) == "+923001234567"


def test_phone_urdu_digits():
    assert validate_phone("۰۳۰۰۱۲۳۴۵۶۷") == "+923001234567"


@pytest.mark.parametrize(
    "raw",
    [None, "", "0300123456", "030012345678", "04212345678", "+14155552671", "zero three", 3001234567, True],
)
def test_phone_rejects(raw):
    assert validate_phone(raw) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("5", 5), (" 12 ", 12), ("100", 100), (7, 7), (3.0, 3), ("three", 3), ("Teen", 3), ("پانچ", 5), ("۴", 4)],
)
def test_quantity_accepts(raw, expected):
    assert validate_quantity(raw) == expected


@pytest.mark.parametrize("raw", ["0", "101", "-2", "2.5", 2.5, "", None, True, "5 shirts", "no"])
def test_quantity_rejects(raw):
    assert validate_quantity(raw) is None


def test_name_trims_and_requires_a_letter():
    assert validate_name("  Ayesha Khan ") == "Ayesha Khan"
    assert validate_name("عائشہ") == "عائشہ"
    assert validate_name("12345") is None
    assert validate_name("۱۲۳") is None
    assert validate_name("٤٥") is None
    assert validate_name("؟،") is None
    assert validate_name("   ") is None
    assert validate_name("a" * 101) is None


def test_address_length_bounds():
    assert validate_address(" House 1 ") == "House 1"
    assert validate_address("abcd") is None
    assert validate_address("x" * 501) is None
    assert validate_address("x" * 500) == "x" * 500


def test_validate_dispatches_by_field():
    assert validate(FieldKind.QUANTITY, "2") == 2
    assert validate(FieldKind.PHONE, "03211234567") == "+923211234567"


@pytest.mark.parametrize("raw", ["03001234567", "+92 345 1234567", "923211234567", "۰۳۳۳۱۲۳۴۵۶۷"])
def test_phone_validation_is_idempotent(raw):
    canonical = validate_phone(raw)

    assert canonical is not None
    assert validate_phone(canonical) == canonical

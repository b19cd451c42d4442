from __future__ import annotations

import pytest

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.use_cases.field_resolver import FieldResolver
from app.domain.entities.conversation import Language
from app.domain.entities.field_kind import FieldKind

from tests.support import StubLanguageService


def test_valid_raw_input_skips_extraction():
    language = StubLanguageService(extracted={FieldKind.QUANTITY: "9"})
    resolver = FieldResolver(language)

    assert resolver.resolve("4", FieldKind.QUANTITY, Language.EN) == 4
    assert language.extract_calls == []


def test_extraction_used_after_validator_miss():
    language = StubLanguageService(extracted={FieldKind.NAME: "Sara"})
    resolver = FieldResolver(language)

    assert resolver.resolve("123", FieldKind.NAME, Language.UR) == "Sara"
    assert language.extract_calls == [("123", FieldKind.NAME, "ur")]


def test_language_defaults_to_english_for_extraction():
    language = StubLanguageService(extracted={FieldKind.QUANTITY: "2"})
    FieldResolver(language).resolve("a couple", FieldKind.QUANTITY, None)

    assert language.extract_calls[0][2] == "en"


def test_invalid_extraction_is_rejected():
    language = StubLanguageService(extracted={FieldKind.QUANTITY: "500"})

    assert FieldResolver(language).resolve("lots", FieldKind.QUANTITY, Language.EN) is None


def test_blank_input_never_reaches_extraction():
    language = StubLanguageService(extracted={FieldKind.ADDRESS: "Somewhere long"})

    assert FieldResolver(language).resolve("   ", FieldKind.ADDRESS, Language.EN) is None
    assert FieldResolver(language).resolve(None, FieldKind.ADDRESS, Language.EN) is None
    assert language.extract_calls == []


def test_contract_error_counts_as_no_candidate():
    language = StubLanguageService(extracted={FieldKind.PHONE: LLMContractError("not json")})

    assert FieldResolver(language).resolve("call me", FieldKind.PHONE, Language.EN) is None


def test_upstream_error_propagates():
    language = StubLanguageService(extracted={FieldKind.PHONE: LLMUpstreamError("timeout")})

    with pytest.raises(LLMUpstreamError):
        FieldResolver(language).resolve("call me", FieldKind.PHONE, Language.EN)


def test_custom_sources_run_in_order():
    calls = []

    def first(raw, field, language):
        calls.append("first")
        return None

    def second(raw, field, language):
        calls.append("second")
        return "7"

    resolver = FieldResolver(StubLanguageService(), sources=[first, second])

    assert resolver.resolve("seven-ish", FieldKind.QUANTITY, Language.EN) == 7
    assert calls == ["first", "second"]

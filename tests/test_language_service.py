from __future__ import annotations

from types import SimpleNamespace

import pytest

from app.application.exceptions import LLMUpstreamError
from app.domain.entities.field_kind import FieldKind
from app.infrastructure.llm.groq_language_service import GroqLanguageService
from app.infrastructure.llm.mock_language_service import MockLanguageService, spoken_digits_to_text


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _service(content=None, error=None) -> tuple[GroqLanguageService, FakeCompletions]:
    service = GroqLanguageService(api_key="test-key")
    completions = FakeCompletions(content, error)
    service.client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return service, completions


def test_extract_field_reads_json_object():
    service, completions = _service('{"phone": "03001234567"}')

    assert service.extract_field("my number is ...", FieldKind.PHONE, "en") == "03001234567"
    assert completions.calls[0]["response_format"] == {"type": "json_object"}


def test_extract_numeric_value_becomes_string():
    service, _ = _service('{"quantity": 3.0}')

    assert service.extract_field("teen", FieldKind.QUANTITY, "ur") == "3"


def test_bad_json_is_reported_as_none():
    service, _ = _service("sure! the phone is 0300")

    assert service.extract_field("...", FieldKind.PHONE, "en") is None


def test_null_answer_is_none():
    service, _ = _service('{"name": null}')

    assert service.extract_field("...", FieldKind.NAME, "en") is None


def test_cleanup_reads_cleaned_key():
    service, _ = _service('{"cleaned": "Gulberg III, Lahore"}')

    assert service.cleanup_transcript("gulberg three lahore", FieldKind.ADDRESS) == "Gulberg III, Lahore"


def test_provider_failure_raises_upstream_error():
    service, _ = _service(error=RuntimeError("503"))

    with pytest.raises(LLMUpstreamError):
        service.extract_field("...", FieldKind.NAME, "en")


def test_transcribe_passes_hints():
    service = GroqLanguageService(api_key="test-key")
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        return SimpleNamespace(text=" salam ")

    service.client = SimpleNamespace(audio=SimpleNamespace(transcriptions=SimpleNamespace(create=create)))

    assert service.transcribe(b"ogg", "ur", "hint words") == "salam"
    assert calls[0]["language"] == "ur"
    assert calls[0]["prompt"] == "hint words"
    assert calls[0]["file"] == ("voice.ogg", b"ogg")


def test_spoken_digits():
    assert spoken_digits_to_text("zero three double one two three four five six seven") == "0311234567"
    assert spoken_digits_to_text("صفر تین") == "03"


def test_mock_service_strips_name_fillers():
    mock = MockLanguageService()

    assert mock.extract_field("my name is Hina", FieldKind.NAME, "en") == "Hina"
    assert mock.cleanup_transcript("English: hina baig\nUrdu: حنا بیگ", FieldKind.NAME) == "Hina Baig"

from __future__ import annotations

import pytest

from app.application.ports.message_platform import Button, ListRow
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.utils.messages import (
    DIVIDER,
    MESSAGES,
    AUDIO_FILES,
    audio_url,
    bilingual,
    format_price,
    get_message,
    quantity_rows,
)
from app.domain.entities.conversation import Language
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform


def test_every_message_has_both_languages():
    for key, templates in MESSAGES.items():
        assert set(templates) == {Language.EN, Language.UR}, key


def test_bilingual_joins_english_then_urdu():
    text = bilingual("INVALID_INPUT")

    english, urdu = text.split(DIVIDER)
    assert english == get_message("INVALID_INPUT", Language.EN)
    assert urdu == get_message("INVALID_INPUT", "ur")


def test_unknown_language_falls_back_to_english():
    assert get_message("ASK_NAME", "fr") == get_message("ASK_NAME", Language.EN)


def test_format_price():
    assert format_price(1299) == "1,299"
    assert format_price(99.5) == "99.50"


def test_quantity_rows_fit_the_list_limit():
    rows = quantity_rows(Language.UR)

    assert len(rows) == 10
    assert rows[0].id == "qty_1"
    assert rows[-1].title == "10"


def test_audio_url():
    assert audio_url("WELCOME", "https://bot.example.com/") == f"https://bot.example.com/audio/{AUDIO_FILES['WELCOME']}"
    assert audio_url("NOT_A_KEY", "https://bot.example.com") is None


def test_prompt_sends_text_then_audio():
    platform = MockWhatsAppPlatform()
    SendReplyUseCase(platform, audio_base_url="https://bot.example.com").prompt("1", "ASK_NAME")

    assert [entry["kind"] for entry in platform.sent] == ["text", "audio"]
    assert platform.sent[1]["audio_ref"].endswith(AUDIO_FILES["ASK_NAME"])


def test_audio_failure_is_swallowed():
    class BrokenAudio(MockWhatsAppPlatform):
        def send_audio(self, recipient_id, audio_ref):
            raise RuntimeError("upload failed")

    platform = BrokenAudio()

    assert SendReplyUseCase(platform).audio_prompt("1", "WELCOME") is False


def test_text_failure_propagates():
    class BrokenText(MockWhatsAppPlatform):
        def send_text(self, recipient_id, text):
            raise RuntimeError("channel down")

    with pytest.raises(RuntimeError):
        SendReplyUseCase(BrokenText()).execute("1", "hello")


def test_limits_enforced():
    sender = SendReplyUseCase(MockWhatsAppPlatform())

    with pytest.raises(ValueError):
        sender.send_buttons("1", "pick", [Button(id=str(n), title=str(n)) for n in range(4)])
    with pytest.raises(ValueError):
        sender.send_list("1", "pick", "Open", [ListRow(id=str(n), title=str(n)) for n in range(11)], "Rows")


def test_disabled_sender_sends_nothing():
    platform = MockWhatsAppPlatform()
    sender = SendReplyUseCase(platform, enabled=False)

    assert sender.execute("1", "hello") is False
    sender.prompt("1", "WELCOME", business_name="X", business_name_ur="X")
    assert platform.sent == []

"""Shared test doubles and the in-memory bot harness."""

from __future__ import annotations

import itertools
from dataclasses import replace

from app.application.ports.language_service import LanguageServicePort
from app.domain.entities.business_profile import BusinessProfile
from app.domain.entities.conversation import Conversation, ConversationStep, Language, OrderContext
from app.domain.entities.field_kind import FieldKind
from app.domain.entities.inbound_event import InboundEvent, Modality
from app.domain.entities.product import Product
from app.infrastructure.catalog.product_catalog_store import ProductCatalogStore
from app.infrastructure.media.local_media_store import LocalMediaStore
from app.infrastructure.store.memory_store import MemoryConversationStore, MemoryOrderStore
from app.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from app.wiring.dependencies import build_handle_incoming_message_use_case


WA_ID = "923001112223"

PRODUCTS = [
    Product(sku="TEE-1", name="Cotton Tee", description="Soft tee", price=1000, image_url="https://img/tee.jpg", stock=10),
    Product(sku="CAP-2", name="Cap", description="Sun cap", price=500, image_url="https://img/cap.jpg", stock=3),
    Product(sku="MUG-3", name="Mug", description="Sold out", price=300, image_url="https://img/mug.jpg", stock=0),
    Product(sku="PEN-4", name="Pen", description="Retired", price=50, image_url="https://img/pen.jpg", active=False, stock=9),
]


class StubLanguageService(LanguageServicePort):
    """Scripted answers; every call is recorded."""

    def __init__(self, extracted=None, transcripts=None, cleaned=None) -> None:
        self.extracted: dict[FieldKind, object] = dict(extracted or {})
        # language hint -> text, or an exception instance to raise
        self.transcripts: dict[str, object] = dict(transcripts or {})
        self.cleaned: dict[FieldKind, object] = dict(cleaned or {})
        self.extract_calls: list[tuple[str, FieldKind, str]] = []
        self.transcribe_calls: list[tuple[str | None, str | None]] = []
        self.cleanup_calls: list[tuple[str, FieldKind]] = []

    def transcribe(self, audio, language_hint, vocabulary_hint):
        self.transcribe_calls.append((language_hint, vocabulary_hint))
        result = self.transcripts.get(language_hint, audio.decode("utf-8"))
        if isinstance(result, Exception):
            raise result
        return result

    def extract_field(self, text, field, language):
        self.extract_calls.append((text, field, language))
        result = self.extracted.get(field)
        if isinstance(result, Exception):
            raise result
        return result

    def cleanup_transcript(self, text, field):
        self.cleanup_calls.append((text, field))
        result = self.cleaned.get(field)
        if isinstance(result, Exception):
            raise result
        return result


class Bot:
    """The incoming-message use case wired to in-memory adapters, driven one event at a time."""

    def __init__(
        self, tmp_path, language_service=None, profile=None, products=None, auto_reply_enabled=True, platform=None
    ):
        self.store = MemoryConversationStore()
        self.orders = MemoryOrderStore()
        self.platform = platform or MockWhatsAppPlatform()
        self.catalog = ProductCatalogStore(list(PRODUCTS if products is None else products))
        self.language = language_service or StubLanguageService()
        self.media = LocalMediaStore(root=str(tmp_path / "storage"))
        self.profile = profile or BusinessProfile(
            name="Test Shop",
            easypaisa_account_name="Test Shop",
            easypaisa_account_number="03001234567",
            easypaisa_qr_code_url="https://cdn.example.com/qr.png",
        )
        self.use_case = build_handle_incoming_message_use_case(
            store=self.store,
            orders=self.orders,
            catalog=self.catalog,
            platform=self.platform,
            language_service=self.language,
            media=self.media,
            profile=self.profile,
            auto_reply_enabled=auto_reply_enabled,
            audio_prompts_enabled=False,
            greeting_phrases=["hi", "hello", "salam", "assalam o alaikum"],
        )
        self._ids = itertools.count(1)

    @property
    def conversation(self) -> Conversation | None:
        return self.store.get(WA_ID)

    def put(self, step: ConversationStep, language: Language | None = Language.EN, **context) -> Conversation:
        """Store the conversation directly at `step` with the given context fields."""
        current = self.store.get(WA_ID)
        conversation = Conversation(identity=WA_ID, language=language, step=step, context=OrderContext(**context))
        if current is not None:
            conversation = replace(conversation, version=current.version)
        return self.store.save(conversation)

    def send(self, modality: Modality, message_id: str | None = None, **fields) -> list[dict]:
        event = InboundEvent(
            identity=WA_ID,
            modality=modality,
            message_id=message_id or f"msg-{next(self._ids)}",
            **fields,
        )
        before = len(self.platform.sent)
        self.use_case.handle(event)
        return self.platform.sent[before:]

    def text(self, text: str, **kwargs) -> list[dict]:
        return self.send(Modality.TEXT, text=text, **kwargs)

    def button(self, button_id: str) -> list[dict]:
        return self.send(Modality.BUTTON, button_id=button_id)

    def list_row(self, list_id: str) -> list[dict]:
        return self.send(Modality.LIST, list_id=list_id)

    def image(self, media_ref: str) -> list[dict]:
        return self.send(Modality.IMAGE, media_ref=media_ref)

    def voice(self, media_ref: str) -> list[dict]:
        return self.send(Modality.VOICE, media_ref=media_ref)


FULL_CONTEXT = {
    "product_sku": "TEE-1",
    "qty": 2,
    "name": "Ayesha Khan",
    "phone": "+923001234567",
    "address": "House 12, Street 4, Lahore",
}



from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Callable

from app.application.exceptions import ProductNotFoundError
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.media_storage import MediaStoragePort
from app.application.ports.message_platform import MessagePlatformPort
from app.application.ports.product_catalog import ProductCatalogPort
from app.application.use_cases.create_order import CreateOrderUseCase
from app.application.use_cases.field_resolver import FieldResolver
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.utils.messages import (
    BUTTON_AGENT,
    BUTTON_BUY,
    BUTTON_LANG_EN,
    BUTTON_LANG_UR,
    BUTTON_NEXT,
    BUTTON_PAYMENT_COD,
    BUTTON_PAYMENT_EASYPAISA,
    LANGUAGE_BUTTONS,
    PAYMENT_BUTTONS,
    QUANTITY_LIST_LABEL,
    QUANTITY_ROW_PREFIX,
    QUANTITY_SECTION_TITLE,
    bilingual,
    get_button,
    order_summary_params,
    product_params,
    quantity_rows,
    welcome_params,
)
from app.application.utils.validators import validate_quantity
from app.domain.entities.business_profile import BusinessProfile
from app.domain.entities.conversation import Conversation, ConversationStep, Language, OrderContext
from app.domain.entities.field_kind import FieldKind
from app.domain.entities.inbound_event import InboundEvent, Modality
from app.domain.entities.order import PaymentMethod, PaymentProof, ProofKind
from app.domain.entities.product import Product
from app.domain.transitions import accepts, complete_order, transition


S = ConversationStep

# Free-text steps: field collected -> step that follows
TEXT_FIELD_STEPS: dict[ConversationStep, tuple[FieldKind, ConversationStep]] = {
    S.ASKING_NAME: (FieldKind.NAME, S.ASKING_PHONE),
    S.ASKING_PHONE: (FieldKind.PHONE, S.ASKING_ADDRESS),
    S.ASKING_ADDRESS: (FieldKind.ADDRESS, S.ASKING_PAYMENT_METHOD),
}

TEXT_PROMPTS = {
    S.ASKING_NAME: "ASK_NAME",
    S.ASKING_PHONE: "ASK_PHONE",
    S.ASKING_ADDRESS: "ASK_ADDRESS",
    S.WAITING_FOR_AGENT: "TALK_TO_AGENT",
}

# Logged by field name only
SENSITIVE_FIELDS = {FieldKind.NAME, FieldKind.PHONE, FieldKind.ADDRESS}


class StateHandlers:
    """
    One handler per conversation step.

    A handler either advances the conversation (transition, save, then prompt for
    the next step) or re-prompts the current step after an invalid-input notice.
    Steps are only changed through `transition()`, and every save happens before
    the messages that depend on it.
    """

    def __init__(
        self,
        store: ConversationStorePort,
        catalog: ProductCatalogPort,
        resolver: FieldResolver,
        create_order: CreateOrderUseCase,
        sender: SendReplyUseCase,
        platform: MessagePlatformPort,
        media: MediaStoragePort,
        profile: BusinessProfile,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._resolver = resolver
        self._create_order = create_order
        self._sender = sender
        self._platform = platform
        self._media = media
        self._profile = profile
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    # ---- handlers -------------------------------------------------------

    def language_selection(self, conversation: Conversation, event: InboundEvent) -> None:
        if not accepts(conversation.step, event.modality):
            self._ignore(conversation, event)
            return

        language = LANGUAGE_BUTTONS.get(event.button_id or "")
        if language is None:
            self.send_welcome(conversation.identity)
            return

        product = self._current_or_first_product(conversation.context.product_sku)
        context = OrderContext(product_sku=product.sku if product else None)
        conversation = self._advance(conversation, S.SHOWING_PRODUCT, context, language=language)
        self._logger.info("Language chosen", extra={"wa_id": conversation.identity, "reason": language.value})

        if product is None:
            self._sender.prompt(conversation.identity, "NO_PRODUCTS")
            return
        self._send_product_card(conversation, product)

    def showing_product(self, conversation: Conversation, event: InboundEvent) -> None:
        if not accepts(conversation.step, event.modality):
            self._ignore(conversation, event)
            return

        button_id = event.button_id
        if button_id == BUTTON_BUY:
            if self._available_product(conversation.context.product_sku) is None:
                self._show_current_product(conversation)
                return
            conversation = self._advance(conversation, S.ASKING_QUANTITY)
            self.send_step_prompt(conversation)
            return

        if button_id == BUTTON_NEXT:
            product = self._catalog.next_product(conversation.context.product_sku)
            if product is None:
                self._sender.prompt(conversation.identity, "NO_PRODUCTS")
                return
            conversation = self._advance(conversation, S.SHOWING_PRODUCT, OrderContext(product_sku=product.sku))
            self._send_product_card(conversation, product)
            return

        if button_id == BUTTON_AGENT:
            conversation = self._advance(conversation, S.WAITING_FOR_AGENT)
            self.send_step_prompt(conversation)
            return

        self._show_current_product(conversation)

    def asking_quantity(self, conversation: Conversation, event: InboundEvent) -> None:
        qty = None
        if event.modality == Modality.LIST:
            qty = self._quantity_from_row(event.list_id)
        elif accepts(conversation.step, event.modality):
            qty = self._resolver.resolve(event.text, FieldKind.QUANTITY, conversation.language)

        if qty is None:
            self._retry(conversation)
            return

        conversation = self._advance(conversation, S.ASKING_NAME, replace(conversation.context, qty=qty))
        self._log_accepted(conversation, FieldKind.QUANTITY, qty)
        self.send_step_prompt(conversation)

    def asking_name(self, conversation: Conversation, event: InboundEvent) -> None:
        self._collect_text_field(conversation, event)

    def asking_phone(self, conversation: Conversation, event: InboundEvent) -> None:
        self._collect_text_field(conversation, event)

    def asking_address(self, conversation: Conversation, event: InboundEvent) -> None:
        self._collect_text_field(conversation, event)

    def asking_payment_method(self, conversation: Conversation, event: InboundEvent) -> None:
        method = None
        if accepts(conversation.step, event.modality):
            method = PAYMENT_BUTTONS.get(event.button_id or "")

        if method is None:
            self._retry(conversation)
            return

        context = replace(conversation.context, payment_method=method)
        self._logger.info(
            "Payment method chosen",
            extra={"wa_id": conversation.identity, "reason": method.value},
        )
        if method == PaymentMethod.EASYPAISA:
            conversation = self._advance(conversation, S.WAITING_PAYMENT_PROOF, context)
            self.send_step_prompt(conversation)
            return

        conversation = self._advance(conversation, S.ASKING_PAYMENT_METHOD, context)
        self._finalize_order(conversation, proof=None, confirmation_key="COD_CONFIRMATION")

    def waiting_payment_proof(self, conversation: Conversation, event: InboundEvent) -> None:
        proof = None
        if event.modality == Modality.IMAGE and event.media_ref:
            proof = self._image_proof(conversation.identity, event.media_ref)
        elif event.modality == Modality.TEXT and event.text and event.text.strip():
            self._logger.info("Payment proof text received", extra={"wa_id": conversation.identity})
            proof = PaymentProof(kind=ProofKind.TEXT, received_at=self._clock(), text=event.text)

        if proof is None:
            self._retry(conversation)
            return

        self._finalize_order(conversation, proof=proof, confirmation_key="PAYMENT_RECEIVED")

    def waiting_for_agent(self, conversation: Conversation, event: InboundEvent) -> None:
        phone = None
        if accepts(conversation.step, event.modality):
            phone = self._resolver.resolve(event.text, FieldKind.PHONE, conversation.language)

        if phone is None:
            self._retry(conversation)
            return

        self._logger.info(
            "Agent contact requested",
            extra={"wa_id": conversation.identity, "field": FieldKind.PHONE.value},
        )
        conversation = self._advance(conversation, S.SHOWING_PRODUCT)
        self._sender.prompt(conversation.identity, "THANK_YOU_AGENT")

    # ---- prompts --------------------------------------------------------

    def send_welcome(self, recipient_id: str) -> None:
        self._sender.send_buttons(
            recipient_id,
            bilingual("WELCOME", **welcome_params(self._profile.name)),
            [get_button(BUTTON_LANG_EN, Language.EN), get_button(BUTTON_LANG_UR, Language.UR)],
        )
        self._sender.audio_prompt(recipient_id, "WELCOME")

    def send_step_prompt(self, conversation: Conversation) -> None:
        """The question the conversation is currently waiting on."""
        step = conversation.step
        identity = conversation.identity
        language = _language(conversation)

        if step == S.LANGUAGE_SELECTION:
            self.send_welcome(identity)
        elif step == S.SHOWING_PRODUCT:
            self._show_current_product(conversation)
        elif step == S.ASKING_QUANTITY:
            self._sender.send_list(
                identity,
                bilingual("ASK_QUANTITY"),
                QUANTITY_LIST_LABEL[language],
                quantity_rows(language),
                QUANTITY_SECTION_TITLE[language],
            )
            self._sender.audio_prompt(identity, "ASK_QUANTITY")
        elif step == S.ASKING_PAYMENT_METHOD:
            self._sender.send_buttons(
                identity,
                bilingual("ASK_PAYMENT_METHOD"),
                [get_button(BUTTON_PAYMENT_EASYPAISA, language), get_button(BUTTON_PAYMENT_COD, language)],
            )
            self._sender.audio_prompt(identity, "ASK_PAYMENT_METHOD")
        elif step == S.WAITING_PAYMENT_PROOF:
            self._send_payment_instructions(identity)
        else:
            self._sender.prompt(identity, TEXT_PROMPTS[step])

    def _send_product_card(self, conversation: Conversation, product: Product) -> None:
        identity = conversation.identity
        language = _language(conversation)
        self._sender.send_image(identity, product.image_url, bilingual("PRODUCT_CARD", **product_params(product)))
        self._sender.send_buttons(
            identity,
            bilingual("PRODUCT_ACTIONS"),
            [
                get_button(BUTTON_BUY, language),
                get_button(BUTTON_NEXT, language),
                get_button(BUTTON_AGENT, language),
            ],
        )
        self._sender.audio_prompt(identity, "PRODUCT_CARD")

    def _send_order_summary(self, conversation: Conversation, product: Product) -> None:
        context = conversation.context
        self._sender.prompt(
            conversation.identity,
            "ORDER_SUMMARY",
            **order_summary_params(product, context.qty, context.name, context.phone, context.address),
        )

    def _send_payment_instructions(self, recipient_id: str) -> None:
        text = bilingual(
            "EASYPAISA_INSTRUCTIONS",
            account_name=self._profile.easypaisa_account_name,
            account_number=self._profile.easypaisa_account_number,
        )
        if self._profile.has_qr_code:
            self._sender.send_image(recipient_id, self._profile.easypaisa_qr_code_url, text)
        else:
            self._sender.execute(recipient_id, text)
        self._sender.audio_prompt(recipient_id, "EASYPAISA_INSTRUCTIONS")

    # ---- internals ------------------------------------------------------

    def _collect_text_field(self, conversation: Conversation, event: InboundEvent) -> None:
        field, next_step = TEXT_FIELD_STEPS[conversation.step]
        value = None
        if accepts(conversation.step, event.modality):
            value = self._resolver.resolve(event.text, field, conversation.language)

        if value is None:
            self._retry(conversation)
            return

        product = None
        if next_step == S.ASKING_PAYMENT_METHOD:
            product = self._require_product(conversation.context.product_sku)

        context = replace(conversation.context, **{field.value: value})
        conversation = self._advance(conversation, next_step, context)
        self._log_accepted(conversation, field, value)

        if product is not None:
            self._send_order_summary(conversation, product)
        self.send_step_prompt(conversation)

    def _finalize_order(self, conversation: Conversation, proof: PaymentProof | None, confirmation_key: str) -> None:
        self._create_order.execute(conversation, proof)
        conversation = self._persist(conversation, complete_order(conversation))
        self._sender.prompt(
            conversation.identity,
            confirmation_key,
            hours=self._profile.confirmation_wait_hours,
        )

    def _image_proof(self, identity: str, media_ref: str) -> PaymentProof:
        self._logger.info("Payment proof image received", extra={"wa_id": identity})
        content = self._platform.fetch_media_bytes(media_ref)
        stored_path = self._media.save_payment_proof(identity, content)
        return PaymentProof(
            kind=ProofKind.IMAGE,
            received_at=self._clock(),
            media_ref=media_ref,
            stored_path=stored_path,
        )

    def _show_current_product(self, conversation: Conversation) -> None:
        product = self._current_or_first_product(conversation.context.product_sku)
        if product is None:
            self._sender.prompt(conversation.identity, "NO_PRODUCTS")
            return
        if product.sku != conversation.context.product_sku:
            conversation = self._advance(conversation, conversation.step, OrderContext(product_sku=product.sku))
        self._send_product_card(conversation, product)

    def _current_or_first_product(self, sku: str | None) -> Product | None:
        return self._available_product(sku) or self._catalog.next_product(None)

    def _available_product(self, sku: str | None) -> Product | None:
        if not sku:
            return None
        product = self._catalog.get_product(sku)
        if product is None or not product.is_available:
            return None
        return product

    def _require_product(self, sku: str | None) -> Product:
        product = self._catalog.get_product(sku) if sku else None
        if product is None:
            raise ProductNotFoundError(f"Product {sku} not found")
        return product

    def _quantity_from_row(self, list_id: str | None) -> int | None:
        if not list_id or not list_id.startswith(QUANTITY_ROW_PREFIX):
            return None
        return validate_quantity(list_id[len(QUANTITY_ROW_PREFIX):])

    def _retry(self, conversation: Conversation) -> None:
        self._sender.prompt(conversation.identity, "INVALID_INPUT")
        self.send_step_prompt(conversation)

    def _ignore(self, conversation: Conversation, event: InboundEvent) -> None:
        self._logger.info(
            "Input ignored",
            extra={"wa_id": conversation.identity, "state": conversation.step.value, "modality": event.modality.value},
        )

    def _advance(
        self,
        conversation: Conversation,
        to_step: ConversationStep,
        context: OrderContext | None = None,
        **changes,
    ) -> Conversation:
        return self._persist(conversation, transition(conversation, to_step, context, **changes))

    def _persist(self, before: Conversation, after: Conversation) -> Conversation:
        saved = self._store.save(after)
        if before.step != after.step:
            self._logger.info(
                "Transition",
                extra={"wa_id": after.identity, "state": f"{before.step.value}->{after.step.value}"},
            )
        return saved

    def _log_accepted(self, conversation: Conversation, field: FieldKind, value: object) -> None:
        extra = {"wa_id": conversation.identity, "field": field.value}
        if field not in SENSITIVE_FIELDS:
            extra["value"] = value
        self._logger.info("Field accepted", extra=extra)


def _language(conversation: Conversation) -> Language:
    return conversation.language or Language.EN

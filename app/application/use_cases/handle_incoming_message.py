from __future__ import annotations

import logging
import threading
from typing import Iterable

from app.application.exceptions import TranscriptionError
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.message_platform import MessagePlatformPort
from app.application.use_cases.router import ConversationRouter
from app.application.use_cases.send_reply import SendReplyUseCase
from app.application.use_cases.state_handlers import StateHandlers
from app.application.use_cases.transcript_reconciler import TranscriptReconciler
from app.application.utils.greeting import is_greeting
from app.domain.entities.conversation import Conversation, ConversationStep
from app.domain.entities.field_kind import FieldKind
from app.domain.entities.inbound_event import InboundEvent, Modality
from app.domain.transitions import reset_for_greeting


# Field a voice message is transcribed for, by step
VOICE_FIELDS: dict[ConversationStep, FieldKind] = {
    ConversationStep.ASKING_QUANTITY: FieldKind.QUANTITY,
    ConversationStep.ASKING_NAME: FieldKind.NAME,
    ConversationStep.ASKING_PHONE: FieldKind.PHONE,
    ConversationStep.ASKING_ADDRESS: FieldKind.ADDRESS,
    ConversationStep.WAITING_FOR_AGENT: FieldKind.PHONE,
}


class HandleIncomingMessageUseCase:
    def __init__(
        self,
        store: ConversationStorePort,
        router: ConversationRouter,
        handlers: StateHandlers,
        reconciler: TranscriptReconciler,
        platform: MessagePlatformPort,
        send_reply: SendReplyUseCase,
        greeting_phrases: Iterable[str],
    ) -> None:
        self._store = store
        self._router = router
        self._handlers = handlers
        self._reconciler = reconciler
        self._platform = platform
        self._send_reply = send_reply
        self._greeting_phrases = list(greeting_phrases)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, identity: str) -> threading.Lock:
        with self._lock_lock:
            if identity not in self._locks:
                self._locks[identity] = threading.Lock()
            return self._locks[identity]

    def handle(self, event: InboundEvent) -> None:
        """Process one inbound event to completion. Never raises."""
        with self._get_lock(event.identity):
            try:
                self._handle(event)
            except Exception:
                self._logger.exception(
                    "Failed to handle inbound event",
                    extra={"wa_id": event.identity, "modality": event.modality.value},
                )
                self._send_error(event.identity)

    def _handle(self, event: InboundEvent) -> None:
        conversation = self._store.get(event.identity)
        if conversation is None:
            conversation = self._store.get_or_create(event.identity)
            self._logger.info("Conversation created", extra={"wa_id": event.identity})

        if event.message_id:
            if self._store.has_processed(event.identity, event.message_id):
                self._logger.info(
                    "Duplicate message ignored",
                    extra={"wa_id": event.identity, "message_id": event.message_id},
                )
                return

        self._process(conversation, event)

        # Only a completed turn is marked, so a redelivery after a failure is retried
        if event.message_id:
            self._store.mark_processed(event.identity, event.message_id)

    def _process(self, conversation: Conversation, event: InboundEvent) -> None:
        if event.modality == Modality.VOICE:
            event = self._transcribe(conversation, event)

        if (
            event.modality == Modality.TEXT
            and not conversation.in_order_flow
            and is_greeting(event.text, self._greeting_phrases)
        ):
            self._store.save(reset_for_greeting(conversation))
            self._logger.info(
                "Greeting received, conversation reset",
                extra={"wa_id": event.identity, "state": conversation.step.value},
            )
            self._handlers.send_welcome(event.identity)
            return

        self._router.dispatch(conversation, event)

    def _transcribe(self, conversation: Conversation, event: InboundEvent) -> InboundEvent:
        if not event.media_ref:
            raise TranscriptionError("Voice message without a media reference")
        audio = self._platform.fetch_media_bytes(event.media_ref)
        field = VOICE_FIELDS.get(conversation.step)
        text = self._reconciler.transcribe(audio, field, conversation.language)
        self._logger.info(
            "Voice message transcribed",
            extra={"wa_id": event.identity, "state": conversation.step.value, "field": field.value if field else None},
        )
        return event.as_text(text)

    def _send_error(self, recipient_id: str) -> None:
        try:
            self._send_reply.prompt(recipient_id, "ERROR_GENERIC")
        except Exception:
            self._logger.exception("Failed to send error reply", extra={"wa_id": recipient_id})

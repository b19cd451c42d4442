from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from app.application.use_cases.state_handlers import StateHandlers
from app.domain.entities.conversation import Conversation, ConversationStep, OrderContext
from app.domain.entities.inbound_event import InboundEvent


Handler = Callable[[Conversation, InboundEvent], None]


class ConversationRouter:
    def __init__(self, handlers: StateHandlers) -> None:
        S = ConversationStep
        self._routes: dict[ConversationStep, Handler] = {
            S.LANGUAGE_SELECTION: handlers.language_selection,
            S.SHOWING_PRODUCT: handlers.showing_product,
            S.ASKING_QUANTITY: handlers.asking_quantity,
            S.ASKING_NAME: handlers.asking_name,
            S.ASKING_PHONE: handlers.asking_phone,
            S.ASKING_ADDRESS: handlers.asking_address,
            S.ASKING_PAYMENT_METHOD: handlers.asking_payment_method,
            S.WAITING_PAYMENT_PROOF: handlers.waiting_payment_proof,
            S.WAITING_FOR_AGENT: handlers.waiting_for_agent,
        }
        missing = [step.value for step in ConversationStep if step not in self._routes]
        if missing:
            raise ValueError(f"No handler registered for steps: {', '.join(missing)}")
        self._logger = logging.getLogger(__name__)

    def handler_for(self, step: ConversationStep) -> Handler | None:
        return self._routes.get(step)

    def dispatch(self, conversation: Conversation, event: InboundEvent) -> None:
        handler = self._routes.get(conversation.step)
        if handler is None:
            self._logger.error(
                "Unknown conversation step, falling back to language selection",
                extra={"wa_id": conversation.identity, "state": str(conversation.step)},
            )
            conversation = replace(conversation, step=ConversationStep.LANGUAGE_SELECTION, context=OrderContext())
            handler = self._routes[ConversationStep.LANGUAGE_SELECTION]
        handler(conversation, event)

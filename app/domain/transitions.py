"""
Static conversation state machine tables.

Every step has:
- the set of steps it may move to,
- the inbound modalities it accepts (anything else is invalid input for that step),
- the context fields that must be populated on entry, and those that may be.

`transition()` is the only way a handler produces a new conversation step; it
refuses moves that are not in the table and contexts that are not a legal
prefix of the canonical flow for the target step.
"""
from __future__ import annotations

import time
from dataclasses import replace

from app.domain.exceptions import IllegalTransitionError
from app.domain.entities.conversation import Conversation, ConversationStep, OrderContext
from app.domain.entities.inbound_event import Modality


S = ConversationStep

LEGAL_TRANSITIONS: dict[ConversationStep, frozenset[ConversationStep]] = {
    S.LANGUAGE_SELECTION: frozenset({S.LANGUAGE_SELECTION, S.SHOWING_PRODUCT}),
    S.SHOWING_PRODUCT: frozenset({S.SHOWING_PRODUCT, S.ASKING_QUANTITY, S.WAITING_FOR_AGENT}),
    S.ASKING_QUANTITY: frozenset({S.ASKING_QUANTITY, S.ASKING_NAME}),
    S.ASKING_NAME: frozenset({S.ASKING_NAME, S.ASKING_PHONE}),
    S.ASKING_PHONE: frozenset({S.ASKING_PHONE, S.ASKING_ADDRESS}),
    S.ASKING_ADDRESS: frozenset({S.ASKING_ADDRESS, S.ASKING_PAYMENT_METHOD}),
    S.ASKING_PAYMENT_METHOD: frozenset({S.ASKING_PAYMENT_METHOD, S.WAITING_PAYMENT_PROOF, S.SHOWING_PRODUCT}),
    S.WAITING_PAYMENT_PROOF: frozenset({S.WAITING_PAYMENT_PROOF, S.SHOWING_PRODUCT}),
    S.WAITING_FOR_AGENT: frozenset({S.WAITING_FOR_AGENT, S.SHOWING_PRODUCT}),
}

# Voice never reaches a handler: it is transcribed into TEXT beforehand.
ACCEPTED_MODALITIES: dict[ConversationStep, frozenset[Modality]] = {
    S.LANGUAGE_SELECTION: frozenset({Modality.BUTTON}),
    S.SHOWING_PRODUCT: frozenset({Modality.BUTTON}),
    S.ASKING_QUANTITY: frozenset({Modality.LIST, Modality.TEXT}),
    S.ASKING_NAME: frozenset({Modality.TEXT}),
    S.ASKING_PHONE: frozenset({Modality.TEXT}),
    S.ASKING_ADDRESS: frozenset({Modality.TEXT}),
    S.ASKING_PAYMENT_METHOD: frozenset({Modality.BUTTON}),
    S.WAITING_PAYMENT_PROOF: frozenset({Modality.IMAGE, Modality.TEXT}),
    S.WAITING_FOR_AGENT: frozenset({Modality.TEXT}),
}

_FLOW_FIELDS = ("product_sku", "qty", "name", "phone", "address", "payment_method")


def _prefix(n: int) -> frozenset[str]:
    return frozenset(_FLOW_FIELDS[:n])


REQUIRED_CONTEXT: dict[ConversationStep, frozenset[str]] = {
    S.LANGUAGE_SELECTION: _prefix(0),
    S.SHOWING_PRODUCT: _prefix(0),
    S.WAITING_FOR_AGENT: _prefix(0),
    S.ASKING_QUANTITY: _prefix(1),
    S.ASKING_NAME: _prefix(2),
    S.ASKING_PHONE: _prefix(3),
    S.ASKING_ADDRESS: _prefix(4),
    S.ASKING_PAYMENT_METHOD: _prefix(5),
    S.WAITING_PAYMENT_PROOF: _prefix(6),
}

ALLOWED_CONTEXT: dict[ConversationStep, frozenset[str]] = {
    S.LANGUAGE_SELECTION: _prefix(1),
    S.SHOWING_PRODUCT: _prefix(1),
    S.WAITING_FOR_AGENT: _prefix(1),
    S.ASKING_QUANTITY: _prefix(1),
    S.ASKING_NAME: _prefix(2),
    S.ASKING_PHONE: _prefix(3),
    S.ASKING_ADDRESS: _prefix(4),
    # payment_method is written here just before a cash-on-delivery order is created
    S.ASKING_PAYMENT_METHOD: _prefix(6),
    S.WAITING_PAYMENT_PROOF: _prefix(6),
}


def accepts(step: ConversationStep, modality: Modality) -> bool:
    return modality in ACCEPTED_MODALITIES[step]


def check_context(step: ConversationStep, context: OrderContext) -> None:
    populated = context.populated_fields()
    missing = REQUIRED_CONTEXT[step] - populated
    extra = populated - ALLOWED_CONTEXT[step]
    if missing or extra:
        raise IllegalTransitionError(
            f"Context is not a valid prefix for {step.value}: "
            f"missing={sorted(missing)} unexpected={sorted(extra)}"
        )


def transition(
    conversation: Conversation,
    to_step: ConversationStep,
    context: OrderContext | None = None,
    **changes,
) -> Conversation:
    """Return the conversation moved to `to_step` with `context` (default: unchanged)."""
    if to_step not in LEGAL_TRANSITIONS[conversation.step]:
        raise IllegalTransitionError(f"{conversation.step.value} -> {to_step.value} is not allowed")
    new_context = conversation.context if context is None else context
    check_context(to_step, new_context)
    return replace(
        conversation,
        step=to_step,
        context=new_context,
        last_activity_at=time.time(),
        **changes,
    )


def reset_for_greeting(conversation: Conversation) -> Conversation:
    """Hard reset: language cleared, context cleared, back to language selection."""
    return replace(
        conversation,
        language=None,
        step=S.LANGUAGE_SELECTION,
        context=OrderContext(),
        last_activity_at=time.time(),
    )


def complete_order(conversation: Conversation) -> Conversation:
    """Back to product browsing with an empty context once an order is persisted."""
    return transition(conversation, S.SHOWING_PRODUCT, context=OrderContext())

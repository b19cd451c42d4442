from __future__ import annotations

import pytest

from app.domain.entities.conversation import Conversation, ConversationStep, Language, OrderContext
from app.domain.entities.inbound_event import Modality
from app.domain.entities.order import PaymentMethod
from app.domain.exceptions import IllegalTransitionError
from app.domain.transitions import (
    ACCEPTED_MODALITIES,
    LEGAL_TRANSITIONS,
    REQUIRED_CONTEXT,
    accepts,
    check_context,
    complete_order,
    reset_for_greeting,
    transition,
)


S = ConversationStep


def test_tables_cover_every_step():
    for step in ConversationStep:
        assert step in LEGAL_TRANSITIONS
        assert step in ACCEPTED_MODALITIES
        assert step in REQUIRED_CONTEXT


def test_voice_is_never_a_handler_modality():
    assert all(Modality.VOICE not in modalities for modalities in ACCEPTED_MODALITIES.values())


def test_accepts():
    assert accepts(S.ASKING_QUANTITY, Modality.LIST)
    assert accepts(S.WAITING_PAYMENT_PROOF, Modality.IMAGE)
    assert not accepts(S.SHOWING_PRODUCT, Modality.TEXT)
    assert not accepts(S.ASKING_NAME, Modality.BUTTON)


def test_legal_transition_returns_new_conversation():
    conversation = Conversation(identity="1", language=Language.EN, step=S.SHOWING_PRODUCT, context=OrderContext(product_sku="A"))

    moved = transition(conversation, S.ASKING_QUANTITY)

    assert moved.step == S.ASKING_QUANTITY
    assert moved.context.product_sku == "A"
    assert conversation.step == S.SHOWING_PRODUCT
    assert moved.last_activity_at is not None


def test_illegal_step_change_is_refused():
    conversation = Conversation(identity="1", step=S.SHOWING_PRODUCT, context=OrderContext(product_sku="A"))

    with pytest.raises(IllegalTransitionError):
        transition(conversation, S.ASKING_NAME, OrderContext(product_sku="A", qty=1))


def test_skipping_a_field_is_refused():
    conversation = Conversation(identity="1", step=S.ASKING_QUANTITY, context=OrderContext(product_sku="A"))

    with pytest.raises(IllegalTransitionError):
        transition(conversation, S.ASKING_NAME)


def test_context_must_be_a_prefix():
    with pytest.raises(IllegalTransitionError):
        check_context(S.ASKING_NAME, OrderContext(product_sku="A", qty=1, phone="+923001234567"))
    check_context(S.ASKING_NAME, OrderContext(product_sku="A", qty=1))


def test_payment_method_may_be_recorded_before_completion():
    context = OrderContext(product_sku="A", qty=1, name="N", phone="+923001234567", address="Road 1")
    conversation = Conversation(identity="1", step=S.ASKING_PAYMENT_METHOD, context=context)

    from dataclasses import replace

    moved = transition(conversation, S.ASKING_PAYMENT_METHOD, replace(context, payment_method=PaymentMethod.COD))

    assert moved.context.is_complete()


def test_complete_order_clears_context():
    context = OrderContext(
        product_sku="A", qty=1, name="N", phone="+923001234567", address="Road 1", payment_method=PaymentMethod.EASYPAISA
    )
    conversation = Conversation(identity="1", language=Language.UR, step=S.WAITING_PAYMENT_PROOF, context=context)

    done = complete_order(conversation)

    assert done.step == S.SHOWING_PRODUCT
    assert done.context == OrderContext()
    assert done.language == Language.UR


def test_reset_for_greeting_keeps_identity_and_version():
    conversation = Conversation(
        identity="1", language=Language.EN, step=S.WAITING_FOR_AGENT, context=OrderContext(product_sku="A"), version=4
    )

    reset = reset_for_greeting(conversation)

    assert reset.step == S.LANGUAGE_SELECTION
    assert reset.language is None
    assert reset.context == OrderContext()
    assert reset.version == 4
    assert reset.identity == "1"

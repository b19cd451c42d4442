from __future__ import annotations

from app.application.use_cases.router import ConversationRouter
from app.domain.entities.conversation import ConversationStep

from tests.support import Bot


def test_every_step_has_a_handler(tmp_path):
    bot = Bot(tmp_path)
    router = ConversationRouter(bot.use_case._handlers)

    for step in ConversationStep:
        assert router.handler_for(step) is not None


def test_dispatch_calls_handler_for_current_step(tmp_path):
    from app.domain.entities.inbound_event import InboundEvent, Modality
    from tests.support import WA_ID

    bot = Bot(tmp_path)
    conversation = bot.put(ConversationStep.SHOWING_PRODUCT, product_sku="TEE-1")
    router = ConversationRouter(bot.use_case._handlers)

    router.dispatch(conversation, InboundEvent(identity=WA_ID, modality=Modality.BUTTON, button_id="buy"))

    assert bot.conversation.step == ConversationStep.ASKING_QUANTITY


def test_unknown_step_falls_back_to_language_selection(tmp_path):
    from dataclasses import replace

    from app.domain.entities.conversation import Language, OrderContext
    from app.domain.entities.inbound_event import InboundEvent, Modality
    from tests.support import WA_ID

    bot = Bot(tmp_path)
    stored = bot.put(ConversationStep.SHOWING_PRODUCT, product_sku="TEE-1")
    corrupted = replace(stored, step="ASKING_COLOUR", context=OrderContext(product_sku="TEE-1", qty=2))
    router = ConversationRouter(bot.use_case._handlers)

    router.dispatch(corrupted, InboundEvent(identity=WA_ID, modality=Modality.BUTTON, button_id="lang_ur"))

    conversation = bot.conversation
    assert conversation.step == ConversationStep.SHOWING_PRODUCT
    assert conversation.language == Language.UR
    assert conversation.context == OrderContext(product_sku="TEE-1")

"""
Tests for durable conversation and order persistence.
"""

from __future__ import annotations

import json
import tempfile
from dataclasses import replace
from pathlib import Path

import pytest

from app.application.exceptions import ConcurrentUpdateError
from app.domain.entities.conversation import Conversation, ConversationStep, Language, OrderContext
from app.domain.entities.order import (
    CustomerSnapshot,
    Order,
    OrderStatus,
    PaymentMethod,
    PaymentProof,
    ProofKind,
)
from app.infrastructure.store.json_store import JsonConversationStore, JsonOrderStore
from app.infrastructure.store.memory_store import MemoryConversationStore


def test_json_store_persistence():
    """Test that JSON store persists and retrieves a conversation across instances."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonConversationStore(data_dir=tmpdir)
        identity = "923001234567"

        created = store.get_or_create(identity)
        assert created.version == 1
        assert created.step == ConversationStep.LANGUAGE_SELECTION

        updated = replace(
            created,
            language=Language.UR,
            step=ConversationStep.ASKING_NAME,
            context=OrderContext(product_sku="TEE-1", qty=3),
        )
        store.save(updated)

        # Fresh instance reads from disk
        reloaded = JsonConversationStore(data_dir=tmpdir).get(identity)

        assert reloaded.language == Language.UR
        assert reloaded.step == ConversationStep.ASKING_NAME
        assert reloaded.context.qty == 3
        assert reloaded.version == 2


@pytest.mark.parametrize("store_factory", [MemoryConversationStore, lambda: JsonConversationStore(tempfile.mkdtemp())])
def test_stale_save_is_rejected(store_factory):
    """Two writers starting from the same version: the second save loses."""
    store = store_factory()
    base = store.get_or_create("923001234567")

    store.save(replace(base, language=Language.EN))

    with pytest.raises(ConcurrentUpdateError):
        store.save(replace(base, language=Language.UR))
    assert store.get("923001234567").language == Language.EN


def test_processed_message_ids_survive_restart():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonConversationStore(data_dir=tmpdir)
        store.get_or_create("923001234567")
        store.mark_processed("923001234567", "wamid-1")

        reopened = JsonConversationStore(data_dir=tmpdir)
        assert reopened.has_processed("923001234567", "wamid-1")
        assert not reopened.has_processed("923001234567", "wamid-2")
        # marking does not touch the conversation version
        assert reopened.get("923001234567").version == 1


def test_processed_ids_are_bounded():
    store = MemoryConversationStore(processed_limit=3)
    for n in range(5):
        store.mark_processed("1", f"m{n}")

    assert not store.has_processed("1", "m0")
    assert store.has_processed("1", "m4")


def test_unknown_stored_step_resets_to_language_selection():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonConversationStore(data_dir=tmpdir)
        path = Path(tmpdir) / "923001234567.json"
        path.write_text(
            json.dumps(
                {
                    "identity": "923001234567",
                    "conversation": {
                        "identity": "923001234567",
                        "language": "en",
                        "step": "ASKING_COLOUR",
                        "context": {"product_sku": "TEE-1", "qty": 2},
                        "version": 7,
                    },
                }
            ),
            encoding="utf-8",
        )

        conversation = store.get("923001234567")

        assert conversation.step == ConversationStep.LANGUAGE_SELECTION
        assert conversation.context == OrderContext()
        assert conversation.version == 7


def _order(order_id: str, identity: str, created_at: float) -> Order:
    return Order(
        order_id=order_id,
        identity=identity,
        product_sku="TEE-1",
        product_name="Cotton Tee",
        product_price=1000,
        qty=2,
        total_amount=2000,
        customer=CustomerSnapshot(name="Ayesha", phone="+923001234567", address="House 1, Lahore"),
        payment_method=PaymentMethod.EASYPAISA,
        status=OrderStatus.PENDING_REVIEW,
        created_at=created_at,
        payment_proof=PaymentProof(kind=ProofKind.TEXT, received_at=created_at, text="TID 99"),
    )


def test_json_order_store_roundtrip_and_listing():
    with tempfile.TemporaryDirectory() as tmpdir:
        orders = JsonOrderStore(data_dir=tmpdir)
        orders.add(_order("ORD-2", "923001234567", 20.0))
        orders.add(_order("ORD-1", "923001234567", 10.0))
        orders.add(_order("ORD-3", "923009999999", 30.0))

        assert orders.get("ORD-1") == _order("ORD-1", "923001234567", 10.0)
        assert [o.order_id for o in orders.list_for_identity("923001234567")] == ["ORD-1", "ORD-2"]
        assert orders.get("ORD-404") is None


def test_order_ids_are_unique():
    with tempfile.TemporaryDirectory() as tmpdir:
        orders = JsonOrderStore(data_dir=tmpdir)
        orders.add(_order("ORD-1", "923001234567", 10.0))

        with pytest.raises(ValueError):
            orders.add(_order("ORD-1", "923001234567", 11.0))

from __future__ import annotations

import json
import logging
import re
import threading
import time
from dataclasses import replace
from pathlib import Path
from typing import Any

from app.application.exceptions import ConcurrentUpdateError
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.order_store import OrderStorePort
from app.domain.entities.conversation import Conversation, ConversationStep, Language, OrderContext
from app.domain.entities.order import (
    CustomerSnapshot,
    Order,
    OrderStatus,
    PaymentMethod,
    PaymentProof,
    ProofKind,
)


logger = logging.getLogger(__name__)

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9_.+\-]")


def _safe_name(key: str) -> str:
    return _UNSAFE_FILENAME.sub("_", key)


def _write_atomic(file_path: Path, data: dict[str, Any]) -> None:
    """Save JSON atomically: temp file, then rename over the target."""
    temp_path = file_path.with_suffix(".json.tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        temp_path.replace(file_path)
    except Exception:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
        raise


class JsonConversationStore(ConversationStorePort):
    """One JSON document per identity: the conversation, its version and processed message ids."""

    def __init__(self, data_dir: str = "./data/conversations", processed_limit: int = 200) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._processed_limit = processed_limit
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict

    def _get_lock(self, identity: str) -> threading.Lock:
        with self._lock_lock:
            if identity not in self._locks:
                self._locks[identity] = threading.Lock()
            return self._locks[identity]

    def _get_file_path(self, identity: str) -> Path:
        return self._data_dir / f"{_safe_name(identity)}.json"

    def _load(self, identity: str) -> dict[str, Any] | None:
        file_path = self._get_file_path(identity)
        if not file_path.exists():
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            logger.exception("Conversation file unreadable", extra={"wa_id": identity})
            raise

    def get(self, identity: str) -> Conversation | None:
        with self._get_lock(identity):
            data = self._load(identity)
        if data is None or "conversation" not in data:
            return None
        return self._deserialize(data["conversation"], identity)

    def get_or_create(self, identity: str) -> Conversation:
        existing = self.get(identity)
        if existing is not None:
            return existing
        try:
            return self.save(Conversation(identity=identity, last_activity_at=time.time()))
        except ConcurrentUpdateError:
            return self.get(identity)

    def save(self, conversation: Conversation) -> Conversation:
        identity = conversation.identity
        with self._get_lock(identity):
            data = self._load(identity) or {"identity": identity, "processed_message_ids": []}
            stored = data.get("conversation")
            current_version = int(stored.get("version", 0)) if stored else 0
            if conversation.version != current_version:
                raise ConcurrentUpdateError(
                    f"Conversation {identity} is at version {current_version}, "
                    f"save was based on {conversation.version}"
                )
            saved = replace(conversation, version=current_version + 1)
            data["conversation"] = self._serialize(saved)
            _write_atomic(self._get_file_path(identity), data)
            return saved

    def has_processed(self, identity: str, message_id: str) -> bool:
        with self._get_lock(identity):
            data = self._load(identity) or {}
        return message_id in data.get("processed_message_ids", [])

    def mark_processed(self, identity: str, message_id: str) -> None:
        with self._get_lock(identity):
            data = self._load(identity) or {"identity": identity}
            ids = data.get("processed_message_ids", [])
            if message_id not in ids:
                ids.append(message_id)
            data["processed_message_ids"] = ids[-self._processed_limit :]
            _write_atomic(self._get_file_path(identity), data)

    def _serialize(self, conversation: Conversation) -> dict[str, Any]:
        context = conversation.context
        return {
            "identity": conversation.identity,
            "language": conversation.language.value if conversation.language else None,
            "step": conversation.step.value,
            "context": {
                "product_sku": context.product_sku,
                "qty": context.qty,
                "name": context.name,
                "phone": context.phone,
                "address": context.address,
                "payment_method": context.payment_method.value if context.payment_method else None,
            },
            "last_activity_at": conversation.last_activity_at,
            "version": conversation.version,
        }

    def _deserialize(self, data: dict[str, Any], identity: str) -> Conversation:
        raw_context = data.get("context") or {}
        context = OrderContext(
            product_sku=raw_context.get("product_sku"),
            qty=raw_context.get("qty"),
            name=raw_context.get("name"),
            phone=raw_context.get("phone"),
            address=raw_context.get("address"),
            payment_method=_enum_or_none(PaymentMethod, raw_context.get("payment_method")),
        )

        step = _enum_or_none(ConversationStep, data.get("step"))
        if step is None:
            logger.error(
                "Unknown stored step, resetting to language selection",
                extra={"wa_id": identity, "state": data.get("step")},
            )
            step = ConversationStep.LANGUAGE_SELECTION
            context = OrderContext()

        return Conversation(
            identity=data.get("identity") or identity,
            language=_enum_or_none(Language, data.get("language")),
            step=step,
            context=context,
            last_activity_at=data.get("last_activity_at"),
            version=int(data.get("version", 0)),
        )


class JsonOrderStore(OrderStorePort):
    """One JSON document per order id."""

    def __init__(self, data_dir: str = "./data/orders") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _get_file_path(self, order_id: str) -> Path:
        return self._data_dir / f"{_safe_name(order_id)}.json"

    def add(self, order: Order) -> None:
        file_path = self._get_file_path(order.order_id)
        with self._lock:
            if file_path.exists():
                raise ValueError(f"Order {order.order_id} already exists")
            _write_atomic(file_path, self._serialize(order))

    def get(self, order_id: str) -> Order | None:
        file_path = self._get_file_path(order_id)
        if not file_path.exists():
            return None
        with open(file_path, "r", encoding="utf-8") as f:
            return self._deserialize(json.load(f))

    def list_for_identity(self, identity: str) -> list[Order]:
        orders: list[Order] = []
        for file_path in sorted(self._data_dir.glob("*.json")):
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, IOError):
                logger.warning("Skipping unreadable order file", extra={"reason": file_path.name})
                continue
            if data.get("identity") == identity:
                orders.append(self._deserialize(data))
        return sorted(orders, key=lambda o: o.created_at)

    def _serialize(self, order: Order) -> dict[str, Any]:
        proof = order.payment_proof
        return {
            "order_id": order.order_id,
            "identity": order.identity,
            "product_sku": order.product_sku,
            "product_name": order.product_name,
            "product_price": order.product_price,
            "qty": order.qty,
            "total_amount": order.total_amount,
            "customer": {
                "name": order.customer.name,
                "phone": order.customer.phone,
                "address": order.customer.address,
            },
            "payment_method": order.payment_method.value,
            "status": order.status.value,
            "created_at": order.created_at,
            "payment_proof": (
                {
                    "kind": proof.kind.value,
                    "received_at": proof.received_at,
                    "text": proof.text,
                    "media_ref": proof.media_ref,
                    "stored_path": proof.stored_path,
                }
                if proof
                else None
            ),
            "notes": order.notes,
        }

    def _deserialize(self, data: dict[str, Any]) -> Order:
        raw_proof = data.get("payment_proof")
        proof = None
        if raw_proof:
            proof = PaymentProof(
                kind=ProofKind(raw_proof["kind"]),
                received_at=raw_proof.get("received_at"),
                text=raw_proof.get("text"),
                media_ref=raw_proof.get("media_ref"),
                stored_path=raw_proof.get("stored_path"),
            )
        customer = data.get("customer") or {}
        return Order(
            order_id=data["order_id"],
            identity=data["identity"],
            product_sku=data["product_sku"],
            product_name=data["product_name"],
            product_price=data["product_price"],
            qty=data["qty"],
            total_amount=data["total_amount"],
            customer=CustomerSnapshot(
                name=customer.get("name", ""),
                phone=customer.get("phone", ""),
                address=customer.get("address", ""),
            ),
            payment_method=PaymentMethod(data["payment_method"]),
            status=OrderStatus(data["status"]),
            created_at=data["created_at"],
            payment_proof=proof,
            notes=data.get("notes", ""),
        )


def _enum_or_none(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None

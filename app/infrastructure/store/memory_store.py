from __future__ import annotations

import threading
import time
from dataclasses import replace

from app.application.exceptions import ConcurrentUpdateError
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.order_store import OrderStorePort
from app.domain.entities.conversation import Conversation
from app.domain.entities.order import Order


class MemoryConversationStore(ConversationStorePort):
    def __init__(self, processed_limit: int = 200) -> None:
        self._conversations: dict[str, Conversation] = {}
        self._processed: dict[str, list[str]] = {}
        self._processed_limit = processed_limit
        self._lock = threading.Lock()

    def get(self, identity: str) -> Conversation | None:
        with self._lock:
            return self._conversations.get(identity)

    def get_or_create(self, identity: str) -> Conversation:
        existing = self.get(identity)
        if existing is not None:
            return existing
        try:
            return self.save(Conversation(identity=identity, last_activity_at=time.time()))
        except ConcurrentUpdateError:
            # created concurrently
            return self.get(identity)

    def save(self, conversation: Conversation) -> Conversation:
        with self._lock:
            stored = self._conversations.get(conversation.identity)
            current_version = stored.version if stored else 0
            if conversation.version != current_version:
                raise ConcurrentUpdateError(
                    f"Conversation {conversation.identity} is at version {current_version}, "
                    f"save was based on {conversation.version}"
                )
            saved = replace(conversation, version=current_version + 1)
            self._conversations[conversation.identity] = saved
            return saved

    def has_processed(self, identity: str, message_id: str) -> bool:
        with self._lock:
            return message_id in self._processed.get(identity, [])

    def mark_processed(self, identity: str, message_id: str) -> None:
        with self._lock:
            ids = self._processed.setdefault(identity, [])
            if message_id not in ids:
                ids.append(message_id)
            if len(ids) > self._processed_limit:
                self._processed[identity] = ids[-self._processed_limit :]


class MemoryOrderStore(OrderStorePort):
    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}
        self._lock = threading.Lock()

    def add(self, order: Order) -> None:
        with self._lock:
            if order.order_id in self._orders:
                raise ValueError(f"Order {order.order_id} already exists")
            self._orders[order.order_id] = order

    def get(self, order_id: str) -> Order | None:
        with self._lock:
            return self._orders.get(order_id)

    def list_for_identity(self, identity: str) -> list[Order]:
        with self._lock:
            return [o for o in self._orders.values() if o.identity == identity]

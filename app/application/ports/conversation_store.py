from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.conversation import Conversation


class ConversationStorePort(ABC):
    @abstractmethod
    def get(self, identity: str) -> Conversation | None:
        raise NotImplementedError

    @abstractmethod
    def get_or_create(self, identity: str) -> Conversation:
        """Return the stored conversation, creating the default one for a new identity."""
        raise NotImplementedError

    @abstractmethod
    def save(self, conversation: Conversation) -> Conversation:
        """
        Compare-and-set on `conversation.version`.
        Returns the stored copy with the version incremented.
        Raises ConcurrentUpdateError if a newer version was stored meanwhile.
        """
        raise NotImplementedError

    @abstractmethod
    def has_processed(self, identity: str, message_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def mark_processed(self, identity: str, message_id: str) -> None:
        """Remember a delivered message id so redeliveries can be ignored."""
        raise NotImplementedError

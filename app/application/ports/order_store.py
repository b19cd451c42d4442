from abc import ABC, abstractmethod

from app.domain.entities.order import Order


class OrderStorePort(ABC):
    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order. Order ids are unique; adding an existing id is an error."""
        raise NotImplementedError

    @abstractmethod
    def get(self, order_id: str) -> Order | None:
        raise NotImplementedError

    @abstractmethod
    def list_for_identity(self, identity: str) -> list[Order]:
        raise NotImplementedError

from abc import ABC, abstractmethod


class MediaStoragePort(ABC):
    @abstractmethod
    def save_payment_proof(self, identity: str, content: bytes) -> str:
        """Store a payment screenshot. Returns the stored path."""
        raise NotImplementedError

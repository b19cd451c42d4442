from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum

from app.domain.entities.order import PaymentMethod


class Language(str, Enum):
    EN = "en"
    UR = "ur"


class ConversationStep(str, Enum):
    LANGUAGE_SELECTION = "LANGUAGE_SELECTION"
    SHOWING_PRODUCT = "SHOWING_PRODUCT"
    ASKING_QUANTITY = "ASKING_QUANTITY"
    ASKING_NAME = "ASKING_NAME"
    ASKING_PHONE = "ASKING_PHONE"
    ASKING_ADDRESS = "ASKING_ADDRESS"
    ASKING_PAYMENT_METHOD = "ASKING_PAYMENT_METHOD"
    WAITING_PAYMENT_PROOF = "WAITING_PAYMENT_PROOF"
    WAITING_FOR_AGENT = "WAITING_FOR_AGENT"


# Steps between "buy" and order creation; a greeting never interrupts these.
ORDER_IN_PROGRESS_STEPS = frozenset(
    {
        ConversationStep.ASKING_QUANTITY,
        ConversationStep.ASKING_NAME,
        ConversationStep.ASKING_PHONE,
        ConversationStep.ASKING_ADDRESS,
        ConversationStep.ASKING_PAYMENT_METHOD,
        ConversationStep.WAITING_PAYMENT_PROOF,
    }
)


@dataclass(frozen=True)
class OrderContext:
    product_sku: str | None = None
    qty: int | None = None
    name: str | None = None
    phone: str | None = None  # canonical +92XXXXXXXXXX
    address: str | None = None
    payment_method: PaymentMethod | None = None

    def populated_fields(self) -> frozenset[str]:
        return frozenset(f.name for f in fields(self) if getattr(self, f.name) is not None)

    def missing_fields(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is None]

    def is_complete(self) -> bool:
        return not self.missing_fields()


@dataclass(frozen=True)
class Conversation:
    identity: str
    language: Language | None = None
    step: ConversationStep = ConversationStep.LANGUAGE_SELECTION
    context: OrderContext = field(default_factory=OrderContext)
    last_activity_at: float | None = None
    version: int = 0  # bumped by the store on every successful save

    @property
    def in_order_flow(self) -> bool:
        return self.step in ORDER_IN_PROGRESS_STEPS

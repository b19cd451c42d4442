from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PaymentMethod(str, Enum):
    EASYPAISA = "easypaisa"
    COD = "cod"


class OrderStatus(str, Enum):
    PENDING_REVIEW = "pending_review"
    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class ProofKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class CustomerSnapshot:
    name: str
    phone: str
    address: str


@dataclass(frozen=True)
class PaymentProof:
    kind: ProofKind
    received_at: float
    text: str | None = None  # transaction reference, verbatim
    media_ref: str | None = None  # channel media reference
    stored_path: str | None = None


@dataclass(frozen=True)
class Order:
    order_id: str
    identity: str
    product_sku: str
    product_name: str
    product_price: float  # price at creation time, never a live reference
    qty: int
    total_amount: float
    customer: CustomerSnapshot
    payment_method: PaymentMethod
    status: OrderStatus
    created_at: float
    payment_proof: PaymentProof | None = None
    notes: str = ""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from app.application.exceptions import ProductNotFoundError
from app.application.ports.order_store import OrderStorePort
from app.application.ports.product_catalog import ProductCatalogPort
from app.application.utils.validators import validate_phone
from app.domain.entities.conversation import Conversation
from app.domain.entities.order import CustomerSnapshot, Order, OrderStatus, PaymentMethod, PaymentProof
from app.domain.exceptions import IncompleteOrderError


STATUS_BY_PAYMENT_METHOD = {
    PaymentMethod.EASYPAISA: OrderStatus.PENDING_REVIEW,
    PaymentMethod.COD: OrderStatus.PENDING_CONFIRMATION,
}


def generate_order_id() -> str:
    return f"ORD-{uuid.uuid4().hex.upper()}"


class CreateOrderUseCase:
    def __init__(
        self,
        catalog: ProductCatalogPort,
        orders: OrderStorePort,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._catalog = catalog
        self._orders = orders
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def execute(self, conversation: Conversation, proof: PaymentProof | None = None) -> Order:
        """
        Snapshot the product and customer details from a complete context and persist the order.

        Raises:
            IncompleteOrderError: any order field is missing or the phone is not canonical
            ProductNotFoundError: the product in context no longer exists
        """
        context = conversation.context
        missing = context.missing_fields()
        if missing:
            raise IncompleteOrderError(f"Cannot create order, missing: {', '.join(missing)}")

        phone = validate_phone(context.phone)
        if phone is None or phone != context.phone:
            raise IncompleteOrderError("Cannot create order, phone is not in canonical form")

        product = self._catalog.get_product(context.product_sku)
        if product is None:
            raise ProductNotFoundError(f"Product {context.product_sku} not found")

        order = Order(
            order_id=generate_order_id(),
            identity=conversation.identity,
            product_sku=product.sku,
            product_name=product.name,
            product_price=product.price,
            qty=context.qty,
            total_amount=product.price * context.qty,
            customer=CustomerSnapshot(name=context.name, phone=phone, address=context.address),
            payment_method=context.payment_method,
            status=STATUS_BY_PAYMENT_METHOD[context.payment_method],
            created_at=self._clock(),
            payment_proof=proof,
        )
        self._orders.add(order)

        self._logger.info(
            "Order created",
            extra={
                "wa_id": conversation.identity,
                "order_id": order.order_id,
                "status": order.status.value,
                "total": order.total_amount,
            },
        )
        return order

"""Application service: Create Order use case.

Two phases, in order:
1. Commit: build the Order aggregate from the normalized payload, give
   it an order number and persist it.  Any failure here is a hard error.
2. Notify: dispatch the confirmation email/SMS.  The dispatcher returns
   outcomes as data, so a committed order always reaches the caller.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from perfumery.application.dto import NormalizedOrder
from perfumery.application.notifications.channels import (
    NotificationKind,
    NotificationResult,
)
from perfumery.application.notifications.dispatcher import NotificationDispatcher
from perfumery.domain.exceptions import OrderNumberConflict, PersistenceError
from perfumery.domain.model.order import (
    Customer,
    Delivery,
    Order,
    OrderLineItem,
    OrderTotals,
    Payment,
    PaymentMethod,
)
from perfumery.domain.model.value_objects import Money, Quantity
from perfumery.domain.repository.order_repository import OrderRepository
from perfumery.domain.service.order_numbering import generate_order_number

logger = structlog.get_logger(__name__)

DEFAULT_NUMBER_ATTEMPTS = 5


@dataclass(frozen=True)
class OrderPlacement:
    order: Order
    notifications: NotificationResult


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: NotificationDispatcher,
        max_number_attempts: int = DEFAULT_NUMBER_ATTEMPTS,
        rng: random.Random | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher
        self._max_number_attempts = max(1, max_number_attempts)
        self._rng = rng

    def handle(self, normalized: NormalizedOrder) -> OrderPlacement:
        order = self.commit(normalized)
        notifications = self._dispatcher.dispatch(order, NotificationKind.confirmation())
        return OrderPlacement(order=order, notifications=notifications)

    def commit(self, normalized: NormalizedOrder, now: datetime | None = None) -> Order:
        """Build, number and persist the order.

        The unique index on the order number is the arbiter: on a conflict
        a fresh number is drawn, up to ``max_number_attempts`` times.
        """
        order = self._to_domain(normalized, now or datetime.now(timezone.utc))

        for attempt in range(1, self._max_number_attempts + 1):
            order.assign_order_number(generate_order_number(order.created_at, self._rng))
            try:
                self._order_repo.add(order)
            except OrderNumberConflict:
                logger.warning(
                    "order_number_conflict",
                    order_number=order.order_number,
                    attempt=attempt,
                )
                continue
            logger.info("order_created", order_number=order.order_number, order_id=order.id)
            return order

        raise PersistenceError(
            f"Could not allocate a unique order number after "
            f"{self._max_number_attempts} attempts"
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(normalized: NormalizedOrder, now: datetime) -> Order:
        items = [
            OrderLineItem(
                product_id=spec.product_id,
                name=spec.name,
                unit_price=Money(spec.price),  # <-- price snapshot
                quantity=Quantity(spec.quantity),
                category=spec.category,
            )
            for spec in normalized.items
        ]
        return Order.create(
            customer=Customer(
                first_name=normalized.customer.first_name,
                last_name=normalized.customer.last_name,
                phone=normalized.customer.phone,
                email=normalized.customer.email,
            ),
            delivery=Delivery(
                address=normalized.delivery.address,
                city=normalized.delivery.city,
                postal_code=normalized.delivery.postal_code,
            ),
            payment=Payment(
                method=PaymentMethod.parse(normalized.payment.method),
                transaction_id=normalized.payment.transaction_id,
            ),
            items=items,
            totals=OrderTotals(
                subtotal=Money(normalized.totals.subtotal),
                delivery_charge=Money(normalized.totals.delivery_charge),
                total=Money(normalized.totals.total),
            ),
            order_notes=normalized.order_notes,
            now=now,
        )

"""Application service: Update Order use case (admin).

Applies a partial update to an order, persists it, then sends the
status-update notification if the status actually changed.  As with
order creation, notification outcomes never undo or fail the update.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from perfumery.application.dto import OrderUpdateSpec
from perfumery.application.notifications.channels import (
    NotificationKind,
    NotificationResult,
)
from perfumery.application.notifications.dispatcher import NotificationDispatcher
from perfumery.domain.exceptions import EntityNotFoundError
from perfumery.domain.model.order import Order
from perfumery.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderRevision:
    order: Order
    notifications: NotificationResult | None


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher

    def handle(self, order_id: str, update: OrderUpdateSpec) -> OrderRevision:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order not found")

        previous_status = order.status.value
        order.apply_update(
            status=update.status,
            admin_notes=update.admin_notes,
            payment_status=update.payment_status,
        )
        self._order_repo.save(order)
        logger.info(
            "order_updated",
            order_number=order.order_number,
            status=order.status.value,
            payment_status=order.payment.status.value,
        )

        notifications = None
        if update.status is not None and update.status != previous_status:
            notifications = self._dispatcher.dispatch(
                order, NotificationKind.status_update(update.status)
            )
        return OrderRevision(order=order, notifications=notifications)

"""Application service: Resend Confirmation use case (admin).

Re-sends the confirmation email/SMS for an order that already exists,
e.g. after the mail settings were fixed.
"""

from __future__ import annotations

from perfumery.application.notifications.channels import (
    NotificationKind,
    NotificationResult,
)
from perfumery.application.notifications.dispatcher import NotificationDispatcher
from perfumery.domain.exceptions import EntityNotFoundError
from perfumery.domain.repository.order_repository import OrderRepository


class ResendConfirmationHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: NotificationDispatcher,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher

    def handle(self, order_id: str) -> NotificationResult:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order not found")
        return self._dispatcher.dispatch(order, NotificationKind.confirmation())

"""Application service: Show Order use case (query)."""

from __future__ import annotations

from perfumery.domain.exceptions import EntityNotFoundError
from perfumery.domain.model.order import Order
from perfumery.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError("Order not found")
        return order

    def handle_number(self, order_number: str) -> Order:
        order = self._order_repo.get_by_number(order_number)
        if order is None:
            raise EntityNotFoundError("Order not found")
        return order

"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from perfumery.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new, numbered order and assign its ``id``.

        Raises OrderNumberConflict if another order holds the same
        order number, PersistenceError for any other storage failure.
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its record ID, or None if not found."""

    @abstractmethod
    def get_by_number(self, order_number: str) -> Order | None:
        """Return an order by its order number, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist the mutable lifecycle fields of an existing order."""

    @abstractmethod
    def list_page(
        self,
        status: str | None,
        page: int,
        limit: int,
    ) -> tuple[list[Order], int]:
        """Return one page of orders, newest first, plus the matching count.

        ``status`` None means no filter.  A ``limit`` of zero or less means
        no limit; a page below 1 is read as the first page.
        """

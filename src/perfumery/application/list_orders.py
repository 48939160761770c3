"""Application service: List Orders use case (admin query).

Pagination is 1-indexed and deliberately unvalidated: a non-positive
``limit`` returns every matching order on a single page, a page below 1
reads as the first page.
"""

from __future__ import annotations

import math

from perfumery.application.dto import OrderPage
from perfumery.domain.repository.order_repository import OrderRepository

DEFAULT_PAGE_SIZE = 20


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        status: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPage:
        status_filter = None if status in (None, "", "all") else status
        orders, total = self._order_repo.list_page(status_filter, page, limit)

        if limit > 0:
            total_pages = math.ceil(total / limit)
        else:
            total_pages = 1 if total else 0

        return OrderPage(
            orders=orders,
            total_orders=total,
            total_pages=total_pages,
            current_page=page,
        )

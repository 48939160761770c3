"""Catalog repository that picks its backend per call.

Each operation probes connectivity first; when the live store is
unreachable the call goes to the fallback instead.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from perfumery.domain.model.product import Product, ProductCategory
from perfumery.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class SwitchingProductRepository(ProductRepository):

    def __init__(
        self,
        live: ProductRepository,
        fallback: ProductRepository,
        probe: Callable[[], bool],
    ) -> None:
        self._live = live
        self._fallback = fallback
        self._probe = probe

    def _current(self) -> ProductRepository:
        if self._probe():
            return self._live
        logger.info("catalog_fallback_in_use")
        return self._fallback

    def get_by_id(self, product_id: str) -> Product | None:
        return self._current().get_by_id(product_id)

    def list(
        self,
        category: ProductCategory | None = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        return self._current().list(category=category, in_stock_only=in_stock_only)

    def add(self, product: Product) -> None:
        self._current().add(product)

    def save(self, product: Product) -> None:
        self._current().save(product)

    def delete(self, product_id: str) -> Product | None:
        return self._current().delete(product_id)

    def replace_all(self, products: list[Product]) -> list[Product]:
        return self._current().replace_all(products)

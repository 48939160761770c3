"""Read-only catalog over the fixed sample perfumes.

Serves the storefront while MongoDB is unreachable.  Every write is a
PersistenceError: there is nowhere to keep it.
"""

from __future__ import annotations

import copy

from perfumery.application.sample_catalog import sample_products
from perfumery.domain.exceptions import PersistenceError
from perfumery.domain.model.product import Product, ProductCategory
from perfumery.domain.repository.product_repository import ProductRepository

_UNAVAILABLE = "Catalog database is unavailable; the catalog is read-only"


class FallbackProductRepository(ProductRepository):

    def __init__(self) -> None:
        self._products = sample_products(with_ids=True)

    def get_by_id(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return copy.deepcopy(product)
        return None

    def list(
        self,
        category: ProductCategory | None = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        return [
            copy.deepcopy(p)
            for p in self._products
            if (category is None or p.category is category)
            and (not in_stock_only or p.in_stock)
        ]

    def add(self, product: Product) -> None:
        raise PersistenceError(_UNAVAILABLE)

    def save(self, product: Product) -> None:
        raise PersistenceError(_UNAVAILABLE)

    def delete(self, product_id: str) -> Product | None:
        raise PersistenceError(_UNAVAILABLE)

    def replace_all(self, products: list[Product]) -> list[Product]:
        raise PersistenceError(_UNAVAILABLE)

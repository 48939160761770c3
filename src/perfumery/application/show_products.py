"""Application service: catalog queries."""

from __future__ import annotations

from perfumery.domain.exceptions import EntityNotFoundError
from perfumery.domain.model.product import Product, ProductCategory
from perfumery.domain.repository.product_repository import ProductRepository


class ShowProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, category: str | None = None, in_stock: str | bool | None = None) -> list[Product]:
        """List the catalog.

        ``category`` "all" or empty means every category; only a true
        ``in_stock`` ("true" from a query string) narrows the list.  An
        unknown category is an equality filter that matches nothing.
        """
        category_filter = None
        if category and category != "all":
            try:
                category_filter = ProductCategory(category)
            except ValueError:
                return []
        in_stock_only = in_stock is True or in_stock == "true"
        return self._product_repo.list(category=category_filter, in_stock_only=in_stock_only)

    def handle_one(self, product_id: str) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")
        return product

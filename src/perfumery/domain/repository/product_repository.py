"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (MongoDB, fixed sample data,
in-memory) live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from perfumery.domain.model.product import Product, ProductCategory


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list(
        self,
        category: ProductCategory | None = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        """Return products matching the equality filters, newest first."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Insert a new product and assign its ``id``."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist an updated product."""

    @abstractmethod
    def delete(self, product_id: str) -> Product | None:
        """Remove a product, returning it, or None if it did not exist."""

    @abstractmethod
    def replace_all(self, products: list[Product]) -> list[Product]:
        """Drop the whole catalog and insert *products* (ids assigned)."""

"""Application service: Update Product use case."""

from __future__ import annotations

import structlog

from perfumery.application.dto import ProductSpec
from perfumery.domain.exceptions import EntityNotFoundError
from perfumery.domain.model.product import Product, ProductBadge, ProductCategory
from perfumery.domain.model.value_objects import Money
from perfumery.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, spec: ProductSpec, image: str | None = None) -> Product:
        """Replace a product's fields from the admin form.

        Existing orders are untouched: their items captured a name and
        price snapshot at creation time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")

        product.revise(
            name=spec.name,
            description=spec.description,
            price=Money(spec.price),
            category=ProductCategory.parse(spec.category),
            notes=spec.notes,
            badge=ProductBadge.parse(spec.badge),
            quantity=spec.quantity,
            image=image,
        )
        self._product_repo.save(product)
        logger.info("product_updated", product_id=product.id, name=product.name)
        return product

"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from perfumery.application.dto import ProductSpec
from perfumery.domain.model.product import Product, ProductBadge, ProductCategory
from perfumery.domain.model.value_objects import Money
from perfumery.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, spec: ProductSpec, image: str | None = None) -> Product:
        """Add a new perfume to the catalog.

        ``image`` is the public path of an already-stored upload.
        """
        product = Product.create(
            name=spec.name,
            description=spec.description,
            price=Money(spec.price),
            category=ProductCategory.parse(spec.category),
            notes=spec.notes,
            badge=ProductBadge.parse(spec.badge),
            quantity=spec.quantity,
            image=image or "",
        )
        self._product_repo.add(product)
        logger.info("product_added", product_id=product.id, name=product.name)
        return product

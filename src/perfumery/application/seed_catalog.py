"""Application service: Seed Catalog use case.

Destructive: the whole catalog is replaced with the sample perfumes.
Backs both the bulk-insert endpoint and the ``setup-db`` command.
"""

from __future__ import annotations

from collections import Counter

import structlog

from perfumery.application.dto import CatalogSummary, CategorySummary
from perfumery.application.sample_catalog import sample_products
from perfumery.domain.model.value_objects import Money
from perfumery.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class SeedCatalogHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> CatalogSummary:
        products = self._product_repo.replace_all(sample_products())

        counts = Counter(p.category.value for p in products)
        inventory_value = Money.zero()
        for product in products:
            inventory_value = inventory_value + product.price * product.quantity

        logger.info("catalog_seeded", products=len(products))
        return CatalogSummary(
            products=products,
            categories=[CategorySummary(category=c, count=n) for c, n in sorted(counts.items())],
            inventory_value=str(inventory_value),
        )

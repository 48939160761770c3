"""Application service: Remove Product use case."""

from __future__ import annotations

import structlog

from perfumery.domain.exceptions import EntityNotFoundError
from perfumery.domain.model.product import Product
from perfumery.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class RemoveProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> Product:
        product = self._product_repo.delete(product_id)
        if product is None:
            raise EntityNotFoundError("Product not found")
        logger.info("product_deleted", product_id=product_id, name=product.name)
        return product

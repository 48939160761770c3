"""MongoDB-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from perfumery.domain.exceptions import PersistenceError
from perfumery.domain.model.product import Product, ProductBadge, ProductCategory
from perfumery.domain.model.value_objects import Money
from perfumery.domain.repository.product_repository import ProductRepository
from perfumery.infrastructure.persistence.mongo import object_id


class MongoProductRepository(ProductRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        oid = object_id(product_id)
        if oid is None:
            return None
        try:
            raw = self._collection.find_one({"_id": oid})
        except PyMongoError as exc:
            raise PersistenceError(f"Could not load product: {exc}") from exc
        return self._to_domain(raw) if raw else None

    def list(
        self,
        category: ProductCategory | None = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        query: dict = {}
        if category is not None:
            query["category"] = category.value
        if in_stock_only:
            query["inStock"] = True
        try:
            cursor = self._collection.find(query).sort("createdAt", DESCENDING)
            return [self._to_domain(raw) for raw in cursor]
        except PyMongoError as exc:
            raise PersistenceError(f"Could not list products: {exc}") from exc

    def add(self, product: Product) -> None:
        try:
            result = self._collection.insert_one(self._to_raw(product))
        except PyMongoError as exc:
            raise PersistenceError(f"Could not store product: {exc}") from exc
        product.id = str(result.inserted_id)

    def save(self, product: Product) -> None:
        oid = object_id(product.id) if product.id else None
        if oid is None:
            raise PersistenceError("Cannot save a product that was never stored")
        try:
            self._collection.update_one({"_id": oid}, {"$set": self._to_raw(product)})
        except PyMongoError as exc:
            raise PersistenceError(f"Could not update product: {exc}") from exc

    def delete(self, product_id: str) -> Product | None:
        oid = object_id(product_id)
        if oid is None:
            return None
        try:
            raw = self._collection.find_one_and_delete({"_id": oid})
        except PyMongoError as exc:
            raise PersistenceError(f"Could not delete product: {exc}") from exc
        return self._to_domain(raw) if raw else None

    def replace_all(self, products: list[Product]) -> list[Product]:
        try:
            self._collection.delete_many({})
            if products:
                result = self._collection.insert_many([self._to_raw(p) for p in products])
                for product, inserted_id in zip(products, result.inserted_ids):
                    product.id = str(inserted_id)
        except PyMongoError as exc:
            raise PersistenceError(f"Could not reseed catalog: {exc}") from exc
        return products

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "name": product.name,
            "description": product.description,
            "price": product.price.to_number(),
            "category": product.category.value,
            "notes": list(product.notes),
            "image": product.image,
            "badge": product.badge.value,
            "quantity": product.quantity,
            "inStock": product.in_stock,
            "createdAt": product.created_at,
            "updatedAt": product.updated_at,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=str(raw["_id"]),
            name=raw.get("name", ""),
            description=raw.get("description", ""),
            price=Money.of(raw.get("price", 0)),
            category=ProductCategory(raw.get("category", "floral")),
            notes=list(raw.get("notes", [])),
            image=raw.get("image", ""),
            badge=ProductBadge(raw.get("badge", "")),
            quantity=int(raw.get("quantity", 0)),
            in_stock=bool(raw.get("inStock", False)),
            created_at=raw.get("createdAt") or datetime.now(timezone.utc),
            updated_at=raw.get("updatedAt") or datetime.now(timezone.utc),
        )

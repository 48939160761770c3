"""MongoDB-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from perfumery.domain.exceptions import OrderNumberConflict, PersistenceError
from perfumery.domain.model.order import (
    Customer,
    Delivery,
    Order,
    OrderLineItem,
    OrderStatus,
    OrderTotals,
    Payment,
    PaymentMethod,
    PaymentStatus,
)
from perfumery.domain.model.value_objects import Money, Quantity
from perfumery.domain.repository.order_repository import OrderRepository
from perfumery.infrastructure.persistence.mongo import object_id

logger = structlog.get_logger(__name__)


class MongoOrderRepository(OrderRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection
        self._indexed = False

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        self._ensure_indexes()
        raw = self._to_raw(order)
        try:
            result = self._collection.insert_one(raw)
        except DuplicateKeyError as exc:
            raise OrderNumberConflict(
                f"Order number {order.order_number} is already taken"
            ) from exc
        except PyMongoError as exc:
            raise PersistenceError(f"Could not store order: {exc}") from exc
        order.id = str(result.inserted_id)

    def get_by_id(self, order_id: str) -> Order | None:
        oid = object_id(order_id)
        if oid is None:
            return None
        return self._find_one({"_id": oid})

    def get_by_number(self, order_number: str) -> Order | None:
        return self._find_one({"orderNumber": order_number})

    def save(self, order: Order) -> None:
        oid = object_id(order.id) if order.id else None
        if oid is None:
            raise PersistenceError("Cannot save an order that was never stored")
        try:
            self._collection.update_one(
                {"_id": oid},
                {
                    "$set": {
                        "status": order.status.value,
                        "adminNotes": order.admin_notes,
                        "payment.status": order.payment.status.value,
                        "updatedAt": order.updated_at,
                    }
                },
            )
        except PyMongoError as exc:
            raise PersistenceError(f"Could not update order: {exc}") from exc

    def list_page(
        self,
        status: str | None,
        page: int,
        limit: int,
    ) -> tuple[list[Order], int]:
        query = {"status": status} if status else {}
        page = max(page, 1)
        try:
            cursor = self._collection.find(query).sort("createdAt", DESCENDING)
            if limit > 0:
                cursor = cursor.skip((page - 1) * limit).limit(limit)
            orders = [self._to_domain(raw) for raw in cursor]
            total = self._collection.count_documents(query)
        except PyMongoError as exc:
            raise PersistenceError(f"Could not list orders: {exc}") from exc
        return orders, total

    # --- Internal helpers -----------------------------------------------------

    def _ensure_indexes(self) -> None:
        if self._indexed:
            return
        try:
            self._collection.create_index("orderNumber", unique=True)
        except PyMongoError as exc:
            raise PersistenceError(f"Could not prepare orders collection: {exc}") from exc
        self._indexed = True

    def _find_one(self, query: dict) -> Order | None:
        try:
            raw = self._collection.find_one(query)
        except PyMongoError as exc:
            raise PersistenceError(f"Could not load order: {exc}") from exc
        return self._to_domain(raw) if raw else None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        customer = {
            "firstName": order.customer.first_name,
            "lastName": order.customer.last_name,
            "phone": order.customer.phone,
        }
        if order.customer.email:
            customer["email"] = order.customer.email

        delivery = {"address": order.delivery.address, "city": order.delivery.city}
        if order.delivery.postal_code:
            delivery["postalCode"] = order.delivery.postal_code

        payment = {
            "method": order.payment.method.value,
            "status": order.payment.status.value,
        }
        if order.payment.transaction_id:
            payment["transactionId"] = order.payment.transaction_id

        return {
            "orderNumber": order.order_number,
            "customer": customer,
            "delivery": delivery,
            "payment": payment,
            "items": [
                {
                    "productId": item.product_id,
                    "name": item.name,
                    "price": item.unit_price.to_number(),
                    "quantity": item.quantity.value,
                    "category": item.category,
                }
                for item in order.items
            ],
            "totals": {
                "subtotal": order.totals.subtotal.to_number(),
                "deliveryCharge": order.totals.delivery_charge.to_number(),
                "total": order.totals.total.to_number(),
            },
            "status": order.status.value,
            "orderNotes": order.order_notes,
            "adminNotes": order.admin_notes,
            "createdAt": order.created_at,
            "updatedAt": order.updated_at,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        customer = raw.get("customer", {})
        delivery = raw.get("delivery", {})
        payment = raw.get("payment", {})
        totals = raw.get("totals", {})
        return Order(
            id=str(raw["_id"]),
            order_number=raw.get("orderNumber"),
            customer=Customer(
                first_name=customer.get("firstName", ""),
                last_name=customer.get("lastName", ""),
                phone=customer.get("phone", ""),
                email=customer.get("email"),
            ),
            delivery=Delivery(
                address=delivery.get("address", ""),
                city=delivery.get("city", ""),
                postal_code=delivery.get("postalCode"),
            ),
            payment=Payment(
                method=PaymentMethod(payment.get("method", "cod")),
                transaction_id=payment.get("transactionId"),
                status=PaymentStatus(payment.get("status", "pending")),
            ),
            items=[
                OrderLineItem(
                    product_id=i["productId"],
                    name=i["name"],
                    unit_price=Money.of(i["price"]),
                    quantity=Quantity(int(i["quantity"])),
                    category=i.get("category", "other"),
                )
                for i in raw.get("items", [])
            ],
            totals=OrderTotals(
                subtotal=Money.of(totals.get("subtotal", 0)),
                delivery_charge=Money.of(totals.get("deliveryCharge", 0)),
                total=Money.of(totals.get("total", 0)),
            ),
            status=OrderStatus(raw.get("status", "pending")),
            order_notes=raw.get("orderNotes", ""),
            admin_notes=raw.get("adminNotes", ""),
            created_at=_aware(raw.get("createdAt")),
            updated_at=_aware(raw.get("updatedAt")),
        )


def _aware(value: datetime | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

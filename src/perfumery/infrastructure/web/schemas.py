"""Request models and JSON serializers for the HTTP API.

Response documents keep the storefront's established wire format:
camelCase keys, the record ID under ``_id`` and ISO-8601 UTC timestamps.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict

from perfumery.domain.model.order import Order
from perfumery.domain.model.product import Product


class OrderUpdateRequest(BaseModel):
    """``PUT /api/orders/{id}``.  Fields left out of the body are not touched."""

    model_config = ConfigDict(extra="ignore")

    status: str | None = None
    adminNotes: str | None = None
    paymentStatus: str | None = None


class EmailTestRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str | None = None


# --- Serializers --------------------------------------------------------------


def iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def order_to_json(order: Order) -> dict:
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

    payment = {"method": order.payment.method.value, "status": order.payment.status.value}
    if order.payment.transaction_id:
        payment["transactionId"] = order.payment.transaction_id

    return {
        "_id": order.id,
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
        "createdAt": iso(order.created_at),
        "updatedAt": iso(order.updated_at),
    }


def product_to_json(product: Product) -> dict:
    return {
        "_id": product.id,
        "name": product.name,
        "description": product.description,
        "price": product.price.to_number(),
        "category": product.category.value,
        "notes": list(product.notes),
        "image": product.image,
        "badge": product.badge.value,
        "quantity": product.quantity,
        "inStock": product.in_stock,
        "createdAt": iso(product.created_at),
        "updatedAt": iso(product.updated_at),
    }

"""Data Transfer Objects: plain containers that cross layer boundaries.

Input DTOs carry already-validated data from the HTTP and CLI layers
into the handlers; output DTOs carry results back without exposing
repository details.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from perfumery.domain.exceptions import ValidationError
from perfumery.domain.model.order import Order
from perfumery.domain.model.product import Product


# --- Order intake (output of the validation layer) ---------------------------


@dataclass(frozen=True)
class CustomerSpec:
    first_name: str
    last_name: str
    phone: str
    email: str | None = None


@dataclass(frozen=True)
class DeliverySpec:
    address: str
    city: str
    postal_code: str | None = None


@dataclass(frozen=True)
class PaymentSpec:
    method: str
    transaction_id: str | None = None


@dataclass(frozen=True)
class OrderItemSpec:
    product_id: str
    name: str
    price: Decimal
    quantity: int
    category: str = "other"


@dataclass(frozen=True)
class TotalsSpec:
    subtotal: Decimal
    delivery_charge: Decimal
    total: Decimal


@dataclass(frozen=True)
class NormalizedOrder:
    """A trimmed, coerced order payload.

    Optional fields that were empty are ``None`` here and absent from
    ``to_dict()``; they are never stored as empty strings.
    """

    customer: CustomerSpec
    delivery: DeliverySpec
    payment: PaymentSpec
    items: tuple[OrderItemSpec, ...]
    totals: TotalsSpec
    order_notes: str = ""

    def to_dict(self) -> dict:
        customer = {
            "firstName": self.customer.first_name,
            "lastName": self.customer.last_name,
            "phone": self.customer.phone,
        }
        if self.customer.email is not None:
            customer["email"] = self.customer.email

        delivery = {"address": self.delivery.address, "city": self.delivery.city}
        if self.delivery.postal_code is not None:
            delivery["postalCode"] = self.delivery.postal_code

        payment = {"method": self.payment.method}
        if self.payment.transaction_id is not None:
            payment["transactionId"] = self.payment.transaction_id

        return {
            "customer": customer,
            "delivery": delivery,
            "payment": payment,
            "items": [
                {
                    "productId": item.product_id,
                    "name": item.name,
                    "price": float(item.price),
                    "quantity": item.quantity,
                    "category": item.category,
                }
                for item in self.items
            ],
            "totals": {
                "subtotal": float(self.totals.subtotal),
                "deliveryCharge": float(self.totals.delivery_charge),
                "total": float(self.totals.total),
            },
            "orderNotes": self.order_notes,
        }


# --- Order administration ----------------------------------------------------


@dataclass(frozen=True)
class OrderUpdateSpec:
    """Partial update.  ``None`` means the field was not supplied."""

    status: str | None = None
    admin_notes: str | None = None
    payment_status: str | None = None


@dataclass(frozen=True)
class OrderPage:
    orders: list[Order]
    total_orders: int
    total_pages: int
    current_page: int


# --- Catalog -----------------------------------------------------------------


@dataclass(frozen=True)
class ProductSpec:
    """Input: what the admin product form submitted, already coerced."""

    name: str
    description: str
    price: Decimal
    category: str
    notes: list[str] = field(default_factory=list)
    badge: str = ""
    quantity: int = 0

    @staticmethod
    def from_form(
        name: str | None,
        description: str | None,
        price: str | float | None,
        category: str | None,
        notes: str | list[str] | None = None,
        badge: str | None = None,
        quantity: str | int | None = None,
    ) -> ProductSpec:
        """Coerce raw form fields the way the admin page sends them.

        ``notes`` may be a comma-separated string; an unparsable
        ``quantity`` counts as zero.
        """
        try:
            parsed_price = Decimal(str(price).strip())
        except InvalidOperation:
            raise ValidationError(f"Invalid product price: {price!r}") from None
        if not parsed_price.is_finite():
            raise ValidationError(f"Invalid product price: {price!r}")

        if isinstance(notes, str):
            parsed_notes = [n.strip() for n in notes.split(",") if n.strip()]
        else:
            parsed_notes = list(notes or [])

        try:
            parsed_quantity = int(str(quantity).strip()) if quantity is not None else 0
        except ValueError:
            parsed_quantity = 0

        return ProductSpec(
            name=name or "",
            description=description or "",
            price=parsed_price,
            category=category or "",
            notes=parsed_notes,
            badge=badge or "",
            quantity=parsed_quantity,
        )


@dataclass(frozen=True)
class CategorySummary:
    category: str
    count: int


@dataclass(frozen=True)
class CatalogSummary:
    """Output of a catalog reseed: what went in and what it is worth."""

    products: list[Product]
    categories: list[CategorySummary]
    inventory_value: str

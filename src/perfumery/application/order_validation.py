"""Order payload validation and normalization.

Pure functions, no repositories: ``validate_order_payload`` turns the raw
JSON body of a checkout into a ``NormalizedOrder`` or raises a
``ValidationError`` whose message names the first problem found.
Checks run in a fixed order and stop at the first failure so the client
always sees one actionable message.

Client-computed totals are accepted as given; they are not reconciled
against the line items.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from perfumery.application.dto import (
    CustomerSpec,
    DeliverySpec,
    NormalizedOrder,
    OrderItemSpec,
    PaymentSpec,
    TotalsSpec,
)
from perfumery.domain.exceptions import ValidationError
from perfumery.domain.model.order import PaymentMethod

PAYMENT_METHODS = tuple(m.value for m in PaymentMethod)


def validate_order_payload(raw: Any) -> NormalizedOrder:
    """Check and normalize a checkout payload.

    Raises ValidationError with a distinct message per failed check.
    """
    data = raw if isinstance(raw, dict) else {}

    # 1. Sections
    customer = data.get("customer")
    if not isinstance(customer, dict):
        raise ValidationError("Missing customer information")
    delivery = data.get("delivery")
    if not isinstance(delivery, dict):
        raise ValidationError("Missing delivery information")
    payment = data.get("payment")
    if not isinstance(payment, dict):
        raise ValidationError("Missing payment information")
    items = data.get("items")
    if not isinstance(items, list) or not items:
        raise ValidationError("Order must contain at least one item")
    totals = data.get("totals")
    if not isinstance(totals, dict):
        raise ValidationError("Missing order totals")

    # 2. Customer
    first_name = _text(customer.get("firstName"))
    if not first_name:
        raise ValidationError("Customer first name is required")
    last_name = _text(customer.get("lastName"))
    if not last_name:
        raise ValidationError("Customer last name is required")
    phone = _text(customer.get("phone"))
    if not phone:
        raise ValidationError("Customer phone number is required")

    # 3. Delivery
    address = _text(delivery.get("address"))
    if not address:
        raise ValidationError("Delivery address is required")
    city = _text(delivery.get("city"))
    if not city:
        raise ValidationError("Delivery city is required")

    # 4. Payment
    method = _text(payment.get("method"))
    if method not in PAYMENT_METHODS:
        raise ValidationError("Valid payment method is required (bkash or cod)")
    transaction_id = _text(payment.get("transactionId"))
    if method == PaymentMethod.BKASH.value and not transaction_id:
        raise ValidationError("Transaction ID is required for bKash payment")

    # 5. Items
    line_items = tuple(_item(entry) for entry in items)

    # 6. Totals
    total = totals.get("total")
    if not _is_number(total) or total <= 0:
        raise ValidationError("Valid order total is required")
    subtotal = _coerce_amount(totals.get("subtotal"))
    if subtotal < 0:
        raise ValidationError("Subtotal cannot be negative")
    delivery_charge = _coerce_amount(totals.get("deliveryCharge"))
    if delivery_charge < 0:
        raise ValidationError("Delivery charge cannot be negative")

    return NormalizedOrder(
        customer=CustomerSpec(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            email=_text(customer.get("email")) or None,
        ),
        delivery=DeliverySpec(
            address=address,
            city=city,
            postal_code=_text(delivery.get("postalCode")) or None,
        ),
        payment=PaymentSpec(method=method, transaction_id=transaction_id or None),
        items=line_items,
        totals=TotalsSpec(
            subtotal=subtotal,
            delivery_charge=delivery_charge,
            total=_decimal(total),
        ),
        order_notes=_text(data.get("orderNotes")),
    )


@dataclass(frozen=True)
class PayloadInspection:
    """Structural report on an arbitrary payload, every gap listed."""

    data_structure: list[str]
    issues: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues


def inspect_order_payload(raw: Any) -> PayloadInspection:
    """Report every structural gap instead of stopping at the first.

    Used by the debug endpoint to help storefront developers see what a
    checkout page actually sent.
    """
    data = raw if isinstance(raw, dict) else {}
    issues: list[str] = []

    customer = data.get("customer")
    if not customer:
        issues.append("Missing customer object")
    elif isinstance(customer, dict):
        for key in ("firstName", "lastName", "phone"):
            if not customer.get(key):
                issues.append(f"Missing customer.{key}")

    delivery = data.get("delivery")
    if not delivery:
        issues.append("Missing delivery object")
    elif isinstance(delivery, dict):
        for key in ("address", "city"):
            if not delivery.get(key):
                issues.append(f"Missing delivery.{key}")

    payment = data.get("payment")
    if not payment:
        issues.append("Missing payment object")
    elif isinstance(payment, dict) and not payment.get("method"):
        issues.append("Missing payment.method")

    items = data.get("items")
    if not isinstance(items, list):
        issues.append("Missing or invalid items array")
    elif not items:
        issues.append("Items array is empty")

    totals = data.get("totals")
    if not totals:
        issues.append("Missing totals object")
    elif not isinstance(totals, dict) or not _is_number(totals.get("total")):
        issues.append("totals.total is not a number")

    return PayloadInspection(data_structure=list(data.keys()), issues=issues)


# --- Helpers -----------------------------------------------------------------


def _item(entry: Any) -> OrderItemSpec:
    if not isinstance(entry, dict):
        raise ValidationError("Each item must have productId, name, price, and quantity")

    product_id = _text(entry.get("productId"))
    name = _text(entry.get("name"))
    price = entry.get("price")
    quantity = entry.get("quantity")
    if not product_id or not name or price is None or quantity is None:
        raise ValidationError("Each item must have productId, name, price, and quantity")

    if not _is_number(price) or price <= 0:
        raise ValidationError("Item price must be a positive number")
    if not _is_number(quantity) or quantity <= 0 or quantity != int(quantity):
        raise ValidationError("Item quantity must be a positive whole number")

    return OrderItemSpec(
        product_id=product_id,
        name=name,
        price=_decimal(price),
        quantity=int(quantity),
        category=_text(entry.get("category")) or "other",
    )


def _text(value: Any) -> str:
    """Trimmed string form of a scalar; empty for missing values.

    Phone numbers and postal codes sometimes arrive as JSON numbers, so
    numbers are accepted and rendered without a trailing ``.0``.
    """
    if value is None or isinstance(value, (dict, list, bool)):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def _decimal(value: int | float) -> Decimal:
    return Decimal(str(value))


def _coerce_amount(value: Any) -> Decimal:
    """Numeric coercion for the optional totals: anything unusable is zero."""
    if _is_number(value):
        return _decimal(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return Decimal("0")
        if math.isfinite(number):
            return _decimal(number)
    return Decimal("0")

"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its customer, delivery, payment
and line-item records.  Its status is an enumerated value with an
unchecked setter: any of the six statuses may follow any other, the
storefront admins correct mistakes by setting the status they want.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from perfumery.domain.exceptions import FieldError, ValidationError
from perfumery.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @staticmethod
    def parse(value: str) -> OrderStatus:
        try:
            return OrderStatus(value)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"'{value}' is not a valid order status (expected one of: {allowed})"
            ) from None


class PaymentMethod(Enum):
    BKASH = "bkash"
    COD = "cod"

    @staticmethod
    def parse(value: str) -> PaymentMethod:
        try:
            return PaymentMethod(value)
        except ValueError:
            raise ValidationError("Payment method must be either bkash or cod") from None

    @property
    def label(self) -> str:
        return "bKash" if self is PaymentMethod.BKASH else "Cash on Delivery"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"

    @staticmethod
    def parse(value: str) -> PaymentStatus:
        try:
            return PaymentStatus(value)
        except ValueError:
            allowed = ", ".join(s.value for s in PaymentStatus)
            raise ValidationError(
                f"'{value}' is not a valid payment status (expected one of: {allowed})"
            ) from None


@dataclass
class Customer:
    first_name: str
    last_name: str
    phone: str
    email: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class Delivery:
    address: str
    city: str
    postal_code: str | None = None


@dataclass
class Payment:
    """Payment record.  bKash transactions are recorded, never verified."""

    method: PaymentMethod
    transaction_id: str | None = None
    status: PaymentStatus = PaymentStatus.PENDING


@dataclass
class OrderLineItem:
    """Captures the product's name and price at order time.

    The snapshot is independent of the live catalog: later price changes
    or deletions never touch a placed order.
    """

    product_id: str
    name: str
    unit_price: Money
    quantity: Quantity
    category: str = "other"

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderTotals:
    """Client-computed totals, stored as given."""

    subtotal: Money
    delivery_charge: Money
    total: Money


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str | None
    order_number: str | None
    customer: Customer
    delivery: Delivery
    payment: Payment
    items: list[OrderLineItem]
    totals: OrderTotals
    status: OrderStatus = OrderStatus.PENDING
    order_notes: str = ""
    admin_notes: str = ""
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer: Customer,
        delivery: Delivery,
        payment: Payment,
        items: list[OrderLineItem],
        totals: OrderTotals,
        order_notes: str = "",
        now: datetime | None = None,
    ) -> Order:
        """Create a new, unnumbered order, enforcing all invariants.

        The payload has normally been through the validation layer already;
        this check guards against callers that build orders directly.
        """
        problems = _check_invariants(customer, delivery, payment, items, totals)
        if problems:
            raise ValidationError("Order validation failed", details=problems)

        created = now or _utcnow()
        return Order(
            id=None,
            order_number=None,
            customer=customer,
            delivery=delivery,
            payment=Payment(
                method=payment.method,
                transaction_id=payment.transaction_id,
                status=PaymentStatus.PENDING,
            ),
            items=list(items),
            totals=totals,
            status=OrderStatus.PENDING,
            order_notes=order_notes,
            admin_notes="",
            created_at=created,
            updated_at=created,
        )

    # --- Identity -------------------------------------------------------------

    def assign_order_number(self, order_number: str) -> None:
        """Set the human-facing number.

        Allowed only before the first successful persistence; retries after
        a uniqueness conflict may call this again with a fresh number.
        """
        if self.id is not None:
            raise ValidationError(
                f"Order {self.order_number} is already persisted; "
                f"its order number cannot change"
            )
        self.order_number = order_number

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> OrderStatus:
        """Set the status without transition guards; returns the previous one."""
        previous = self.status
        self.status = new_status
        return previous

    def apply_update(
        self,
        status: str | None = None,
        admin_notes: str | None = None,
        payment_status: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Partial admin update.  ``None`` means "not supplied".

        All values are parsed before anything is mutated so an invalid
        payment status never leaves a half-applied status change behind.
        """
        new_status = OrderStatus.parse(status) if status is not None else None
        new_payment_status = (
            PaymentStatus.parse(payment_status) if payment_status is not None else None
        )

        if new_status is not None:
            self.change_status(new_status)
        if admin_notes is not None:
            self.admin_notes = admin_notes
        if new_payment_status is not None:
            self.payment.status = new_payment_status
        self.updated_at = now or _utcnow()

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        """Sum of line totals.  Informational; ``totals`` is what was charged."""
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result


def _check_invariants(
    customer: Customer,
    delivery: Delivery,
    payment: Payment,
    items: list[OrderLineItem],
    totals: OrderTotals,
) -> list[FieldError]:
    problems: list[FieldError] = []

    for attr, label in (
        ("first_name", "First name"),
        ("last_name", "Last name"),
        ("phone", "Phone number"),
    ):
        value = getattr(customer, attr)
        if not value or not value.strip():
            problems.append(FieldError(f"customer.{_camel(attr)}", f"{label} is required"))

    if not delivery.address or not delivery.address.strip():
        problems.append(FieldError("delivery.address", "Address is required"))
    if not delivery.city or not delivery.city.strip():
        problems.append(FieldError("delivery.city", "City is required"))

    if payment.method is PaymentMethod.BKASH and not payment.transaction_id:
        problems.append(
            FieldError("payment.transactionId", "Transaction ID is required for bKash payment")
        )

    if not items:
        problems.append(FieldError("items", "Order must contain at least one item"))
    for index, item in enumerate(items):
        if not item.product_id:
            problems.append(FieldError(f"items.{index}.productId", "Product ID is required"))
        if not item.name or not item.name.strip():
            problems.append(FieldError(f"items.{index}.name", "Product name is required"))
        if item.unit_price.is_zero:
            problems.append(FieldError(f"items.{index}.price", "Price must be greater than zero"))

    if totals.total.is_zero:
        problems.append(FieldError("totals.total", "Total must be greater than zero"))

    return problems


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)

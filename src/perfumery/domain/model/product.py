"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
they are added, revised wholesale from the admin form, and removed.
Orders keep their own name/price snapshot, so none of this touches
placed orders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from perfumery.domain.exceptions import ValidationError
from perfumery.domain.model.value_objects import Money


class ProductCategory(Enum):
    FLORAL = "floral"
    WOODY = "woody"
    ORIENTAL = "oriental"
    FRESH = "fresh"

    @staticmethod
    def parse(value: str) -> ProductCategory:
        try:
            return ProductCategory((value or "").strip().lower())
        except ValueError:
            allowed = ", ".join(c.value for c in ProductCategory)
            raise ValidationError(
                f"'{value}' is not a valid category (expected one of: {allowed})"
            ) from None


class ProductBadge(Enum):
    NONE = ""
    NEW = "New"
    BESTSELLER = "Bestseller"
    LIMITED = "Limited"
    POPULAR = "Popular"

    @staticmethod
    def parse(value: str | None) -> ProductBadge:
        text = (value or "").strip()
        if text.lower() == "none":
            return ProductBadge.NONE
        try:
            return ProductBadge(text)
        except ValueError:
            allowed = ", ".join(b.value or "none" for b in ProductBadge)
            raise ValidationError(
                f"'{value}' is not a valid badge (expected one of: {allowed})"
            ) from None


@dataclass
class Product:
    """A perfume in the catalog.

    ``in_stock`` is derived from ``quantity`` whenever the product is
    written through ``create()`` or ``revise()``.
    """

    id: str | None
    name: str
    description: str
    price: Money
    category: ProductCategory
    notes: list[str] = field(default_factory=list)
    image: str = ""
    badge: ProductBadge = ProductBadge.NONE
    quantity: int = 0
    in_stock: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        name: str,
        description: str,
        price: Money,
        category: ProductCategory,
        notes: list[str] | None = None,
        badge: ProductBadge = ProductBadge.NONE,
        quantity: int = 0,
        image: str = "",
        now: datetime | None = None,
    ) -> Product:
        name, description, notes = _check_fields(name, description, notes, quantity)
        created = now or datetime.now(timezone.utc)
        return Product(
            id=None,
            name=name,
            description=description,
            price=price,
            category=category,
            notes=notes,
            image=image,
            badge=badge,
            quantity=quantity,
            in_stock=quantity > 0,
            created_at=created,
            updated_at=created,
        )

    def revise(
        self,
        name: str,
        description: str,
        price: Money,
        category: ProductCategory,
        notes: list[str] | None = None,
        badge: ProductBadge = ProductBadge.NONE,
        quantity: int = 0,
        image: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Replace every mutable field.  The image stays unless a new one is given."""
        name, description, notes = _check_fields(name, description, notes, quantity)
        self.name = name
        self.description = description
        self.price = price
        self.category = category
        self.notes = notes
        self.badge = badge
        self.quantity = quantity
        self.in_stock = quantity > 0
        if image is not None:
            self.image = image
        self.updated_at = now or datetime.now(timezone.utc)


def _check_fields(
    name: str,
    description: str,
    notes: list[str] | None,
    quantity: int,
) -> tuple[str, str, list[str]]:
    if not name or not name.strip():
        raise ValidationError("Product name is required")
    if not description or not description.strip():
        raise ValidationError("Product description is required")
    if quantity < 0:
        raise ValidationError("Product quantity cannot be negative")
    cleaned = [note.strip() for note in notes or [] if note and note.strip()]
    return name.strip(), description, cleaned

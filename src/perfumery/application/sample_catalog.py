"""The storefront's six sample perfumes.

Used to reseed the catalog and as the read-only fallback dataset when
MongoDB cannot be reached.
"""

from __future__ import annotations

from datetime import datetime, timezone

from perfumery.domain.model.product import Product, ProductBadge, ProductCategory
from perfumery.domain.model.value_objects import Money

SAMPLE_PRODUCTS = (
    {
        "name": "Midnight Elegance",
        "description": "A sophisticated blend of sandalwood, vanilla, and amber that captivates "
        "the senses with its mysterious allure. Perfect for evening occasions.",
        "price": "125",
        "category": "oriental",
        "notes": ["Sandalwood", "Vanilla", "Amber"],
        "badge": "Bestseller",
        "quantity": 50,
    },
    {
        "name": "Garden Dreams",
        "description": "Fresh and vibrant notes of jasmine, bergamot, and white tea create a "
        "perfect daytime companion that energizes and uplifts.",
        "price": "98",
        "category": "floral",
        "notes": ["Jasmine", "Bergamot", "White Tea"],
        "badge": "New",
        "quantity": 30,
    },
    {
        "name": "Royal Essence",
        "description": "An opulent fragrance featuring rare oud, rose petals, and gold accents "
        "for the most discerning tastes. A true luxury experience.",
        "price": "250",
        "category": "oriental",
        "notes": ["Oud", "Rose", "Gold Accents"],
        "badge": "Limited",
        "quantity": 10,
    },
    {
        "name": "Ocean Breeze",
        "description": "Refreshing aquatic notes combined with sea salt and driftwood create an "
        "invigorating maritime escape.",
        "price": "89",
        "category": "fresh",
        "notes": ["Sea Salt", "Driftwood", "Aquatic"],
        "badge": "",
        "quantity": 40,
    },
    {
        "name": "Forest Walk",
        "description": "Earthy pine, cedar, and moss blend harmoniously to capture the essence "
        "of a peaceful woodland stroll.",
        "price": "115",
        "category": "woody",
        "notes": ["Pine", "Cedar", "Moss"],
        "badge": "",
        "quantity": 25,
    },
    {
        "name": "Summer Bloom",
        "description": "A delightful bouquet of peony, lily of the valley, and soft musk that "
        "embodies the beauty of spring gardens.",
        "price": "95",
        "category": "floral",
        "notes": ["Peony", "Lily of Valley", "Musk"],
        "badge": "Popular",
        "quantity": 35,
    },
)


def sample_products(with_ids: bool = False, now: datetime | None = None) -> list[Product]:
    """Fresh Product objects for the sample catalog.

    ``with_ids`` numbers them "1".."6" for the in-memory fallback; seeded
    products get their ids from the store instead.
    """
    created = now or datetime.now(timezone.utc)
    products = []
    for index, raw in enumerate(SAMPLE_PRODUCTS, start=1):
        product = Product.create(
            name=raw["name"],
            description=raw["description"],
            price=Money.of(raw["price"]),
            category=ProductCategory.parse(raw["category"]),
            notes=list(raw["notes"]),
            badge=ProductBadge.parse(raw["badge"]),
            quantity=raw["quantity"],
            now=created,
        )
        if with_ids:
            product.id = str(index)
        products.append(product)
    return products

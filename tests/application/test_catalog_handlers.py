"""Tests for the catalog use cases."""

from decimal import Decimal

import pytest

from perfumery.application.add_product import AddProductHandler
from perfumery.application.dto import ProductSpec
from perfumery.application.remove_product import RemoveProductHandler
from perfumery.application.seed_catalog import SeedCatalogHandler
from perfumery.application.show_products import ShowProductsHandler
from perfumery.application.update_product import UpdateProductHandler
from perfumery.domain.exceptions import EntityNotFoundError, ValidationError
from perfumery.domain.model.product import ProductBadge, ProductCategory
from perfumery.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository


def _spec(**overrides) -> ProductSpec:
    fields = dict(
        name="Amber Night",
        description="Warm amber and tonka",
        price="140",
        category="Oriental",
        notes="Amber, Tonka , ",
        badge="New",
        quantity="12",
    )
    fields.update(overrides)
    return ProductSpec.from_form(**fields)


def _seeded() -> FakeProductRepository:
    repo = FakeProductRepository()
    SeedCatalogHandler(repo).handle()
    return repo


class TestProductSpecFromForm:

    def test_coerces_form_fields(self):
        spec = _spec()
        assert spec.price == Decimal("140")
        assert spec.notes == ["Amber", "Tonka"]
        assert spec.quantity == 12

    def test_unparsable_quantity_is_zero(self):
        assert _spec(quantity="lots").quantity == 0
        assert _spec(quantity=None).quantity == 0

    @pytest.mark.parametrize("price", ["abc", None, "inf"])
    def test_bad_price(self, price):
        with pytest.raises(ValidationError, match="Invalid product price"):
            _spec(price=price)


class TestAddProduct:

    def test_adds_product(self):
        repo = FakeProductRepository()
        product = AddProductHandler(repo).handle(_spec(), image="/uploads/perfume-1-2.png")
        assert product.id is not None
        assert product.category is ProductCategory.ORIENTAL
        assert product.badge is ProductBadge.NEW
        assert product.in_stock is True
        assert product.image == "/uploads/perfume-1-2.png"
        assert repo.get_by_id(product.id) is product

    def test_zero_quantity_is_out_of_stock(self):
        product = AddProductHandler(FakeProductRepository()).handle(_spec(quantity="0"))
        assert product.in_stock is False
        assert product.image == ""

    def test_unknown_category(self):
        with pytest.raises(ValidationError, match="not a valid category"):
            AddProductHandler(FakeProductRepository()).handle(_spec(category="citrus"))

    def test_negative_price(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            AddProductHandler(FakeProductRepository()).handle(_spec(price="-1"))


class TestUpdateAndRemoveProduct:

    def test_update_keeps_image_when_none_uploaded(self):
        repo = FakeProductRepository()
        product = AddProductHandler(repo).handle(_spec(), image="/uploads/a.png")
        updated = UpdateProductHandler(repo).handle(product.id, _spec(price="150", quantity="0"))
        assert updated.price == Money.of("150")
        assert updated.in_stock is False
        assert updated.image == "/uploads/a.png"

    def test_update_unknown(self):
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            UpdateProductHandler(FakeProductRepository()).handle("nope", _spec())

    def test_remove(self):
        repo = FakeProductRepository()
        product = AddProductHandler(repo).handle(_spec())
        removed = RemoveProductHandler(repo).handle(product.id)
        assert removed.name == "Amber Night"
        assert repo.get_by_id(product.id) is None

    def test_remove_unknown(self):
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            RemoveProductHandler(FakeProductRepository()).handle("nope")


class TestShowProducts:

    def test_all(self):
        assert len(ShowProductsHandler(_seeded()).handle()) == 6

    def test_category_filter(self):
        products = ShowProductsHandler(_seeded()).handle(category="floral")
        assert {p.name for p in products} == {"Garden Dreams", "Summer Bloom"}

    def test_all_means_no_filter(self):
        assert len(ShowProductsHandler(_seeded()).handle(category="all")) == 6

    def test_unknown_category_matches_nothing(self):
        assert ShowProductsHandler(_seeded()).handle(category="citrus") == []

    def test_in_stock_only_filters_on_true(self):
        repo = _seeded()
        product = repo.list()[0]
        product.quantity, product.in_stock = 0, False
        handler = ShowProductsHandler(repo)
        assert len(handler.handle(in_stock="true")) == 5
        assert len(handler.handle(in_stock="false")) == 6
        assert len(handler.handle(in_stock=True)) == 5

    def test_show_one(self):
        repo = _seeded()
        product = repo.list()[0]
        assert ShowProductsHandler(repo).handle_one(product.id) is product
        with pytest.raises(EntityNotFoundError):
            ShowProductsHandler(repo).handle_one("missing")


class TestSeedCatalog:

    def test_replaces_catalog_and_summarizes(self):
        repo = FakeProductRepository()
        AddProductHandler(repo).handle(_spec())
        summary = SeedCatalogHandler(repo).handle()

        assert len(summary.products) == 6
        assert len(repo.list()) == 6
        assert all(p.id for p in summary.products)
        counts = {c.category: c.count for c in summary.categories}
        assert counts == {"floral": 2, "fresh": 1, "oriental": 2, "woody": 1}
        # 125*50 + 98*30 + 250*10 + 89*40 + 115*25 + 95*35
        assert summary.inventory_value == "৳21,450.00"

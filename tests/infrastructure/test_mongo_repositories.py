"""Tests for the MongoDB repositories against a minimal fake collection."""

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from perfumery.domain.exceptions import OrderNumberConflict, PersistenceError
from perfumery.domain.model.order import OrderStatus, PaymentStatus
from perfumery.infrastructure.persistence.mongo import object_id
from perfumery.infrastructure.persistence.mongo_order_repository import MongoOrderRepository
from tests.fakes import make_order


class FakeCollection:
    """Just enough of pymongo's Collection for single-document calls."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.docs: dict[ObjectId, dict] = {}
        self.indexes: list[tuple] = []
        self.fail_with = fail_with

    def create_index(self, key, unique=False):
        self.indexes.append((key, unique))

    def insert_one(self, doc):
        if self.fail_with is not None:
            raise self.fail_with
        if any(d["orderNumber"] == doc["orderNumber"] for d in self.docs.values()):
            raise DuplicateKeyError("E11000 duplicate key error")
        oid = ObjectId()
        self.docs[oid] = {**doc, "_id": oid}
        return type("InsertOneResult", (), {"inserted_id": oid})()

    def find_one(self, query):
        if self.fail_with is not None:
            raise self.fail_with
        for doc in self.docs.values():
            if all(_get(doc, k) == v for k, v in query.items()):
                return doc
        return None

    def update_one(self, query, update):
        doc = self.find_one(query)
        for key, value in update["$set"].items():
            target = doc
            *parents, leaf = key.split(".")
            for parent in parents:
                target = target[parent]
            target[leaf] = value


def _get(doc, dotted):
    value = doc
    for part in dotted.split("."):
        value = value[part]
    return value


class TestMongoOrderRepository:

    def test_add_assigns_id_and_ensures_unique_index(self):
        collection = FakeCollection()
        repo = MongoOrderRepository(collection)
        order = make_order()
        repo.add(order)

        assert ObjectId.is_valid(order.id)
        assert collection.indexes == [("orderNumber", True)]
        stored = collection.docs[ObjectId(order.id)]
        assert stored["orderNumber"] == "HM250115042"
        assert stored["customer"]["firstName"] == "Ayesha"
        assert stored["totals"] == {"subtotal": 250, "deliveryCharge": 60, "total": 310}
        assert "transactionId" not in stored["payment"]

    def test_index_is_created_once(self):
        collection = FakeCollection()
        repo = MongoOrderRepository(collection)
        repo.add(make_order(order_number="HM250115001"))
        repo.add(make_order(order_number="HM250115002"))
        assert len(collection.indexes) == 1

    def test_duplicate_number_is_a_conflict(self):
        repo = MongoOrderRepository(FakeCollection())
        repo.add(make_order(order_number="HM250115042"))
        with pytest.raises(OrderNumberConflict):
            repo.add(make_order(order_number="HM250115042"))

    def test_other_driver_errors_are_persistence_errors(self):
        repo = MongoOrderRepository(FakeCollection(fail_with=ServerSelectionTimeoutError("down")))
        with pytest.raises(PersistenceError) as exc_info:
            repo.add(make_order())
        assert not isinstance(exc_info.value, OrderNumberConflict)

    def test_round_trip(self):
        repo = MongoOrderRepository(FakeCollection())
        order = make_order()
        repo.add(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.order_number == order.order_number
        assert loaded.customer == order.customer
        assert loaded.items[0].unit_price == order.items[0].unit_price
        assert loaded.totals == order.totals
        assert repo.get_by_number("HM250115042").id == order.id

    def test_save_updates_lifecycle_fields(self):
        collection = FakeCollection()
        repo = MongoOrderRepository(collection)
        order = make_order()
        repo.add(order)

        order.apply_update(status="shipped", admin_notes="Courier", payment_status="paid")
        repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert loaded.status == OrderStatus.SHIPPED
        assert loaded.admin_notes == "Courier"
        assert loaded.payment.status == PaymentStatus.PAID

    def test_malformed_id_is_not_found(self):
        repo = MongoOrderRepository(FakeCollection())
        assert repo.get_by_id("not-an-object-id") is None


class TestObjectId:

    def test_parses_valid_ids(self):
        oid = ObjectId()
        assert object_id(str(oid)) == oid

    @pytest.mark.parametrize("raw", ["", "123", "zzzzzzzzzzzzzzzzzzzzzzzz"])
    def test_malformed_ids(self, raw):
        assert object_id(raw) is None

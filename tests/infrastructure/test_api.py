"""End-to-end tests for the HTTP API with in-memory fakes."""

import re
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from perfumery.application.notifications.dispatcher import NotificationDispatcher
from perfumery.application.notifications.templates import MessageComposer
from perfumery.infrastructure.bootstrap import Container
from perfumery.infrastructure.config import Settings
from perfumery.infrastructure.persistence.fallback_product_repository import (
    FallbackProductRepository,
)
from perfumery.infrastructure.uploads import ImageStore
from perfumery.infrastructure.web.app import create_app
from tests.fakes import (
    FailingEmailChannel,
    FakeOrderRepository,
    FakeProductRepository,
    RecordingEmailChannel,
    RecordingSmsChannel,
)


def _container(tmp_path, admin_token=None, email_channel=None, product_repo=None) -> Container:
    settings = Settings(
        _env_file=None,
        admin_token=admin_token,
        static_dir=str(tmp_path / "public"),
        upload_dir=str(tmp_path / "uploads"),
    )
    email = email_channel or RecordingEmailChannel()
    sms = RecordingSmsChannel()
    composer = MessageComposer()
    return Container(
        settings=settings,
        order_repo=FakeOrderRepository(),
        product_repo=product_repo or FakeProductRepository(),
        email_channel=email,
        sms_channel=sms,
        composer=composer,
        dispatcher=NotificationDispatcher(email, sms, composer=composer, timeout_seconds=2),
        image_store=ImageStore(tmp_path / "uploads"),
    )


class _CorruptProductRepository(FakeProductRepository):

    def list(self, category=None, in_stock_only=False):
        raise KeyError("category")


@pytest.fixture
def container(tmp_path):
    return _container(tmp_path)


@pytest.fixture
def client(container):
    return TestClient(create_app(container))


def _place(client, payload) -> dict:
    response = client.post("/api/orders", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateOrder:

    def test_valid_order(self, client, payload):
        body = _place(client, payload)

        assert body["success"] is True
        assert re.fullmatch(rf"HM{datetime.now():%y%m%d}\d{{3}}", body["orderNumber"])
        order = body["order"]
        assert order["orderNumber"] == body["orderNumber"]
        assert order["status"] == "pending"
        assert order["payment"] == {"method": "cod", "status": "pending"}
        assert order["totals"] == {"subtotal": 250, "deliveryCharge": 60, "total": 310}
        assert order["createdAt"].endswith("Z")
        assert body["notifications"] == {"email": {"success": True}, "sms": {"success": True}}

    def test_two_line_order(self, client, payload):
        payload["items"] = [
            {"productId": "1", "name": "Midnight Elegance", "price": 50, "quantity": 2},
            {"productId": "2", "name": "Garden Dreams", "price": 30, "quantity": 1},
        ]
        payload["totals"] = {"subtotal": 130, "deliveryCharge": 0, "total": 130}

        response = client.post("/api/orders", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert re.fullmatch(rf"HM{datetime.now():%y%m%d}\d{{3}}", body["orderNumber"])
        assert body["order"]["status"] == "pending"
        assert [(i["price"], i["quantity"]) for i in body["order"]["items"]] == [(50, 2), (30, 1)]
        assert body["order"]["totals"]["total"] == 130

    @pytest.mark.parametrize("field", ["price", "total"])
    def test_oversized_amount_is_rejected(self, client, container, payload, field):
        if field == "price":
            payload["items"][0]["price"] = 10**400
        else:
            payload["totals"]["total"] = 10**400
        response = client.post("/api/orders", json=payload)
        assert response.status_code == 400
        assert "error" in response.json()
        assert container.order_repo.attempted_numbers == []

    def test_bkash_without_transaction_id(self, client, container, payload):
        payload["payment"] = {"method": "bkash"}
        response = client.post("/api/orders", json=payload)
        assert response.status_code == 400
        assert "Transaction ID" in response.json()["error"]
        assert container.order_repo.attempted_numbers == []

    def test_notification_failure_keeps_201(self, tmp_path, payload):
        client = TestClient(create_app(_container(tmp_path, email_channel=FailingEmailChannel())))
        body = _place(client, payload)
        assert body["notifications"]["email"]["success"] is False
        assert body["notifications"]["sms"] == {"success": True}

    def test_missing_body(self, client):
        response = client.post("/api/orders")
        assert response.status_code == 400
        assert response.json() == {"error": "Missing customer information"}

    def test_malformed_json(self, client):
        response = client.post(
            "/api/orders", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert "error" in response.json()


class TestOrderLookup:

    def test_by_id_and_number(self, client, payload):
        order = _place(client, payload)["order"]
        assert client.get(f"/api/orders/{order['_id']}").json()["orderNumber"] == order["orderNumber"]
        assert client.get(f"/api/orders/number/{order['orderNumber']}").json()["_id"] == order["_id"]

    def test_not_found(self, client):
        response = client.get("/api/orders/missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    def test_list_orders(self, client, payload):
        for _ in range(5):
            _place(client, payload)
        body = client.get(
            "/api/orders", params={"status": "all", "page": 1, "limit": 2}
        ).json()
        assert body["totalOrders"] == 5
        assert body["totalPages"] == 3
        assert body["currentPage"] == 1
        assert len(body["orders"]) == 2

    def test_list_orders_status_filter(self, client, payload):
        _place(client, payload)
        assert client.get("/api/orders", params={"status": "shipped"}).json()["totalOrders"] == 0
        assert client.get("/api/orders", params={"status": "all"}).json()["totalOrders"] == 1


class TestUpdateOrder:

    def test_shipped_notifies_customer(self, client, container, payload):
        order = _place(client, payload)["order"]
        container.email_channel.sent.clear()
        container.sms_channel.sent.clear()

        response = client.put(f"/api/orders/{order['_id']}", json={"status": "shipped"})

        assert response.status_code == 200
        assert response.json()["status"] == "shipped"
        assert len(container.email_channel.sent) == 1
        assert "shipped" in container.sms_channel.sent[0].body

    def test_same_status_does_not_notify(self, client, container, payload):
        order = _place(client, payload)["order"]
        container.sms_channel.sent.clear()
        client.put(f"/api/orders/{order['_id']}", json={"status": "pending"})
        assert container.sms_channel.sent == []

    def test_admin_notes_and_payment_status(self, client, payload):
        order = _place(client, payload)["order"]
        body = client.put(
            f"/api/orders/{order['_id']}",
            json={"adminNotes": "Called", "paymentStatus": "paid", "status": ""},
        ).json()
        assert body["adminNotes"] == "Called"
        assert body["payment"]["status"] == "paid"
        assert body["status"] == "pending"

    def test_null_admin_notes_clear_the_notes(self, client, payload):
        order = _place(client, payload)["order"]
        client.put(f"/api/orders/{order['_id']}", json={"adminNotes": "Called"})
        body = client.put(f"/api/orders/{order['_id']}", json={"adminNotes": None}).json()
        assert body["adminNotes"] == ""

    def test_invalid_status(self, client, payload):
        order = _place(client, payload)["order"]
        response = client.put(f"/api/orders/{order['_id']}", json={"status": "lost"})
        assert response.status_code == 400

    def test_unknown_order(self, client):
        response = client.put("/api/orders/missing", json={"status": "shipped"})
        assert response.status_code == 404

    def test_send_confirmation(self, client, payload):
        order = _place(client, payload)["order"]
        body = client.post(f"/api/orders/{order['_id']}/send-confirmation").json()
        assert body == {
            "success": True,
            "message": "Confirmation sent!",
            "results": {"email": {"success": True}, "sms": {"success": True}},
        }


class TestAdminToken:

    @pytest.fixture
    def guarded(self, tmp_path):
        return TestClient(create_app(_container(tmp_path, admin_token="s3cret")))

    def test_missing_token(self, guarded):
        response = guarded.get("/api/orders")
        assert response.status_code == 403
        assert response.json() == {"error": "Access denied"}

    def test_wrong_token(self, guarded):
        response = guarded.get("/api/orders", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 403
        assert response.json() == {"error": "Invalid token"}

    @pytest.mark.parametrize("header", ["s3cret", "Bearer s3cret"])
    def test_accepted_forms(self, guarded, header):
        response = guarded.get("/api/orders", headers={"Authorization": header})
        assert response.status_code == 200

    def test_checkout_stays_public(self, guarded, payload):
        assert guarded.post("/api/orders", json=payload).status_code == 201

    def test_product_writes_are_guarded(self, guarded):
        assert guarded.delete("/api/products/1").status_code == 403
        assert guarded.get("/api/products").status_code == 200


class TestProducts:

    def _form(self, **overrides):
        data = {
            "name": "Amber Night",
            "description": "Warm amber",
            "price": "140",
            "category": "Oriental",
            "notes": "Amber, Tonka",
            "badge": "New",
            "quantity": "12",
        }
        data.update(overrides)
        return data

    def test_add_list_update_delete(self, client):
        created = client.post("/api/products", data=self._form())
        assert created.status_code == 201
        product = created.json()
        assert product["category"] == "oriental"
        assert product["notes"] == ["Amber", "Tonka"]
        assert product["inStock"] is True
        assert product["image"] == ""

        listed = client.get("/api/products").json()
        assert [p["_id"] for p in listed] == [product["_id"]]

        updated = client.put(f"/api/products/{product['_id']}", data=self._form(quantity="0"))
        assert updated.json()["inStock"] is False

        deleted = client.delete(f"/api/products/{product['_id']}")
        assert deleted.json() == {"message": "Product deleted successfully"}
        assert client.get(f"/api/products/{product['_id']}").status_code == 404

    def test_image_upload(self, client, container):
        response = client.post(
            "/api/products",
            data=self._form(),
            files={"image": ("bottle.jpg", b"\xff\xd8\xff", "image/jpeg")},
        )
        image = response.json()["image"]
        assert re.fullmatch(r"/uploads/perfume-\d+-\d+\.jpg", image)
        assert (container.image_store.upload_dir / image.rsplit("/", 1)[1]).exists()

    def test_non_image_upload_rejected(self, client):
        response = client.post(
            "/api/products",
            data=self._form(),
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Only image files are allowed!"}

    def test_invalid_price(self, client):
        response = client.post("/api/products", data=self._form(price="cheap"))
        assert response.status_code == 400

    def test_rejected_form_leaves_no_upload(self, client, container):
        response = client.post(
            "/api/products",
            data=self._form(category="citrus"),
            files={"image": ("bottle.jpg", b"\xff\xd8\xff", "image/jpeg")},
        )
        assert response.status_code == 400
        assert list(container.image_store.upload_dir.iterdir()) == []

    def test_update_of_unknown_product_leaves_no_upload(self, client, container):
        response = client.put(
            "/api/products/missing",
            data=self._form(),
            files={"image": ("bottle.jpg", b"\xff\xd8\xff", "image/jpeg")},
        )
        assert response.status_code == 404
        assert list(container.image_store.upload_dir.iterdir()) == []

    def test_filters(self, client):
        client.post("/api/products/bulk-insert")
        assert len(client.get("/api/products", params={"category": "woody"}).json()) == 1
        assert len(client.get("/api/products", params={"category": "all"}).json()) == 6
        assert len(client.get("/api/products", params={"inStock": "true"}).json()) == 6

    def test_bulk_insert(self, client):
        body = client.post("/api/products/bulk-insert").json()
        assert body["message"] == "6 sample products inserted successfully"
        assert len(body["products"]) == 6

    def test_fallback_catalog_is_read_only(self, tmp_path):
        client = TestClient(
            create_app(_container(tmp_path, product_repo=FallbackProductRepository()))
        )
        assert client.get("/api/products/1").json()["name"] == "Midnight Elegance"
        response = client.delete("/api/products/1")
        assert response.status_code == 500
        assert "read-only" in response.json()["error"]


class TestDiagnostics:

    def test_debug_order(self, client, payload):
        body = client.post("/api/debug-order", json=payload).json()
        assert body["received"] is True
        assert body["valid"] is True
        assert body["issues"] == []
        assert "customer" in body["dataStructure"]

    def test_debug_order_reports_issues(self, client):
        body = client.post("/api/debug-order", json={"items": []}).json()
        assert body["valid"] is False
        assert "Items array is empty" in body["issues"]

    def test_test_email(self, client, container):
        response = client.post("/api/test-email", json={"email": "ops@example.com"})
        assert response.json() == {"success": True, "message": "Test email sent successfully!"}
        assert container.email_channel.sent[0].to == "ops@example.com"

    def test_test_email_requires_address(self, client):
        response = client.post("/api/test-email", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Email is required"}

    def test_test_email_failure(self, tmp_path):
        client = TestClient(
            create_app(_container(tmp_path, email_channel=FailingEmailChannel("bad login")))
        )
        response = client.post("/api/test-email", json={"email": "ops@example.com"})
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send test email: bad login"}


class TestPagesAndFallthrough:

    def test_unknown_route(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}

    def test_unexpected_failure_is_json(self, tmp_path):
        client = TestClient(
            create_app(_container(tmp_path, product_repo=_CorruptProductRepository())),
            raise_server_exceptions=False,
        )
        response = client.get("/api/products")
        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "Internal server error"}

    def test_pages_served_from_static_dir(self, tmp_path):
        public = tmp_path / "public"
        public.mkdir()
        (public / "index.html").write_text("<h1>Herman Perfume</h1>")
        (public / "admin.html").write_text("<h1>Admin</h1>")
        client = TestClient(create_app(_container(tmp_path)))

        assert "Herman Perfume" in client.get("/").text
        assert "Admin" in client.get("/admin").text
        assert "Admin" in client.get("/admin.html").text
        assert client.get("/checkout").status_code == 404

    def test_uploads_are_served(self, client, container):
        (container.image_store.upload_dir / "perfume-1-1.png").write_bytes(b"png")
        assert client.get("/uploads/perfume-1-1.png").content == b"png"

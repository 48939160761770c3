"""Unit tests for checkout payload validation."""

from decimal import Decimal

import pytest

from perfumery.application.order_validation import inspect_order_payload, validate_order_payload
from perfumery.domain.exceptions import ValidationError


def _rejects(payload, message: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_order_payload(payload)
    assert str(exc_info.value) == message


class TestValidPayload:

    def test_normalizes_valid_payload(self, payload):
        order = validate_order_payload(payload)
        assert order.customer.first_name == "Ayesha"
        assert order.payment.method == "cod"
        assert order.items[0].price == Decimal("125")
        assert order.items[0].quantity == 2
        assert order.totals.total == Decimal("310")
        assert order.order_notes == "Please call before delivery"

    def test_trims_text_fields(self, payload):
        payload["customer"]["firstName"] = "  Ayesha  "
        payload["delivery"]["city"] = " Dhaka\n"
        order = validate_order_payload(payload)
        assert order.customer.first_name == "Ayesha"
        assert order.delivery.city == "Dhaka"

    def test_empty_optionals_are_omitted(self, payload):
        payload["customer"]["email"] = "   "
        payload["delivery"]["postalCode"] = ""
        order = validate_order_payload(payload)
        assert order.customer.email is None
        assert order.delivery.postal_code is None
        as_dict = order.to_dict()
        assert "email" not in as_dict["customer"]
        assert "postalCode" not in as_dict["delivery"]
        assert "transactionId" not in as_dict["payment"]

    def test_numeric_phone_is_accepted(self, payload):
        payload["customer"]["phone"] = 1711000000
        assert validate_order_payload(payload).customer.phone == "1711000000"

    def test_missing_category_defaults_to_other(self, payload):
        del payload["items"][0]["category"]
        assert validate_order_payload(payload).items[0].category == "other"

    def test_bkash_with_transaction_id(self, payload):
        payload["payment"] = {"method": "bkash", "transactionId": " 8N7A6B5C "}
        order = validate_order_payload(payload)
        assert order.payment.transaction_id == "8N7A6B5C"

    def test_missing_subtotal_and_delivery_charge_become_zero(self, payload):
        payload["totals"] = {"total": 310, "subtotal": "n/a"}
        order = validate_order_payload(payload)
        assert order.totals.subtotal == Decimal("0")
        assert order.totals.delivery_charge == Decimal("0")

    def test_totals_are_not_reconciled(self, payload):
        payload["totals"]["total"] = 1
        assert validate_order_payload(payload).totals.total == Decimal("1")


class TestSectionChecks:

    @pytest.mark.parametrize(
        "section, message",
        [
            ("customer", "Missing customer information"),
            ("delivery", "Missing delivery information"),
            ("payment", "Missing payment information"),
            ("items", "Order must contain at least one item"),
            ("totals", "Missing order totals"),
        ],
    )
    def test_missing_section(self, payload, section, message):
        del payload[section]
        _rejects(payload, message)

    def test_empty_items(self, payload):
        payload["items"] = []
        _rejects(payload, "Order must contain at least one item")

    def test_non_object_body(self):
        _rejects(["not", "an", "object"], "Missing customer information")

    def test_first_failure_wins(self, payload):
        del payload["delivery"]
        payload["customer"]["firstName"] = ""
        _rejects(payload, "Missing delivery information")


class TestFieldChecks:

    @pytest.mark.parametrize(
        "section, key, message",
        [
            ("customer", "firstName", "Customer first name is required"),
            ("customer", "lastName", "Customer last name is required"),
            ("customer", "phone", "Customer phone number is required"),
            ("delivery", "address", "Delivery address is required"),
            ("delivery", "city", "Delivery city is required"),
        ],
    )
    def test_whitespace_only_is_missing(self, payload, section, key, message):
        payload[section][key] = "   "
        _rejects(payload, message)

    def test_unknown_payment_method(self, payload):
        payload["payment"]["method"] = "card"
        _rejects(payload, "Valid payment method is required (bkash or cod)")

    def test_bkash_requires_transaction_id(self, payload):
        payload["payment"] = {"method": "bkash", "transactionId": "  "}
        _rejects(payload, "Transaction ID is required for bKash payment")


class TestItemChecks:

    @pytest.mark.parametrize("key", ["productId", "name", "price", "quantity"])
    def test_missing_item_field(self, payload, key):
        del payload["items"][0][key]
        _rejects(payload, "Each item must have productId, name, price, and quantity")

    @pytest.mark.parametrize("price", [0, -5, "125", True, 10**400])
    def test_bad_price(self, payload, price):
        payload["items"][0]["price"] = price
        _rejects(payload, "Item price must be a positive number")

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", 10**400])
    def test_bad_quantity(self, payload, quantity):
        payload["items"][0]["quantity"] = quantity
        _rejects(payload, "Item quantity must be a positive whole number")

    def test_integral_float_quantity_accepted(self, payload):
        payload["items"][0]["quantity"] = 2.0
        assert validate_order_payload(payload).items[0].quantity == 2


class TestTotalsChecks:

    @pytest.mark.parametrize("total", [0, -1, "310", None, 10**400])
    def test_bad_total(self, payload, total):
        payload["totals"]["total"] = total
        _rejects(payload, "Valid order total is required")

    def test_negative_subtotal(self, payload):
        payload["totals"]["subtotal"] = -10
        _rejects(payload, "Subtotal cannot be negative")

    def test_negative_delivery_charge(self, payload):
        payload["totals"]["deliveryCharge"] = -60
        _rejects(payload, "Delivery charge cannot be negative")


class TestInspectOrderPayload:

    def test_valid_payload_has_no_issues(self, payload):
        inspection = inspect_order_payload(payload)
        assert inspection.valid
        assert inspection.data_structure == list(payload.keys())

    def test_lists_every_issue(self):
        inspection = inspect_order_payload(
            {"customer": {"firstName": "A"}, "items": [], "totals": {"total": "310"}}
        )
        assert inspection.issues == [
            "Missing customer.lastName",
            "Missing customer.phone",
            "Missing delivery object",
            "Missing payment object",
            "Items array is empty",
            "totals.total is not a number",
        ]
        assert not inspection.valid

    def test_non_object_body(self):
        inspection = inspect_order_payload(None)
        assert inspection.data_structure == []
        assert "Missing customer object" in inspection.issues
        assert "Missing or invalid items array" in inspection.issues

    def test_oversized_total_is_not_a_number(self, payload):
        payload["totals"]["total"] = 10**400
        assert inspect_order_payload(payload).issues == ["totals.total is not a number"]

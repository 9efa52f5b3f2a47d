"""
Shipment Payload Unit Tests

Carrier request building and response parsing. No I/O.
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from microservices.fulfillment_service.models import OrderLineItem, PackageDetails, PaymentMethod, Weight, WeightUnit
from microservices.fulfillment_service.protocols import DispatchError
from microservices.fulfillment_service.shipment_dispatcher import (
    DEFAULT_CUSTOMER_EMAIL,
    build_shipment_payload,
    parse_shipment_response,
)

from tests.fixtures import make_carrier_shipment_response, make_line_item, make_order

pytestmark = pytest.mark.unit

PACKAGE = PackageDetails(weight_kg=1.5, length_cm=30, breadth_cm=20, height_cm=10)


class TestBuildShipmentPayload:

    def test_order_fields(self):
        order = make_order(
            items=[make_line_item("p1", quantity=2, price="499.5", name="Kurta", code="KUR-01")],
            total="1049.00",
        )

        payload = build_shipment_payload(order, PACKAGE, {"p1": "61091000"}, pickup_location="Warehouse-1")

        assert payload["order_id"] == "ORD-1001"
        assert payload["order_date"] == "2024-03-01T10:30:00+00:00"
        assert payload["pickup_location"] == "Warehouse-1"
        assert payload["order_items"] == [{
            "name": "Kurta",
            "sku": "KUR-01",
            "units": 2,
            "selling_price": "499.50",
            "discount": 0,
            "tax": 0,
            "hsn": "61091000",
        }]
        assert payload["sub_total"] == "1049.00"
        assert (payload["length"], payload["breadth"], payload["height"], payload["weight"]) == (30, 20, 10, 1.5)

    def test_billing_fields(self):
        order = make_order(state="KA", name="Asha Rao")

        payload = build_shipment_payload(order, PACKAGE, {}, pickup_location="Default")

        assert payload["billing_customer_name"] == "Asha Rao"
        assert payload["billing_last_name"] == "Rao"
        assert payload["billing_state"] == "Karnataka"
        assert payload["billing_city"] == "Bengaluru"
        assert payload["billing_pincode"] == "560001"
        assert payload["billing_address_2"] == "Near Metro"
        assert payload["billing_email"] == DEFAULT_CUSTOMER_EMAIL
        assert payload["shipping_is_billing"] is True

    def test_single_name_is_its_own_last_name(self):
        payload = build_shipment_payload(make_order(name="Madonna"), PACKAGE, {}, pickup_location="Default")

        assert payload["billing_last_name"] == "Madonna"

    def test_missing_hsn_sent_empty(self):
        order = make_order(items=[make_line_item("p1")])

        payload = build_shipment_payload(order, PACKAGE, {}, pickup_location="Default")

        assert payload["order_items"][0]["hsn"] == ""

    @pytest.mark.parametrize("method,expected", [
        (PaymentMethod.COD, "COD"),
        (PaymentMethod.UPI, "Prepaid"),
        (PaymentMethod.CARD, "Prepaid"),
        (None, "Prepaid"),
    ])
    def test_payment_method(self, method, expected):
        payload = build_shipment_payload(make_order(payment_method=method), PACKAGE, {}, pickup_location="Default")

        assert payload["payment_method"] == expected

    def test_customer_email_used(self):
        payload = build_shipment_payload(
            make_order(), PACKAGE, {}, pickup_location="Default", customer_email="asha@example.com",
        )

        assert payload["billing_email"] == "asha@example.com"


class TestParseShipmentResponse:

    def test_full_response(self):
        record = parse_shipment_response(make_carrier_shipment_response())

        assert record.shipment_id == "98765"
        assert record.carrier_order_id == "55501"
        assert record.awb_number == "AWB123456"
        assert record.courier_name == "Delhivery"
        assert record.courier_company_id == 14
        assert (record.status, record.status_code) == ("NEW", 1)

    def test_awb_assigned_later(self):
        record = parse_shipment_response(make_carrier_shipment_response(awb_code="", courier_name=""))

        assert record.awb_number is None
        assert record.courier_name is None

    def test_data_envelope(self):
        record = parse_shipment_response({"data": make_carrier_shipment_response(shipment_id="S-1")})

        assert record.shipment_id == "S-1"

    def test_missing_status_defaults(self):
        record = parse_shipment_response({"shipment_id": 1})

        assert (record.status, record.status_code) == ("UNKNOWN", 0)

    def test_missing_shipment_id(self):
        with pytest.raises(DispatchError) as exc_info:
            parse_shipment_response({"order_id": 1, "status": "NEW"})

        assert exc_info.value.response_data == {"order_id": 1, "status": "NEW"}


class TestFulfillmentModels:

    def test_item_total_derived(self):
        item = make_line_item(quantity=3, price="199.99")

        assert item.item_total == Decimal("599.97")

    def test_matching_item_total_accepted(self):
        item = OrderLineItem(
            product_id="p1", product_name="X", product_code="X",
            quantity=2, price_at_purchase=Decimal("50.00"), item_total=100,
        )

        assert item.item_total == Decimal("100.00")

    def test_mismatched_item_total_rejected(self):
        with pytest.raises(ValidationError, match="item_total"):
            OrderLineItem(
                product_id="p1", product_name="X", product_code="X",
                quantity=2, price_at_purchase=Decimal("50.00"), item_total=Decimal("120.00"),
            )

    def test_line_item_frozen(self):
        item = make_line_item()

        with pytest.raises(ValidationError):
            item.quantity = 5

    def test_line_item_needs_positive_quantity(self):
        with pytest.raises(ValidationError):
            OrderLineItem(product_id="p1", product_name="X", product_code="X", quantity=0, price_at_purchase=1)

    def test_weight_in_kilograms(self):
        assert Weight(number=750, unit=WeightUnit.G).kilograms == 0.75
        assert Weight(number=2).kilograms == 2

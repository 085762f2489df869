"""Tests for the v1 wire contracts, operation catalog and order adapters."""

import pytest
from pydantic import ValidationError

from contracts.v1 import (
    OPERATIONS,
    Carrier,
    CustomerAdapter,
    CustomerPayload,
    Product,
    RemoteOperation,
    RequestEnvelope,
    SalesOrderAdapter,
    UnknownOperationError,
    customer_name_for,
    operation_spec,
)
from core.domain import Address, LineItem, Order


class TestOperationCatalog:

    def test_every_operation_has_a_spec(self):
        assert set(OPERATIONS) == set(RemoteOperation)
        assert {op.value for op in RemoteOperation} == {
            "get_customer",
            "get_carrier_list",
            "get_location_group_list",
            "get_part",
            "get_product",
            "get_light_part_list",
            "get_inventory_quantity",
            "save_customer",
            "save_sales_order",
            "get_ship_list",
            "get_shipment",
        }

    def test_coerce_rejects_unknown_names(self):
        assert RemoteOperation.coerce("get_part") is RemoteOperation.GET_PART
        with pytest.raises(UnknownOperationError):
            RemoteOperation.coerce("drop_tables")

    def test_unknown_operation_is_a_value_error(self):
        with pytest.raises(ValueError):
            RequestEnvelope.build("nope")

    def test_envelope_rejects_unexpected_parameters(self):
        with pytest.raises(UnknownOperationError):
            RequestEnvelope.build("get_product", {"product_num": "X", "color": "red"})

    def test_envelope_drops_none_and_dumps_models(self):
        payload = CustomerPayload(name="Ada")

        envelope = RequestEnvelope.build(
            RemoteOperation.SAVE_CUSTOMER, {"customer": payload}, order_id=3
        )

        assert envelope.operation is RemoteOperation.SAVE_CUSTOMER
        assert envelope.params["customer"]["name"] == "Ada"
        assert envelope.order_id == 3

        envelope = RequestEnvelope.build("get_part", {"part_num": "P", "location_group": None})
        assert envelope.params == {"part_num": "P"}

    def test_parse_shapes(self):
        assert operation_spec("get_carrier_list").parse(None) == []
        assert operation_spec("get_product").parse(None) is None
        assert operation_spec("save_customer").parse({"anything": 1}) is None

        product = operation_spec("get_product").parse(
            {"num": "SKU", "part": {"num": "P-1"}, "unused": True}
        )
        assert isinstance(product, Product)
        assert product.part.num == "P-1"

    def test_carriers_accept_bare_strings(self):
        carriers = operation_spec("get_carrier_list").parse(["UPS", {"name": "USPS", "description": "Mail"}])

        assert carriers == [Carrier(name="UPS"), Carrier(name="USPS", description="Mail")]


class TestAdapters:

    def _order(self, **kwargs):
        defaults = dict(
            id=1,
            number="R100",
            email="buyer@example.com",
            bill_address=Address(firstname="Grace", lastname="Hopper", city="Arlington"),
            ship_address=Address(firstname="Grace", lastname="Hopper", address1="1 Navy Way"),
            line_items=[LineItem(sku="A", quantity=2, price=3.0, name="Alpha")],
        )
        defaults.update(kwargs)
        return Order(**defaults)

    def test_customer_name_prefers_company(self):
        order = self._order(bill_address=Address(firstname="Grace", lastname="Hopper", company="Navy"))

        assert customer_name_for(order) == "Navy"

    def test_customer_name_falls_back_to_full_name_then_email(self):
        assert customer_name_for(self._order()) == "Grace Hopper"
        assert customer_name_for(self._order(bill_address=None)) == "buyer@example.com"

    def test_customer_payload(self):
        payload = CustomerAdapter().adapt(self._order())

        assert payload.name == "Grace Hopper"
        assert payload.email == "buyer@example.com"
        assert [a.address_type for a in payload.addresses] == ["Main Office", "Ship To"]
        assert payload.addresses[0].default is True
        assert payload.addresses[1].street == "1 Navy Way"

    def test_customer_payload_requires_name(self):
        order = self._order(bill_address=None, email="")

        with pytest.raises(ValidationError):
            CustomerAdapter().adapt(order)

    def test_sales_order_payload(self):
        order = self._order(
            so_number="SO-7",
            shipping_method="FedEx",
            line_items=[
                LineItem(sku="A", quantity=2, price=3.0, name="Alpha"),
                LineItem(sku="", quantity=1),
                LineItem(sku="B", quantity=0),
            ],
        )

        payload = SalesOrderAdapter(location_group="Main").adapt(order)

        assert payload.number == "SO-7"
        assert payload.customer_name == "Grace Hopper"
        assert payload.customer_po == "R100"
        assert payload.carrier == "FedEx"
        assert payload.location_group == "Main"
        assert payload.bill_to.address_type == "Bill To"
        assert payload.ship_to.address_type == "Ship To"
        assert [(i.product_number, i.quantity) for i in payload.items] == [("A", 2)]

    def test_strict_payloads_reject_unknown_fields(self):
        with pytest.raises(ValidationError):
            CustomerPayload(name="x", nickname="y")

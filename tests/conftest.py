"""
Shared fixtures for inventory-bridge tests.
"""

import pytest

from core.domain import Address, LineItem, Order, Product, Variant
from inventory_bridge import SessionClient, SessionConfig
from tests.fakes import FakeConnection


@pytest.fixture
def session_config():
    return SessionConfig(
        host="inventory.local",
        port=28192,
        username="admin",
        password="secret",
        location_group="Main Warehouse",
        max_retries=2,
    )


@pytest.fixture
def fake_connection():
    return FakeConnection()


@pytest.fixture
def make_client(session_config):
    """Build a client wired to a given fake connection.

    Usage:
        client = make_client(FakeConnection({...}), max_retries=1)
    """
    def _make(connection=None, **overrides):
        connection = connection or FakeConnection()
        config = session_config.with_overrides(**overrides) if overrides else session_config
        factory_calls = []

        def _factory(cfg):
            factory_calls.append(cfg)
            return connection

        client = SessionClient(config, connection_factory=_factory)
        client.factory_calls = factory_calls
        return client
    return _make


@pytest.fixture
def sample_order():
    address = Address(
        firstname="Ada",
        lastname="Lovelace",
        address1="12 Analytical Way",
        city="London",
        state="LDN",
        zipcode="N1 9GU",
        country="GB",
        phone="+44 20 0000 0000",
    )
    return Order(
        id=42,
        number="R123456789",
        email="ada@example.com",
        bill_address=address,
        ship_address=address,
        line_items=[
            LineItem(sku="WIDGET-1", quantity=2, price=9.5, name="Widget"),
            LineItem(sku="GADGET-7", quantity=1, price=24.0, name="Gadget"),
        ],
        so_number="SO-1001",
        shipping_method="UPS Ground",
    )


@pytest.fixture
def variants():
    shirt = Product(name="Shirt", has_variants=True)
    mug = Product(name="Mug", has_variants=False)
    return [
        Variant(sku="SHIRT-MASTER", is_master=True, product=shirt),
        Variant(sku="SHIRT-S", product=shirt),
        Variant(sku="", product=shirt),
        Variant(sku="MUG", is_master=True, product=mug),
        Variant(sku=None, product=mug),
        Variant(sku="SHIRT-L", product=shirt),
    ]

"""Adapters from commerce orders to backend wire payloads."""

from __future__ import annotations

from core.domain import Address, Order, is_blank

from .schemas import (
    AddressContract,
    CustomerPayload,
    SalesOrderItemContract,
    SalesOrderPayload,
)


def customer_name_for(order: Order) -> str:
    """Resolve the backend customer name for an order.

    Company on the bill address wins, then the billing contact's full
    name, then the order email.
    """
    address = order.bill_address
    if address is not None:
        if not is_blank(address.company):
            return address.company.strip()
        if address.full_name:
            return address.full_name
    return (order.email or "").strip()


def address_to_contract(address: Address | None, address_type: str) -> AddressContract | None:
    if address is None:
        return None
    return AddressContract(
        name=address.full_name or address.company,
        street=address.street,
        city=address.city,
        state=address.state,
        zip=address.zipcode,
        country=address.country,
        address_type=address_type,
        default=address_type == "Main Office",
    )


class CustomerAdapter:
    """Builds the ``save_customer`` payload from an order."""

    def adapt(self, order: Order) -> CustomerPayload:
        addresses = [
            contract
            for contract in (
                address_to_contract(order.bill_address, "Main Office"),
                address_to_contract(order.ship_address, "Ship To"),
            )
            if contract is not None
        ]
        phone = order.bill_address.phone if order.bill_address else ""
        return CustomerPayload(
            name=customer_name_for(order),
            email=order.email,
            phone=phone,
            addresses=addresses,
        )


class SalesOrderAdapter:
    """Builds the ``save_sales_order`` payload from an order."""

    def __init__(self, location_group: str | None = None):
        self.location_group = location_group

    def adapt(self, order: Order) -> SalesOrderPayload:
        items = [
            SalesOrderItemContract(
                product_number=item.sku,
                quantity=item.quantity,
                unit_price=item.price,
                description=item.name,
            )
            for item in order.line_items
            if not is_blank(item.sku) and item.quantity > 0
        ]
        return SalesOrderPayload(
            number=order.so_number or "",
            customer_name=customer_name_for(order),
            customer_po=order.number,
            email=order.email,
            carrier=order.shipping_method,
            location_group=self.location_group,
            bill_to=address_to_contract(order.bill_address, "Bill To"),
            ship_to=address_to_contract(order.ship_address, "Ship To"),
            items=items,
        )

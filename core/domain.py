"""Commerce-side shapes consumed (never mutated) by the inventory bridge."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Address:
    firstname: str = ""
    lastname: str = ""
    company: str = ""
    address1: str = ""
    address2: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""
    country: str = ""
    phone: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.firstname.strip(), self.lastname.strip()) if p)

    @property
    def street(self) -> str:
        return "\n".join(p for p in (self.address1.strip(), self.address2.strip()) if p)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Address | None":
        if not data:
            return None
        return cls(
            firstname=data.get("firstname", "") or "",
            lastname=data.get("lastname", "") or "",
            company=data.get("company", "") or "",
            address1=data.get("address1", "") or "",
            address2=data.get("address2", "") or "",
            city=data.get("city", "") or "",
            state=data.get("state", "") or "",
            zipcode=data.get("zipcode", "") or "",
            country=data.get("country", "") or "",
            phone=data.get("phone", "") or "",
        )


@dataclass(slots=True)
class LineItem:
    sku: str
    quantity: int
    price: float = 0.0
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItem":
        return cls(
            sku=data.get("sku", "") or "",
            quantity=int(data.get("quantity", 1)),
            price=float(data.get("price", 0.0)),
            name=data.get("name", "") or "",
        )


@dataclass(slots=True)
class Order:
    """A placed commerce order.

    ``so_number`` is the backend sales-order number once the order has been
    pushed; shipment lookups are keyed on it.
    """

    id: Any
    number: str
    email: str = ""
    bill_address: Address | None = None
    ship_address: Address | None = None
    line_items: list[LineItem] = field(default_factory=list)
    so_number: str | None = None
    shipping_method: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        return cls(
            id=data.get("id"),
            number=data.get("number", "") or "",
            email=data.get("email", "") or "",
            bill_address=Address.from_dict(data.get("bill_address")),
            ship_address=Address.from_dict(data.get("ship_address")),
            line_items=[LineItem.from_dict(i) for i in data.get("line_items", [])],
            so_number=data.get("so_number"),
            shipping_method=data.get("shipping_method"),
        )


@dataclass(slots=True)
class Product:
    name: str = ""
    has_variants: bool = False


@dataclass(slots=True)
class Variant:
    sku: str | None
    is_master: bool = False
    product: Product = field(default_factory=Product)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Variant":
        product = data.get("product") or {}
        return cls(
            sku=data.get("sku"),
            is_master=bool(data.get("is_master", False)),
            product=Product(
                name=product.get("name", "") or "",
                has_variants=bool(product.get("has_variants", False)),
            ),
        )


def is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def is_inventory_eligible(variant: Variant) -> bool:
    """Return True when a variant's stock should be looked up.

    Variants without a SKU are skipped, and so are master variants of
    products that carry real variants (the stock lives on the children).
    """
    if is_blank(variant.sku):
        return False
    return not (variant.is_master and variant.product.has_variants)

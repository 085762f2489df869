"""Pydantic wire payloads exchanged with the inventory backend."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _StrictModel(BaseModel):
    """Base model for outbound payloads; rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class _ResponseModel(BaseModel):
    """Base model for backend responses; ignores fields we do not use."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# --- Outbound payloads ---


class AddressContract(_StrictModel):
    name: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""
    address_type: Literal["Main Office", "Bill To", "Ship To"] = "Main Office"
    default: bool = True


class CustomerPayload(_StrictModel):
    name: str = Field(min_length=1)
    status: str = "Normal"
    active: bool = True
    email: str = ""
    phone: str = ""
    addresses: list[AddressContract] = Field(default_factory=list)


class SalesOrderItemContract(_StrictModel):
    product_number: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    unit_price: float = 0.0
    description: str = ""
    item_type: Literal["Sale", "Shipping"] = "Sale"


class SalesOrderPayload(_StrictModel):
    number: str = ""
    customer_name: str = ""
    customer_po: str = ""
    email: str = ""
    carrier: str | None = None
    location_group: str | None = None
    bill_to: AddressContract | None = None
    ship_to: AddressContract | None = None
    items: list[SalesOrderItemContract] = Field(default_factory=list)


# --- Backend responses ---


class Customer(_ResponseModel):
    customer_id: int | None = None
    name: str
    number: str | None = None
    status: str | None = None
    active: bool = True


class _NamedEntry(_ResponseModel):
    """Entries the backend may send either as objects or bare names."""

    name: str

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data


class Carrier(_NamedEntry):
    description: str | None = None


class LocationGroup(_NamedEntry):
    id: int | None = None


class PartRef(_ResponseModel):
    num: str
    description: str = ""
    uom: str | None = None


class Part(_ResponseModel):
    num: str
    description: str = ""
    uom: str | None = None
    upc: str | None = None
    qty_on_hand: float | None = None
    location_group: str | None = None


class LightPart(_ResponseModel):
    num: str
    description: str = ""
    uom: str | None = None


class Product(_ResponseModel):
    num: str
    description: str = ""
    price: float | None = None
    part: PartRef | None = None


class InventoryQuantity(_ResponseModel):
    part_number: str
    location_group: str | None = None
    qty_on_hand: float = 0
    qty_allocated: float = 0
    qty_available: float = 0


class ShipResult(_ResponseModel):
    ship_id: int
    order_number: str
    status: str
    carrier: str | None = None
    date_shipped: str | None = None


class ShipmentItem(_ResponseModel):
    product_number: str
    quantity: float = 0


class Shipment(_ResponseModel):
    id: int
    number: str | None = None
    order_number: str | None = None
    status: str | None = None
    carrier: str | None = None
    tracking_numbers: list[str] = Field(default_factory=list)
    items: list[ShipmentItem] = Field(default_factory=list)


class SalesOrderReceipt(_ResponseModel):
    number: str
    status: str | None = None

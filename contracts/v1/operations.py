"""Catalog of the remote operations the inventory backend supports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel

from .schemas import (
    Carrier,
    Customer,
    InventoryQuantity,
    LightPart,
    LocationGroup,
    Part,
    Product,
    SalesOrderReceipt,
    ShipResult,
    Shipment,
)


class UnknownOperationError(ValueError):
    """Raised when a request names an unsupported operation or lacks parameters."""


class RemoteOperation(str, Enum):
    GET_CUSTOMER = "get_customer"
    GET_CARRIER_LIST = "get_carrier_list"
    GET_LOCATION_GROUP_LIST = "get_location_group_list"
    GET_PART = "get_part"
    GET_PRODUCT = "get_product"
    GET_LIGHT_PART_LIST = "get_light_part_list"
    GET_INVENTORY_QUANTITY = "get_inventory_quantity"
    SAVE_CUSTOMER = "save_customer"
    SAVE_SALES_ORDER = "save_sales_order"
    GET_SHIP_LIST = "get_ship_list"
    GET_SHIPMENT = "get_shipment"

    @classmethod
    def coerce(cls, value: "RemoteOperation | str") -> "RemoteOperation":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownOperationError(f"Unknown remote operation: {value!r}") from None


@dataclass(frozen=True)
class OperationSpec:
    """Fixed request/response shape of one remote operation."""

    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    shape: Literal["object", "list", "none"] = "object"
    model: type[BaseModel] | None = None

    def parse(self, raw: Any) -> Any:
        """Turn a raw JSON payload into typed response objects."""
        if self.shape == "none":
            return None
        if self.shape == "list":
            if raw is None:
                return []
            if self.model is None:
                return list(raw)
            return [self.model.model_validate(item) for item in raw]
        if raw is None:
            return None
        if self.model is None:
            return raw
        return self.model.model_validate(raw)


OPERATIONS: dict[RemoteOperation, OperationSpec] = {
    RemoteOperation.GET_CUSTOMER: OperationSpec(("name",), model=Customer),
    RemoteOperation.GET_CARRIER_LIST: OperationSpec(shape="list", model=Carrier),
    RemoteOperation.GET_LOCATION_GROUP_LIST: OperationSpec(shape="list", model=LocationGroup),
    RemoteOperation.GET_PART: OperationSpec(("part_num",), ("location_group",), model=Part),
    RemoteOperation.GET_PRODUCT: OperationSpec(("product_num",), model=Product),
    RemoteOperation.GET_LIGHT_PART_LIST: OperationSpec(shape="list", model=LightPart),
    RemoteOperation.GET_INVENTORY_QUANTITY: OperationSpec(
        ("part_number",), ("location_group",), model=InventoryQuantity
    ),
    RemoteOperation.SAVE_CUSTOMER: OperationSpec(("customer",), shape="none"),
    RemoteOperation.SAVE_SALES_ORDER: OperationSpec(
        ("sales_order",), ("issue",), model=SalesOrderReceipt
    ),
    RemoteOperation.GET_SHIP_LIST: OperationSpec(
        ("order_number",), ("record_count", "status"), shape="list", model=ShipResult
    ),
    RemoteOperation.GET_SHIPMENT: OperationSpec(("shipment_id",), model=Shipment),
}


def operation_spec(operation: RemoteOperation | str) -> OperationSpec:
    return OPERATIONS[RemoteOperation.coerce(operation)]


def _to_wire(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    return value


@dataclass(frozen=True)
class RequestEnvelope:
    """One validated request, ready to dispatch."""

    operation: RemoteOperation
    params: dict[str, Any] = field(default_factory=dict)
    order_id: Any = None

    @classmethod
    def build(
        cls,
        operation: RemoteOperation | str,
        params: dict[str, Any] | None = None,
        order_id: Any = None,
    ) -> "RequestEnvelope":
        op = RemoteOperation.coerce(operation)
        spec = OPERATIONS[op]
        params = dict(params or {})

        missing = [name for name in spec.required if params.get(name) is None]
        if missing:
            raise UnknownOperationError(
                f"{op.value} is missing required parameter(s): {', '.join(missing)}"
            )
        allowed = set(spec.required) | set(spec.optional)
        unexpected = sorted(set(params) - allowed)
        if unexpected:
            raise UnknownOperationError(
                f"{op.value} does not accept parameter(s): {', '.join(unexpected)}"
            )

        wire = {k: _to_wire(v) for k, v in params.items() if v is not None}
        return cls(operation=op, params=wire, order_id=order_id)

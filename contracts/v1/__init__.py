"""v1 wire contracts for the inventory backend."""

__version__ = "1.0.0"

from .adapters import CustomerAdapter, SalesOrderAdapter, customer_name_for
from .operations import (
    OPERATIONS,
    OperationSpec,
    RemoteOperation,
    RequestEnvelope,
    UnknownOperationError,
    operation_spec,
)
from .schemas import (
    AddressContract,
    Carrier,
    Customer,
    CustomerPayload,
    InventoryQuantity,
    LightPart,
    LocationGroup,
    Part,
    PartRef,
    Product,
    SalesOrderItemContract,
    SalesOrderPayload,
    SalesOrderReceipt,
    ShipResult,
    Shipment,
    ShipmentItem,
)

__all__ = [
    "__version__",
    "AddressContract",
    "Carrier",
    "Customer",
    "CustomerAdapter",
    "CustomerPayload",
    "InventoryQuantity",
    "LightPart",
    "LocationGroup",
    "OPERATIONS",
    "OperationSpec",
    "Part",
    "PartRef",
    "Product",
    "RemoteOperation",
    "RequestEnvelope",
    "SalesOrderAdapter",
    "SalesOrderItemContract",
    "SalesOrderPayload",
    "SalesOrderReceipt",
    "ShipResult",
    "Shipment",
    "ShipmentItem",
    "UnknownOperationError",
    "customer_name_for",
    "operation_spec",
]

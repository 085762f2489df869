"""
Session client for the inventory backend.

Owns one logical connection, authenticates it lazily, executes named remote
operations with reconnect-and-retry on server-class failures, and records
the last raw request/response and last error for diagnostics.

No backend, transport or configuration failure is raised out of the public
operations: they degrade to ``None`` (or ``[]`` / ``False``) and leave the
failure in :attr:`SessionClient.last_error`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Iterator, Mapping

from contracts.v1.adapters import CustomerAdapter, SalesOrderAdapter
from contracts.v1.operations import RemoteOperation, RequestEnvelope
from contracts.v1.schemas import (
    Carrier,
    Customer,
    LightPart,
    LocationGroup,
    Part,
    Product,
    SalesOrderReceipt,
    Shipment,
)
from core.domain import Order, Variant, is_blank, is_inventory_eligible
from core.ports import BackendConnection, CustomerAdapterPort, SalesOrderAdapterPort
from core.results import BackendError, DispatchResult, ErrorKind, ResultKind

from .config import SessionConfig, load_session_config
from .connection import HttpBackendConnection

logger = logging.getLogger(__name__)

SHIPPED_STATUS = "Shipped"
SHIP_LIST_RECORD_COUNT = 50


@dataclass
class Diagnostics:
    """Last exchange with the backend, overwritten on every execution."""

    last_request: str | None = None
    last_response: str | None = None
    last_error: BackendError | None = None
    last_order_id: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "last_request": self.last_request,
            "last_response": self.last_response,
            "last_error": self.last_error.to_dict() if self.last_error else None,
            "last_order_id": self.last_order_id,
        }


class SessionClient:
    """Single-session client for the inventory backend.

    Not thread-safe: callers sharing one instance across threads must
    serialize access themselves.

    With ``auto_close`` enabled (the default) the connection is closed after
    every request. When it is disabled the connection stays open for reuse
    and the caller MUST call :meth:`disconnect` (or use the client as a
    context manager).
    """

    def __init__(
        self,
        config: SessionConfig,
        *,
        connection_factory: Callable[[SessionConfig], BackendConnection] | None = None,
        customer_adapter: CustomerAdapterPort | None = None,
        sales_order_adapter: SalesOrderAdapterPort | None = None,
    ):
        self.config = config
        self._connection_factory = connection_factory or HttpBackendConnection.from_config
        self._customer_adapter = customer_adapter or CustomerAdapter()
        self._sales_order_adapter = sales_order_adapter or SalesOrderAdapter(config.location_group)
        self._connection: BackendConnection | None = None
        self._auto_close = config.auto_close
        self._max_retries = max(0, config.max_retries)
        self._diagnostics = Diagnostics()

    @classmethod
    def from_config(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        connection_factory: Callable[[SessionConfig], BackendConnection] | None = None,
        **overrides: Any,
    ) -> "SessionClient":
        """Build a client from the user config file and environment."""
        return cls(
            load_session_config(environ, **overrides),
            connection_factory=connection_factory,
        )

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def hostname(self) -> str:
        return self.config.host

    @property
    def port(self) -> int | None:
        return self.config.port

    @property
    def user(self) -> str:
        return self.config.username

    @property
    def location_group(self) -> str | None:
        return self.config.location_group

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def auto_close(self) -> bool:
        return self._auto_close

    def set_auto_close(self, auto_close: bool = True) -> None:
        """Toggle closing the connection after every request.

        You MUST call :meth:`disconnect` yourself once auto-close is off.
        """
        self._auto_close = auto_close

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def last_request(self) -> str | None:
        return self._diagnostics.last_request

    @property
    def last_response(self) -> str | None:
        return self._diagnostics.last_response

    @property
    def last_error(self) -> BackendError | None:
        return self._diagnostics.last_error

    @property
    def error(self) -> BackendError | None:
        return self._diagnostics.last_error

    def has_error(self) -> bool:
        return self._diagnostics.last_error is not None

    def diagnostics(self) -> Diagnostics:
        """Return a snapshot of the diagnostic state."""
        return replace(self._diagnostics)

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def is_configured(self) -> bool:
        return self.config.is_configured()

    def is_connected(self) -> bool:
        return self._connection is not None and self._connection.is_connected()

    def connect(self) -> bool:
        """Open and authenticate the session. Returns the connectivity state."""
        if not self.is_configured():
            return False

        try:
            if self._connection is None:
                connection = self._connection_factory(self.config)
                connection.open()
                connection.login(self.config.username, self.config.password)
                self._connection = connection
            elif not self._connection.is_connected():
                self._connection.open()
                self._connection.login(self.config.username, self.config.password)
        except Exception as e:
            logger.warning("Could not connect to inventory backend at %s: %s", self.config.host, e)

        return self.is_connected()

    def disconnect(self) -> bool:
        """Close the session if open. Always returns True."""
        if self.is_connected():
            self._close_quietly(self._connection)
        return True

    def reconnect(self) -> bool:
        self.disconnect()
        return self.connect()

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()

    # ------------------------------------------------------------------
    # Request execution
    # ------------------------------------------------------------------

    def execute(
        self,
        operation: RemoteOperation | str,
        params: dict[str, Any] | None = None,
        order_id: Any = None,
    ) -> Any:
        """Run one remote operation, retrying server-class failures.

        Returns the typed payload, or ``None`` when there is no data or the
        call failed; check :meth:`has_error` to tell those apart. Raises
        ``UnknownOperationError`` only for unsupported operations or missing
        parameters, before any network activity.
        """
        envelope = RequestEnvelope.build(operation, params, order_id)

        if not self.is_connected():
            self.connect()
        if not self.is_connected():
            return None
        connection = self._connection

        failures = 0
        self._diagnostics.last_order_id = order_id
        try:
            while True:
                self._diagnostics.last_error = None
                result = self._dispatch(connection, envelope)

                if result.kind is ResultKind.SERVER_ERROR:
                    failures += 1
                    logger.debug(
                        "%s failed (attempt %d of %d): %s",
                        envelope.operation.value, failures, self._max_retries + 1, result.error,
                    )
                    if failures <= self._max_retries and self._reconnect_for_retry(failures):
                        continue
                    self._record_error(result.error, envelope)
                    return None

                if result.kind is ResultKind.STATUS_ERROR:
                    self._record_error(result.error, envelope)
                    return None

                return result.payload
        finally:
            self._diagnostics.last_request = connection.last_request
            self._diagnostics.last_response = connection.last_response
            if self._auto_close:
                self._close_quietly(connection)

    def _dispatch(self, connection: BackendConnection, envelope: RequestEnvelope) -> DispatchResult:
        try:
            return connection.dispatch(envelope.operation.value, envelope.params)
        except Exception as e:
            logger.warning("Transport raised during %s: %s", envelope.operation.value, e)
            return DispatchResult.server_error(
                BackendError(ErrorKind.SERVER, str(e) or type(e).__name__)
            )

    def _reconnect_for_retry(self, attempt: int) -> bool:
        backoff = self.config.retry_backoff_seconds
        if backoff > 0:
            time.sleep(backoff * attempt)
        return self.reconnect()

    def _record_error(self, error: BackendError | None, envelope: RequestEnvelope) -> None:
        if error is None:
            error = BackendError(ErrorKind.SERVER, "Request failed")
        if error.operation is None:
            error.operation = envelope.operation.value
        if error.order_id is None:
            error.order_id = envelope.order_id
        self._diagnostics.last_error = error

        if envelope.order_id is not None:
            logger.warning(
                "%s failed for order %s: %s", envelope.operation.value, envelope.order_id, error
            )
        else:
            logger.warning("%s failed: %s", envelope.operation.value, error)

    @staticmethod
    def _close_quietly(connection: BackendConnection | None) -> None:
        if connection is None:
            return
        try:
            connection.close()
        except Exception as e:
            logger.debug("Error while closing backend connection: %s", e)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def customer(self, name: str | None) -> Customer | None:
        if is_blank(name):
            return None
        return self.execute(RemoteOperation.GET_CUSTOMER, {"name": name})

    def carriers(self) -> list[Carrier]:
        return self.execute(RemoteOperation.GET_CARRIER_LIST) or []

    def location_groups(self) -> list[LocationGroup]:
        return self.execute(RemoteOperation.GET_LOCATION_GROUP_LIST) or []

    def part(self, sku: str | None, location_group: str | None = None) -> Part | None:
        if is_blank(sku):
            return None
        return self.execute(
            RemoteOperation.GET_PART,
            {"part_num": sku, "location_group": location_group or self.location_group},
        )

    def product(self, sku: str | None) -> Product | None:
        if is_blank(sku):
            return None
        return self.execute(RemoteOperation.GET_PRODUCT, {"product_num": sku})

    def parts(self) -> list[LightPart]:
        return self.execute(RemoteOperation.GET_LIGHT_PART_LIST) or []

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------

    def available_inventory(self, variant: Variant, location_group: str | None = None) -> float | None:
        """Return the available quantity for a variant, or None if unknown."""
        if is_blank(variant.sku):
            return None

        product = self.product(variant.sku)
        if product is None or product.part is None:
            return None

        counts = self.execute(
            RemoteOperation.GET_INVENTORY_QUANTITY,
            {
                "part_number": product.part.num,
                "location_group": location_group or self.location_group,
            },
        )
        return counts.qty_available if counts is not None else None

    def all_available_inventory(
        self, variants: Iterable[Variant]
    ) -> Iterator[tuple[Variant, float | None]]:
        """Lazily yield ``(variant, available_qty)`` for every eligible variant.

        Lookups run one after another; there is no batching.
        """
        for variant in variants:
            if not is_inventory_eligible(variant):
                continue
            yield variant, self.available_inventory(variant)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def create_customer(self, order: Order) -> None:
        """Create or update the backend customer for an order.

        Returns nothing on success either, so check :meth:`has_error`.
        """
        customer = self._adapt(self._customer_adapter, order)
        if customer is None:
            return None
        return self.execute(RemoteOperation.SAVE_CUSTOMER, {"customer": customer}, order.id)

    def create_sales_order(self, order: Order, issue: bool = True) -> SalesOrderReceipt | None:
        """Push an order as a sales order, creating its customer first if needed."""
        sales_order = self._adapt(self._sales_order_adapter, order)
        if sales_order is None:
            return None

        if not is_blank(sales_order.customer_name):
            if self.customer(sales_order.customer_name) is None:
                self.create_customer(order)
                # save_customer returns no payload; only the error state tells.
                if self.has_error():
                    return None

        return self.execute(
            RemoteOperation.SAVE_SALES_ORDER,
            {"issue": issue, "sales_order": sales_order},
            order.id,
        )

    def order_shipments(self, order: Order) -> list[Shipment | None] | None:
        """Fetch full shipment details for the shipped shipments of an order."""
        if is_blank(order.so_number):
            logger.debug("Order %s has no sales-order number; no shipments to fetch", order.id)
            return []

        ship_results = self.execute(
            RemoteOperation.GET_SHIP_LIST,
            {"order_number": order.so_number, "record_count": SHIP_LIST_RECORD_COUNT},
        )
        if ship_results is None:
            return None

        return [
            self.execute(RemoteOperation.GET_SHIPMENT, {"shipment_id": r.ship_id}, order.id)
            for r in ship_results
            if r.order_number == order.so_number and r.status == SHIPPED_STATUS
        ]

    def _adapt(self, adapter: Any, order: Order) -> Any:
        try:
            return adapter.adapt(order)
        except ValueError as e:
            error = BackendError(
                ErrorKind.STATUS,
                f"Could not build payload for order {order.id}: {e}",
                order_id=order.id,
            )
            self._diagnostics.last_error = error
            logger.warning("%s", error)
            return None

"""Ports the session client depends on."""

from __future__ import annotations

from typing import Any, Protocol

from .domain import Order
from .results import DispatchResult


class BackendConnection(Protocol):
    """One live network session to the inventory backend."""

    last_request: str | None
    last_response: str | None

    def open(self) -> Any:
        ...

    def login(self, username: str, password: str) -> Any:
        ...

    def close(self) -> None:
        ...

    def is_connected(self) -> bool:
        ...

    def dispatch(self, operation: str, params: dict[str, Any]) -> DispatchResult:
        ...


class CustomerAdapterPort(Protocol):
    """Builds the wire-level customer payload for an order."""

    def adapt(self, order: Order) -> Any:
        ...


class SalesOrderAdapterPort(Protocol):
    """Builds the wire-level sales-order payload for an order.

    The returned payload exposes ``customer_name``, used for the
    lookup-or-create customer flow.
    """

    def adapt(self, order: Order) -> Any:
        ...


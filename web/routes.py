"""
REST API routes for the inventory bridge support service.
"""

import logging
import threading
from typing import Any, Callable, Iterator, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query

from core.domain import Variant
from inventory_bridge import SessionClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

T = TypeVar("T")

# One shared client; the lock serializes access since the client is not thread-safe.
_client: SessionClient | None = None
_client_lock = threading.Lock()


def get_session_client() -> Iterator[SessionClient]:
    """Yield the shared session client while holding its lock."""
    global _client
    with _client_lock:
        if _client is None:
            _client = SessionClient.from_config()
        yield _client


def reset_session_client(client: SessionClient | None = None) -> None:
    """Replace (or drop) the shared client, disconnecting the old one."""
    global _client
    with _client_lock:
        if _client is not None and _client is not client:
            _client.disconnect()
        _client = client


def _call(client: SessionClient, fn: Callable[[], T], what: str) -> T:
    if not client.is_configured():
        raise HTTPException(status_code=503, detail="Inventory backend is not configured")
    if not client.is_connected() and not client.connect():
        logger.warning(f"{what} failed: could not reach the inventory backend")
        raise HTTPException(status_code=502, detail="could not reach the inventory backend")
    result = fn()
    if client.has_error():
        logger.warning(f"{what} failed: {client.last_error}")
        raise HTTPException(status_code=502, detail=str(client.last_error))
    return result


@router.get("/status")
def get_status(client: SessionClient = Depends(get_session_client)) -> dict[str, Any]:
    return {
        "configured": client.is_configured(),
        "connected": client.is_connected(),
        "host": client.hostname,
        "port": client.port,
        "location_group": client.location_group,
        "auto_close": client.auto_close,
        "max_retries": client.max_retries,
    }


@router.get("/carriers")
def get_carriers(client: SessionClient = Depends(get_session_client)) -> list[dict]:
    carriers = _call(client, client.carriers, "get_carrier_list")
    return [c.model_dump() for c in carriers]


@router.get("/location-groups")
def get_location_groups(client: SessionClient = Depends(get_session_client)) -> list[dict]:
    groups = _call(client, client.location_groups, "get_location_group_list")
    return [g.model_dump() for g in groups]


@router.get("/parts/{sku}")
def get_part(
    sku: str,
    location_group: str | None = Query(default=None),
    client: SessionClient = Depends(get_session_client),
) -> dict:
    part = _call(client, lambda: client.part(sku, location_group), "get_part")
    if part is None:
        raise HTTPException(status_code=404, detail=f"No part found for SKU {sku}")
    return part.model_dump()


@router.get("/inventory/{sku}")
def get_inventory(
    sku: str,
    location_group: str | None = Query(default=None),
    client: SessionClient = Depends(get_session_client),
) -> dict:
    qty = _call(
        client,
        lambda: client.available_inventory(Variant(sku=sku), location_group),
        "inventory lookup",
    )
    if qty is None:
        raise HTTPException(status_code=404, detail=f"No inventory found for SKU {sku}")
    return {
        "sku": sku,
        "location_group": location_group or client.location_group,
        "qty_available": qty,
    }


@router.get("/diagnostics")
def get_diagnostics(client: SessionClient = Depends(get_session_client)) -> dict[str, Any]:
    return client.diagnostics().to_dict()

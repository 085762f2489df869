"""
CLI subcommand implementations for the inventory bridge.

Subcommands::

    inventory-bridge status
    inventory-bridge carriers
    inventory-bridge location-groups
    inventory-bridge part SKU [--location-group G]
    inventory-bridge inventory SKU [--location-group G]
    inventory-bridge push-order ORDER.json [--no-issue]
    inventory-bridge shipments SO_NUMBER
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from core.domain import Order, Variant
from inventory_bridge import SessionClient


def _fail(client: SessionClient, what: str) -> int:
    if client.has_error():
        print(f"Error: {what} failed: {client.last_error}")
    else:
        print(f"Error: {what} failed: could not reach the inventory backend.")
    return 1


def _check_backend(client: SessionClient, what: str) -> int | None:
    """Connect ahead of the first call; return an exit code if that fails."""
    if not client.is_configured():
        print("Error: inventory backend is not configured (set INVENTORY_BRIDGE_HOST/USER/PASSWORD).")
        return 1
    if not client.is_connected() and not client.connect():
        print(f"Error: {what} failed: could not reach the inventory backend.")
        return 1
    return None


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def cmd_status(client: SessionClient, args) -> int:
    """Print configuration and try a connection."""
    print(f"Host:           {client.hostname or '(not set)'}")
    print(f"Port:           {client.port or '(default)'}")
    print(f"User:           {client.user or '(not set)'}")
    print(f"Location group: {client.location_group or '(not set)'}")
    print(f"Configured:     {'yes' if client.is_configured() else 'no'}")
    if not client.is_configured():
        return 1

    connected = client.connect()
    print(f"Connected:      {'yes' if connected else 'no'}")
    client.disconnect()
    return 0 if connected else 1


def cmd_carriers(client: SessionClient, args) -> int:
    code = _check_backend(client, "get_carrier_list")
    if code is not None:
        return code
    carriers = client.carriers()
    if client.has_error():
        return _fail(client, "get_carrier_list")
    for carrier in carriers:
        print(carrier.name)
    return 0


def cmd_location_groups(client: SessionClient, args) -> int:
    code = _check_backend(client, "get_location_group_list")
    if code is not None:
        return code
    groups = client.location_groups()
    if client.has_error():
        return _fail(client, "get_location_group_list")
    for group in groups:
        print(group.name)
    return 0


def cmd_part(client: SessionClient, args) -> int:
    code = _check_backend(client, "get_part")
    if code is not None:
        return code
    part = client.part(args.sku, args.location_group)
    if part is None:
        if client.has_error():
            return _fail(client, "get_part")
        print(f"No part found for SKU {args.sku}")
        return 1
    print(f"{part.num}  {part.description}")
    if part.qty_on_hand is not None:
        print(f"  On hand: {part.qty_on_hand:g} {part.uom or ''}".rstrip())
    return 0


def cmd_inventory(client: SessionClient, args) -> int:
    code = _check_backend(client, "inventory lookup")
    if code is not None:
        return code
    qty = client.available_inventory(Variant(sku=args.sku), args.location_group)
    if qty is None:
        if client.has_error():
            return _fail(client, "inventory lookup")
        print(f"No inventory found for SKU {args.sku}")
        return 1
    print(f"{args.sku}: {qty:g} available")
    return 0


def cmd_push_order(client: SessionClient, args) -> int:
    """Push an order (read from a JSON file) as a sales order."""
    path = Path(args.order_file)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: could not read order file {path}: {e}")
        return 1

    code = _check_backend(client, "save_sales_order")
    if code is not None:
        return code
    order = Order.from_dict(data)
    receipt = client.create_sales_order(order, issue=not args.no_issue)
    if receipt is None:
        return _fail(client, "save_sales_order")
    print(f"✓ Order {order.number} pushed as sales order {receipt.number}")
    return 0


def cmd_shipments(client: SessionClient, args) -> int:
    code = _check_backend(client, "get_ship_list")
    if code is not None:
        return code
    order = Order(id=None, number=args.so_number, so_number=args.so_number)
    shipments = client.order_shipments(order)
    if shipments is None:
        return _fail(client, "get_ship_list")
    if not shipments:
        print(f"No shipped shipments for {args.so_number}")
        return 0
    for shipment in shipments:
        if shipment is None:
            print("  (shipment details unavailable)")
            continue
        tracking = ", ".join(shipment.tracking_numbers) or "no tracking"
        print(f"  #{shipment.id} via {shipment.carrier or 'unknown carrier'} — {tracking}")
    return 0


COMMANDS = {
    "status": cmd_status,
    "carriers": cmd_carriers,
    "location-groups": cmd_location_groups,
    "part": cmd_part,
    "inventory": cmd_inventory,
    "push-order": cmd_push_order,
    "shipments": cmd_shipments,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="inventory-bridge",
        description="Talk to the inventory backend on behalf of the store",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show configuration and test the connection")
    subparsers.add_parser("carriers", help="List carriers")
    subparsers.add_parser("location-groups", help="List location groups")

    p_part = subparsers.add_parser("part", help="Look up a part by SKU")
    p_part.add_argument("sku")
    p_part.add_argument("--location-group", help="Location group (default: from config)")

    p_inventory = subparsers.add_parser("inventory", help="Show available inventory for a SKU")
    p_inventory.add_argument("sku")
    p_inventory.add_argument("--location-group", help="Location group (default: from config)")

    p_push = subparsers.add_parser("push-order", help="Push an order JSON file as a sales order")
    p_push.add_argument("order_file", help="Path to the order JSON file")
    p_push.add_argument("--no-issue", action="store_true", help="Save without issuing the sales order")

    p_ship = subparsers.add_parser("shipments", help="Show shipped shipments for a sales order")
    p_ship.add_argument("so_number", help="Sales-order number")

    return parser


def main(argv=None, client: SessionClient | None = None) -> int:
    """Entry point for the CLI."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    client = client or SessionClient.from_config()
    with client:
        return COMMANDS[args.command](client, args)


def run() -> None:
    sys.exit(main())

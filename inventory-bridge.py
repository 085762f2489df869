#!/usr/bin/env python3
"""
inventory-bridge — command line

Looks up parts, inventory and shipments in the inventory backend and pushes
store orders to it as sales orders.

Usage:
    python inventory-bridge.py status
    python inventory-bridge.py inventory SKU-123
    python inventory-bridge.py push-order path/to/order.json

Connection settings come from INVENTORY_BRIDGE_* environment variables (or
a .env file) and the user config file.

This file is a thin wrapper around the package.
For the modular implementation, see the inventory_bridge/, cli/, and web/ directories.
"""

from cli.commands import run

if __name__ == "__main__":
    run()

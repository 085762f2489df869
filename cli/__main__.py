"""
Entry point for running the inventory bridge CLI as a module.

Usage:
    python -m cli status
    python -m cli inventory SKU-123
    python -m cli push-order path/to/order.json
"""

from .commands import run

if __name__ == "__main__":
    run()

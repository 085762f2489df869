#!/usr/bin/env python3
"""
inventory-bridge — support service

Starts a small HTTP service exposing inventory lookups and the client's
last request/response/error for support tooling.

Usage:
    python inventory-bridge-web.py [--port 8000] [--host 127.0.0.1]
"""

from web.__main__ import run

if __name__ == "__main__":
    run()

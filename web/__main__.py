"""
Entry point for running the support service as a module.

Usage:
    python -m web [--port 8000] [--host 127.0.0.1] [--reload] [--check]

The session configuration is loaded and validated before serving, so a
missing host or credentials is reported at startup instead of as a 503 on
the first request. ``--check`` validates and exits without serving.
"""

import argparse
import logging
import sys

import uvicorn
from dotenv import load_dotenv

from inventory_bridge import SessionConfig, load_session_config

logger = logging.getLogger(__name__)


def config_warnings(config: SessionConfig) -> list[str]:
    """List what keeps *config* from reaching the backend (empty when usable)."""
    if not config.enabled:
        return ["the bridge is disabled (INVENTORY_BRIDGE_ENABLED)"]
    missing = [
        env
        for env, value in (
            ("INVENTORY_BRIDGE_HOST", config.host),
            ("INVENTORY_BRIDGE_USER", config.username),
            ("INVENTORY_BRIDGE_PASSWORD", config.password),
        )
        if not value.strip()
    ]
    return [f"{env} is not set" for env in missing]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="inventory-bridge support service")
    parser.add_argument(
        "--port", type=int, default=8000,
        help="Port to serve on (default: 8000)"
    )
    parser.add_argument(
        "--host", type=str, default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--reload", action="store_true",
        help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--check", action="store_true",
        help="Validate the backend configuration and exit"
    )
    return parser


def main(argv=None, environ=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    config = load_session_config(environ)
    warnings = config_warnings(config)
    for warning in warnings:
        logger.warning("Backend not configured: %s", warning)

    if args.check:
        if warnings:
            return 1
        print(f"Backend configured: {config.username}@{config.host}:{config.port or 'default'}")
        return 0

    print("\n  inventory-bridge support service")
    print(f"  Backend:   {config.host or '(not configured)'}")
    print(f"  Listening on http://{args.host}:{args.port}\n")

    uvicorn.run(
        "web.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

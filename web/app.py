"""
FastAPI application setup for the inventory bridge support service.
"""

from dotenv import load_dotenv
from fastapi import FastAPI

from . import __version__ as WEB_VERSION
from .routes import router

# Load .env file (if present) so INVENTORY_BRIDGE_* settings are available
load_dotenv()

app = FastAPI(
    title="inventory-bridge",
    description="Inventory backend lookups and diagnostics for support tooling",
    version=WEB_VERSION,
)

app.include_router(router)


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness check endpoint."""
    return {"status": "ok"}

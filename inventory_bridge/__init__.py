"""Session client bridging a commerce platform to an inventory backend."""

__version__ = "1.0.0"

from .config import SessionConfig, load_session_config
from .connection import HttpBackendConnection
from .session_client import Diagnostics, SessionClient

__all__ = [
    "Diagnostics",
    "HttpBackendConnection",
    "SessionClient",
    "SessionConfig",
    "load_session_config",
]

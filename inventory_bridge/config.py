"""
Session configuration for the inventory bridge.

Values come from, in increasing priority: the user config file, the
``INVENTORY_BRIDGE_*`` environment variables, and explicit overrides.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "INVENTORY_BRIDGE_"
CONFIG_PATH_ENV = f"{ENV_PREFIX}CONFIG_PATH"

DEFAULT_MAX_RETRIES = 2
DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SessionConfig:
    host: str = ""
    port: int | None = None
    username: str = ""
    password: str = field(default="", repr=False)
    location_group: str | None = None
    max_retries: int = DEFAULT_MAX_RETRIES
    auto_close: bool = True
    enabled: bool = True
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry_backoff_seconds: float = 0.0

    def is_configured(self) -> bool:
        """True when the bridge is enabled and has host and credentials."""
        return bool(
            self.enabled
            and self.host.strip()
            and self.username.strip()
            and self.password.strip()
        )

    def with_overrides(self, **overrides: Any) -> "SessionConfig":
        return replace(self, **overrides)


def _parse_bool(raw: str) -> bool | None:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def _parse_positive_int(raw: str) -> int | None:
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value > 0 else None


def _parse_non_negative_int(raw: str) -> int | None:
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value >= 0 else None


def _parse_non_negative_float(raw: str) -> float | None:
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if value >= 0 else None


def _parse_str(raw: str) -> str | None:
    value = raw.strip()
    return value or None


# Environment suffix -> (field name, parser)
_ENV_FIELDS = {
    "HOST": ("host", _parse_str),
    "PORT": ("port", _parse_positive_int),
    "USER": ("username", _parse_str),
    "PASSWORD": ("password", lambda raw: raw or None),
    "LOCATION_GROUP": ("location_group", _parse_str),
    "MAX_RETRIES": ("max_retries", _parse_non_negative_int),
    "AUTO_CLOSE": ("auto_close", _parse_bool),
    "ENABLED": ("enabled", _parse_bool),
    "TIMEOUT_SECONDS": ("timeout_seconds", _parse_non_negative_float),
    "RETRY_BACKOFF_SECONDS": ("retry_backoff_seconds", _parse_non_negative_float),
}

_FIELD_PARSERS = {name: parser for name, parser in _ENV_FIELDS.values()}


def get_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the user-level config file path.

    Supports an override via ``INVENTORY_BRIDGE_CONFIG_PATH`` for tests.
    """
    environ = os.environ if environ is None else environ
    override = environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override)

    if os.name == "nt":
        base = Path(environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / "inventory-bridge" / "config.json"

    return Path.home() / ".config" / "inventory-bridge" / "config.json"


def _values_from_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", path)
        return {}

    values: dict[str, Any] = {}
    for name, parser in _FIELD_PARSERS.items():
        if name not in data or data[name] is None:
            continue
        parsed = parser(str(data[name]))
        if parsed is not None:
            values[name] = parsed
    return values


def _values_from_env(environ: Mapping[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for suffix, (name, parser) in _ENV_FIELDS.items():
        raw = environ.get(f"{ENV_PREFIX}{suffix}")
        if raw is None:
            continue
        parsed = parser(raw)
        if parsed is None:
            logger.debug("Ignoring malformed %s%s", ENV_PREFIX, suffix)
            continue
        values[name] = parsed
    return values


def load_session_config(
    environ: Mapping[str, str] | None = None,
    *,
    config_path: Path | None = None,
    **overrides: Any,
) -> SessionConfig:
    """Build a :class:`SessionConfig` from file, environment and overrides."""
    environ = os.environ if environ is None else environ
    path = config_path or get_config_path(environ)

    values = _values_from_file(path)
    values.update(_values_from_env(environ))

    known = {f.name for f in fields(SessionConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise TypeError(f"Unknown session config option(s): {', '.join(unknown)}")
    values.update(overrides)

    return SessionConfig(**values)

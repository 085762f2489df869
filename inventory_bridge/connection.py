"""HTTP session transport to the inventory backend with error mapping."""

from __future__ import annotations

import http.client
import json
import logging
import socket
from typing import Any

from contracts.v1.operations import operation_spec
from core.results import BackendError, DispatchResult, ErrorKind

from .config import SessionConfig

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 1000
LOGIN_PATH = "/api/login"
LOGOUT_PATH = "/api/logout"
OPERATION_PATH = "/api/{operation}"

_MASK = "********"


class HttpBackendConnection:
    """Persistent keep-alive HTTP session against the backend's JSON API.

    Every response body is an envelope of the form
    ``{"status_code": int, "status_message": str, "payload": ...}``.
    Status ``1000`` means success; anything else is a rejection by the
    backend and is never retried.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int | None = None,
        timeout_seconds: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.timeout_seconds = timeout_seconds
        self.last_request: str | None = None
        self.last_response: str | None = None
        self._http: http.client.HTTPConnection | None = None
        self._token: str | None = None

    @classmethod
    def from_config(cls, config: SessionConfig) -> "HttpBackendConnection":
        return cls(
            host=config.host,
            port=config.port,
            timeout_seconds=config.timeout_seconds,
        )

    def open(self) -> "HttpBackendConnection":
        """Open the socket. Raises ``BackendError`` (transport) on failure."""
        self._drop()
        conn = http.client.HTTPConnection(self.host, self.port, timeout=self.timeout_seconds)
        try:
            conn.connect()
        except OSError as e:
            conn.close()
            raise BackendError(
                ErrorKind.TRANSPORT,
                f"Could not connect to {self._address()}: {e}",
            ) from e
        self._http = conn
        return self

    def login(self, username: str, password: str) -> "HttpBackendConnection":
        """Authenticate the open socket and keep the session token."""
        if self._http is None:
            raise BackendError(ErrorKind.TRANSPORT, "Cannot log in: connection is not open")

        body = {"username": username, "password": password}
        try:
            status, raw = self._post(LOGIN_PATH, body, masked={"username": username, "password": _MASK})
        except (OSError, http.client.HTTPException) as e:
            self._drop()
            raise BackendError(ErrorKind.TRANSPORT, f"Login request failed: {e}") from e

        envelope = self._decode(raw)
        if status >= 400 or envelope is None or envelope.get("status_code") != SUCCESS_STATUS:
            self._drop()
            code = envelope.get("status_code") if envelope else status
            message = envelope.get("status_message") if envelope else None
            raise BackendError(
                ErrorKind.STATUS,
                f"Login rejected: {message or 'authentication failed'}",
                status_code=code,
            )

        payload = envelope.get("payload") or {}
        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            self._drop()
            raise BackendError(ErrorKind.STATUS, "Login response did not include a session token")

        self._token = token
        logger.debug("Logged in to %s as %s", self._address(), username)
        return self

    def is_connected(self) -> bool:
        return self._http is not None and self._token is not None

    def close(self) -> None:
        """Log out (best effort) and close the socket. Safe to call repeatedly."""
        if self._http is None:
            return
        if self._token is not None:
            try:
                self._post(LOGOUT_PATH, {}, record=False)
            except (OSError, http.client.HTTPException) as e:
                logger.debug("Logout from %s failed: %s", self._address(), e)
        self._drop()

    def dispatch(self, operation: str, params: dict[str, Any]) -> DispatchResult:
        """Send one operation and map the outcome to a ``DispatchResult``."""
        spec = operation_spec(operation)
        if not self.is_connected():
            return DispatchResult.server_error(
                BackendError(ErrorKind.SERVER, "Connection is not open", operation=operation)
            )

        path = OPERATION_PATH.format(operation=operation)
        try:
            status, raw = self._post(path, params)
        except (OSError, socket.timeout, http.client.HTTPException) as e:
            # The socket is unusable after a failed exchange.
            self._drop()
            return DispatchResult.server_error(
                BackendError(ErrorKind.SERVER, f"Request failed: {e}", operation=operation)
            )

        if status >= 500:
            return DispatchResult.server_error(
                BackendError(
                    ErrorKind.SERVER,
                    self._detail(raw) or "Backend unavailable",
                    status_code=status,
                    operation=operation,
                )
            )

        envelope = self._decode(raw)
        if status >= 400 or envelope is None:
            return DispatchResult.status_error(
                BackendError(
                    ErrorKind.STATUS,
                    self._detail(raw) or "Backend returned an invalid response",
                    status_code=status,
                    operation=operation,
                )
            )

        code = envelope.get("status_code")
        if code != SUCCESS_STATUS:
            return DispatchResult.status_error(
                BackendError(
                    ErrorKind.STATUS,
                    envelope.get("status_message") or "Request rejected",
                    status_code=code,
                    operation=operation,
                )
            )

        try:
            payload = spec.parse(envelope.get("payload"))
        except ValueError as e:
            return DispatchResult.status_error(
                BackendError(
                    ErrorKind.STATUS,
                    f"Unexpected {operation} payload: {e}",
                    operation=operation,
                )
            )

        if spec.shape == "none":
            return DispatchResult.empty()
        return DispatchResult.success(payload)

    def _post(
        self,
        path: str,
        body: dict[str, Any],
        *,
        masked: dict[str, Any] | None = None,
        record: bool = True,
    ) -> tuple[int, str]:
        assert self._http is not None
        data = json.dumps(body)
        if record:
            self.last_request = json.dumps({"path": path, "body": masked if masked is not None else body})
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        self._http.request("POST", path, body=data.encode("utf-8"), headers=headers)
        resp = self._http.getresponse()
        raw = resp.read().decode("utf-8", errors="replace")
        if record:
            self.last_response = raw
        return resp.status, raw

    @staticmethod
    def _decode(raw: str) -> dict[str, Any] | None:
        if not raw:
            return None
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            return None
        return payload if isinstance(payload, dict) else None

    @classmethod
    def _detail(cls, raw: str) -> str:
        envelope = cls._decode(raw)
        if envelope is not None:
            for key in ("status_message", "detail"):
                if envelope.get(key):
                    return str(envelope[key])
        return raw.strip()[:200]

    def _drop(self) -> None:
        if self._http is not None:
            self._http.close()
        self._http = None
        self._token = None

    def _address(self) -> str:
        return f"{self.host}:{self.port}" if self.port else self.host

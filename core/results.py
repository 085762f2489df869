"""Typed outcomes returned by the backend dispatch boundary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    TRANSPORT = "transport"
    SERVER = "server"
    STATUS = "status"


class ResultKind(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    SERVER_ERROR = "server_error"
    STATUS_ERROR = "status_error"


class BackendError(Exception):
    """A failure reported by, or while talking to, the inventory backend."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        operation: str | None = None,
        order_id: Any = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.operation = operation
        self.order_id = order_id

    @property
    def retryable(self) -> bool:
        return self.kind is ErrorKind.SERVER

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "operation": self.operation,
            "order_id": self.order_id,
        }

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one dispatched operation.

    ``SUCCESS`` carries a payload, ``EMPTY`` means the backend accepted the
    call but returned nothing, and the two error kinds carry a
    :class:`BackendError`.
    """

    kind: ResultKind
    payload: Any = None
    error: BackendError | None = None

    @classmethod
    def success(cls, payload: Any) -> "DispatchResult":
        if payload is None:
            return cls(ResultKind.EMPTY)
        return cls(ResultKind.SUCCESS, payload=payload)

    @classmethod
    def empty(cls) -> "DispatchResult":
        return cls(ResultKind.EMPTY)

    @classmethod
    def server_error(cls, error: BackendError) -> "DispatchResult":
        return cls(ResultKind.SERVER_ERROR, error=error)

    @classmethod
    def status_error(cls, error: BackendError) -> "DispatchResult":
        return cls(ResultKind.STATUS_ERROR, error=error)

    @property
    def ok(self) -> bool:
        return self.kind in (ResultKind.SUCCESS, ResultKind.EMPTY)

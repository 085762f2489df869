"""Tests for typed dispatch results."""

from core.results import BackendError, DispatchResult, ErrorKind, ResultKind


def test_success_with_none_payload_is_empty():
    assert DispatchResult.success(None).kind is ResultKind.EMPTY
    assert DispatchResult.success([]).kind is ResultKind.SUCCESS


def test_error_results():
    err = BackendError(ErrorKind.SERVER, "down", status_code=503)

    result = DispatchResult.server_error(err)

    assert result.kind is ResultKind.SERVER_ERROR
    assert result.ok is False
    assert result.error.retryable is True
    assert str(result.error) == "down (status 503)"


def test_status_error_not_retryable():
    err = BackendError(ErrorKind.STATUS, "rejected", operation="save_customer", order_id=3)

    assert err.retryable is False
    assert err.to_dict() == {
        "kind": "status",
        "message": "rejected",
        "status_code": None,
        "operation": "save_customer",
        "order_id": 3,
    }

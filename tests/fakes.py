"""Test doubles for the backend connection."""

from contracts.v1.operations import operation_spec
from core.results import BackendError, DispatchResult, ErrorKind


class Script(list):
    """Outcomes returned one per call; the last one repeats."""


class FakeConnection:
    """Scripted stand-in for a backend connection.

    ``responses`` maps an operation name to an outcome or a ``Script`` of
    outcomes. An outcome is a ``DispatchResult``, an exception to raise, or
    a raw payload parsed through the operation catalog.
    """

    def __init__(self, responses=None, *, fail_login=False, fail_open=False):
        self.responses = dict(responses or {})
        self.fail_login = fail_login
        self.fail_open = fail_open
        self.calls = []
        self.open_count = 0
        self.login_count = 0
        self.close_count = 0
        self.last_request = None
        self.last_response = None
        self._open = False
        self._authenticated = False

    def open(self):
        self.open_count += 1
        if self.fail_open:
            raise BackendError(ErrorKind.TRANSPORT, "connection refused")
        self._open = True
        return self

    def login(self, username, password):
        self.login_count += 1
        if self.fail_login:
            raise BackendError(ErrorKind.STATUS, "bad credentials", status_code=1120)
        self._authenticated = True
        return self

    def close(self):
        self.close_count += 1
        self._open = False
        self._authenticated = False

    def is_connected(self):
        return self._open and self._authenticated

    def dispatch(self, operation, params):
        self.calls.append((operation, params))
        self.last_request = f"{operation} {params}"

        outcome = self.responses.get(operation)
        if isinstance(outcome, Script):
            outcome = outcome.pop(0) if len(outcome) > 1 else outcome[0]

        if isinstance(outcome, Exception):
            self.last_response = None
            raise outcome
        if isinstance(outcome, DispatchResult):
            self.last_response = outcome.kind.value
            return outcome

        self.last_response = repr(outcome)
        spec = operation_spec(operation)
        if spec.shape == "none":
            return DispatchResult.empty()
        return DispatchResult.success(spec.parse(outcome))

    def operations(self):
        return [op for op, _ in self.calls]


def server_error(message="backend unavailable"):
    return DispatchResult.server_error(BackendError(ErrorKind.SERVER, message, status_code=503))


def status_error(message="validation failed", code=2100):
    return DispatchResult.status_error(BackendError(ErrorKind.STATUS, message, status_code=code))

"""
Tests for the inventory bridge support service.
"""

import pytest
from fastapi.testclient import TestClient

from web.app import app
from web.routes import get_session_client
from tests.fakes import FakeConnection, status_error


@pytest.fixture
def api(make_client):
    """Test client wired to a session client over a fake connection.

    Usage:
        http, session = api(FakeConnection({...}))
    """
    def _make(connection=None, **overrides):
        session = make_client(connection or FakeConnection(), **overrides)
        app.dependency_overrides[get_session_client] = lambda: session
        return TestClient(app), session

    yield _make
    app.dependency_overrides.clear()


def test_health(api):
    http, _ = api()

    response = http.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_status(api):
    http, _ = api()

    data = http.get("/api/status").json()

    assert data["configured"] is True
    assert data["connected"] is False
    assert data["location_group"] == "Main Warehouse"
    assert data["auto_close"] is True


def test_carriers(api):
    http, _ = api(FakeConnection({"get_carrier_list": ["UPS"]}))

    response = http.get("/api/carriers")

    assert response.status_code == 200
    assert response.json() == [{"name": "UPS", "description": None}]


def test_location_groups(api):
    http, _ = api(FakeConnection({"get_location_group_list": ["Main"]}))

    assert http.get("/api/location-groups").json() == [{"name": "Main", "id": None}]


def test_part_found(api):
    http, _ = api(FakeConnection({"get_part": {"num": "P-1", "description": "Widget"}}))

    response = http.get("/api/parts/P-1")

    assert response.status_code == 200
    assert response.json()["description"] == "Widget"


def test_part_not_found(api):
    http, _ = api(FakeConnection({"get_part": None}))

    assert http.get("/api/parts/P-404").status_code == 404


def test_backend_error_is_502(api):
    http, _ = api(FakeConnection({"get_part": status_error("Part is inactive")}))

    response = http.get("/api/parts/P-1")

    assert response.status_code == 502
    assert "Part is inactive" in response.json()["detail"]


def test_unconfigured_is_503(api):
    http, _ = api(host="")

    assert http.get("/api/carriers").status_code == 503


def test_inventory(api):
    http, _ = api(
        FakeConnection(
            {
                "get_product": {"num": "S", "part": {"num": "P"}},
                "get_inventory_quantity": {"part_number": "P", "qty_available": 3},
            }
        )
    )

    data = http.get("/api/inventory/S", params={"location_group": "East"}).json()

    assert data == {"sku": "S", "location_group": "East", "qty_available": 3}


def test_diagnostics_after_failure(api):
    http, session = api(FakeConnection({"get_part": status_error("nope")}))
    http.get("/api/parts/P-1")

    data = http.get("/api/diagnostics").json()

    assert data["last_error"]["kind"] == "status"
    assert data["last_error"]["operation"] == "get_part"
    assert data["last_request"] == "get_part {'part_num': 'P-1', 'location_group': 'Main Warehouse'}"


def test_unreachable_backend_is_502(api):
    http, _ = api(FakeConnection(fail_open=True))

    for path in ("/api/carriers", "/api/parts/P-1"):
        response = http.get(path)
        assert response.status_code == 502
        assert response.json()["detail"] == "could not reach the inventory backend"


def test_unreachable_backend_after_earlier_failure(api):
    connection = FakeConnection({"get_part": status_error("Part is inactive")})
    http, _ = api(connection)
    assert http.get("/api/parts/P-1").status_code == 502

    connection.fail_open = True
    response = http.get("/api/carriers")

    assert response.status_code == 502
    assert response.json()["detail"] == "could not reach the inventory backend"

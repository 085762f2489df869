"""
Tests for the support service entry point.
"""

import pytest

import web.__main__ as web_main
from inventory_bridge import SessionConfig


@pytest.fixture
def environ(tmp_path):
    return {
        "INVENTORY_BRIDGE_CONFIG_PATH": str(tmp_path / "missing.json"),
        "INVENTORY_BRIDGE_HOST": "inventory.local",
        "INVENTORY_BRIDGE_USER": "admin",
        "INVENTORY_BRIDGE_PASSWORD": "secret",
    }


def test_config_warnings_empty_when_configured():
    assert web_main.config_warnings(SessionConfig(host="h", username="u", password="p")) == []


def test_config_warnings_name_missing_settings():
    warnings = web_main.config_warnings(SessionConfig(host="h"))

    assert warnings == [
        "INVENTORY_BRIDGE_USER is not set",
        "INVENTORY_BRIDGE_PASSWORD is not set",
    ]


def test_config_warnings_disabled():
    cfg = SessionConfig(host="h", username="u", password="p", enabled=False)

    assert web_main.config_warnings(cfg) == ["the bridge is disabled (INVENTORY_BRIDGE_ENABLED)"]


def test_check_passes_when_configured(environ, capsys):
    assert web_main.main(["--check"], environ=environ) == 0
    assert "admin@inventory.local" in capsys.readouterr().out


def test_check_fails_when_unconfigured(environ, caplog):
    del environ["INVENTORY_BRIDGE_PASSWORD"]

    assert web_main.main(["--check"], environ=environ) == 1
    assert "INVENTORY_BRIDGE_PASSWORD is not set" in caplog.text


def test_serves_with_warning_when_unconfigured(environ, monkeypatch, caplog):
    served = {}
    monkeypatch.setattr(web_main.uvicorn, "run", lambda app, **kwargs: served.update(app=app, **kwargs))
    del environ["INVENTORY_BRIDGE_HOST"]

    assert web_main.main(["--port", "9001"], environ=environ) == 0
    assert served == {"app": "web.app:app", "host": "127.0.0.1", "port": 9001, "reload": False}
    assert "INVENTORY_BRIDGE_HOST is not set" in caplog.text

import pytest
from fastapi import FastAPI

from playwright_bridge.api.main import create_app, install_bridge
from playwright_bridge.core.config import BridgeConfig, Settings
from playwright_bridge.core.guardrails import (
    BridgeDisabledError,
    GuardrailViolation,
    ensure_bridge_allowed,
)
from playwright_bridge.memory.record_store import RecordStore
from playwright_bridge.runtime.bridge import Bridge


def test_bridge_allowed_outside_production():
    assert ensure_bridge_allowed(BridgeConfig(environment="testing")) is True


@pytest.mark.parametrize("environment", ["production", "Production", " production "])
def test_bridge_refused_in_production(environment):
    with pytest.raises(BridgeDisabledError):
        ensure_bridge_allowed(BridgeConfig(environment=environment))


def test_prefix_must_be_absolute():
    with pytest.raises(GuardrailViolation):
        ensure_bridge_allowed(BridgeConfig(prefix="__playwright__"))


def test_install_bridge_registers_nothing_in_production():
    app = FastAPI()
    bridge = Bridge(store=RecordStore(":memory:"), config=BridgeConfig(environment="production"))

    with pytest.raises(BridgeDisabledError):
        install_bridge(app, bridge)

    assert not any(getattr(route, "path", "").startswith("/__playwright__") for route in app.routes)
    assert not hasattr(app.state, "bridge")


def test_create_app_hard_fails_in_production(tmp_path):
    settings = Settings(_env_file=None, app_env="production", database_path=str(tmp_path / "db.sqlite"))

    with pytest.raises(BridgeDisabledError):
        create_app(settings)


def test_bridge_config_from_settings():
    settings = Settings(
        _env_file=None,
        app_env="testing",
        bridge_prefix="/__e2e__",
        user_model="Account",
        hidden_attributes=["secret"],
    )

    config = BridgeConfig.from_settings(settings)

    assert config.environment == "testing"
    assert config.prefix == "/__e2e__"
    assert config.user_model == "Account"
    assert config.hidden_attributes == ["secret"]
    assert config.is_production is False


def test_custom_prefix_is_used(tmp_path):
    from fastapi.testclient import TestClient

    settings = Settings(_env_file=None, bridge_prefix="/__e2e__", database_path=str(tmp_path / "db.sqlite"))

    with TestClient(create_app(settings)) as client:
        assert client.get("/__e2e__/csrf_token").status_code == 200
        assert client.get("/__playwright__/csrf_token").status_code == 404

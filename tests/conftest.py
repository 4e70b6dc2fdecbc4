import pytest
from fastapi.testclient import TestClient

from playwright_bridge.api.main import create_app
from playwright_bridge.core.config import Settings

PREFIX = "/__playwright__"


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        _env_file=None,
        app_env="testing",
        database_path=str(tmp_path / "bridge.db"),
    )


@pytest.fixture
def app(app_settings):
    return create_app(app_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def bridge_call(client):
    """POST to a bridge endpoint with a fresh CSRF token."""

    def call(name: str, **data):
        token = client.get(f"{PREFIX}/csrf_token").json()
        return client.post(f"{PREFIX}/{name}", json={"_token": token, **data})

    return call


@pytest.fixture
def evaluate(bridge_call):
    def run(command: str):
        response = bridge_call("run-python", command=command)
        assert response.status_code == 200, response.text
        return response.json()["result"]

    return run

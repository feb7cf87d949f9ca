from fastapi.testclient import TestClient

from registry_api import __version__
from tests.conftest import create_entry, publish


def test_health(client: TestClient):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["version"] == __version__


def test_stats_on_empty_registry(client: TestClient):
    response = client.get("/api/v1/stats")
    assert response.status_code == 200
    assert response.json() == {"packages": 0, "services": 0, "releases": 0, "downloads": 0}


def test_stats_count_entries_and_releases(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    create_entry(client, alice, "calendar")
    create_entry(client, alice, "sandbox-runner", kind="service", name="Sandbox Runner", type="sandbox")
    publish(client, alice, "weather-tools", "1.0.0")
    publish(client, alice, "weather-tools", "1.1.0")
    client.get("/api/v1/packages/weather-tools/versions/1.1.0/download")

    assert client.get("/api/v1/stats").json() == {
        "packages": 2,
        "services": 1,
        "releases": 2,
        "downloads": 1,
    }


def test_unknown_route_uses_error_envelope(client: TestClient):
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"

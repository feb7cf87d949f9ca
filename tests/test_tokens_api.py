from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from tests.conftest import auth_headers


def _create_token(client: TestClient, user: dict, name: str = "ci", **extra):
    return client.post("/api/v1/tokens", json={"name": name, **extra}, headers=auth_headers(user))


def test_token_round_trip(client: TestClient, alice):
    response = _create_token(client, alice)
    assert response.status_code == 201
    created = response.json()
    secret = created["token"]
    assert secret.startswith("mcpr_")

    response = client.get("/api/v1/account", headers={"Authorization": f"Bearer {secret}"})
    assert response.status_code == 200
    assert response.json()["id"] == alice["id"]
    assert response.json()["credential"] == "api_token"

    listing = client.get("/api/v1/tokens", headers=auth_headers(alice)).json()["items"]
    assert [item["name"] for item in listing] == ["ci"]
    assert listing[0].get("token") is None
    assert listing[0]["lastUsedAt"] is not None


def test_api_token_can_publish_entries(client: TestClient, alice):
    secret = _create_token(client, alice).json()["token"]
    response = client.post(
        "/api/v1/packages",
        json={"id": "weather-tools", "name": "weather-tools", "categories": ["server"]},
        headers={"Authorization": f"Bearer {secret}"},
    )
    assert response.status_code == 201
    assert response.json()["primaryOwnerId"] == alice["id"]


def test_revoked_token_is_rejected(client: TestClient, alice):
    created = _create_token(client, alice).json()
    headers = {"Authorization": f"Bearer {created['token']}"}

    response = client.delete(f"/api/v1/tokens/{created['id']}", headers=auth_headers(alice))
    assert response.status_code == 204
    # revoking twice is harmless
    assert client.delete(f"/api/v1/tokens/{created['id']}", headers=auth_headers(alice)).status_code == 204

    assert client.get("/api/v1/account", headers=headers).status_code == 401
    listing = client.get("/api/v1/tokens", headers=auth_headers(alice)).json()["items"]
    assert listing[0]["revoked"] is True


def test_unknown_token_is_rejected(client: TestClient, alice):
    _create_token(client, alice)
    response = client.get("/api/v1/account", headers={"Authorization": "Bearer mcpr_unknown"})
    assert response.status_code == 401


def test_token_validation(client: TestClient, alice):
    past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()
    assert _create_token(client, alice, expiresAt=past).status_code == 400
    assert _create_token(client, alice, name="").status_code == 400
    assert _create_token(client, alice, name="x" * 101).status_code == 400

    future = (datetime.now(timezone.utc) + timedelta(days=30)).isoformat()
    response = _create_token(client, alice, name="deploy", expiresAt=future)
    assert response.status_code == 201
    assert response.json()["expiresAt"] is not None
    assert _create_token(client, alice, name="deploy").status_code == 409


def test_tokens_require_credentials(client: TestClient):
    assert client.get("/api/v1/tokens").status_code == 401
    assert client.post("/api/v1/tokens", json={"name": "ci"}).status_code == 401


def test_user_scoped_token_routes(client: TestClient, alice, bob):
    base = f"/api/v1/users/{alice['id']}/api_tokens"

    response = client.post(base, json={"name": "laptop"}, headers=auth_headers(alice))
    assert response.status_code == 201
    token_id = response.json()["id"]

    assert client.get(base, headers=auth_headers(bob)).status_code == 403
    assert client.post(base, json={"name": "sneaky"}, headers=auth_headers(bob)).status_code == 403
    assert client.delete(f"{base}/{token_id}", headers=auth_headers(bob)).status_code == 403

    # another user's token id looks like a missing one
    response = client.delete(f"/api/v1/tokens/{token_id}", headers=auth_headers(bob))
    assert response.status_code == 404

    items = client.get(base, headers=auth_headers(alice)).json()["items"]
    assert [item["name"] for item in items] == ["laptop"]
    assert client.delete(f"{base}/{token_id}", headers=auth_headers(alice)).status_code == 204


def test_token_of_deleted_user_stops_working(client: TestClient, bob):
    secret = _create_token(client, bob).json()["token"]
    assert client.delete(f"/api/v1/users/{bob['id']}", headers=auth_headers(bob)).status_code == 204
    assert client.get("/api/v1/account", headers={"Authorization": f"Bearer {secret}"}).status_code == 401

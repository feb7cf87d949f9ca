from fastapi.testclient import TestClient

from registry_api.auth.identity_provider import issue_session_token
from tests.conftest import auth_headers, create_entry


def test_public_profile_lookup(client: TestClient, alice):
    response = client.get(f"/api/v1/users/{alice['id']}")
    assert response.status_code == 200
    assert response.json()["username"] == "alice"
    assert response.json()["displayName"] == "Alice Liddell"

    response = client.get("/api/v1/user-by-username/ALICE")
    assert response.status_code == 200
    assert response.json()["id"] == alice["id"]

    assert client.get("/api/v1/users/ghost").status_code == 404
    assert client.get("/api/v1/user-by-username/ghost").status_code == 404


def test_account_requires_credentials(client: TestClient):
    response = client.get("/api/v1/account")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"

    response = client.get("/api/v1/account", headers={"Authorization": "Basic abc"})
    assert response.status_code == 401


def test_session_provisions_unknown_user(client: TestClient):
    token, _ = issue_session_token(user_id="user-new", username="newcomer", display_name="New Comer")
    response = client.get("/api/v1/account", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "user-new"
    assert body["credential"] == "session"
    assert body["isAdmin"] is False
    assert client.get("/api/v1/user-by-username/newcomer").status_code == 200


def test_session_cookie_is_accepted(client: TestClient, alice):
    token, _ = issue_session_token(user_id=alice["id"], username=alice["username"])
    response = client.get("/api/v1/account", headers={"Cookie": f"registry_session={token}"})
    assert response.status_code == 200
    assert response.json()["id"] == alice["id"]


def test_admin_role_from_configuration(client: TestClient, admin):
    response = client.get("/api/v1/account", headers=auth_headers(admin))
    assert response.json()["isAdmin"] is True


def test_expired_session_is_rejected(client: TestClient, alice):
    token, _ = issue_session_token(user_id=alice["id"], username=alice["username"], ttl_seconds=-10)
    response = client.get("/api/v1/account", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_profile_update_is_self_service(client: TestClient, alice, bob):
    response = client.patch(
        f"/api/v1/users/{alice['id']}", json={"displayName": "Alice L."}, headers=auth_headers(bob)
    )
    assert response.status_code == 403

    response = client.patch(
        f"/api/v1/users/{alice['id']}",
        json={"displayName": "Alice L.", "avatarUrl": "https://example.com/a.png"},
        headers=auth_headers(alice),
    )
    assert response.status_code == 200
    assert response.json()["displayName"] == "Alice L."
    assert response.json()["avatarUrl"] == "https://example.com/a.png"

    response = client.patch(
        f"/api/v1/users/{alice['id']}", json={"email": bob["email"]}, headers=auth_headers(alice)
    )
    assert response.status_code == 409

    response = client.patch(
        f"/api/v1/users/{alice['id']}", json={"email": "not-an-email"}, headers=auth_headers(alice)
    )
    assert response.status_code == 400


def test_account_deletion_blocked_while_owning_entries(client: TestClient, alice, bob):
    create_entry(client, alice, "weather-tools")

    assert client.delete(f"/api/v1/users/{alice['id']}", headers=auth_headers(bob)).status_code == 403

    response = client.delete(f"/api/v1/users/{alice['id']}", headers=auth_headers(alice))
    assert response.status_code == 403
    assert response.json()["details"]["ownedEntries"] == 1

    client.post(
        "/api/v1/packages/weather-tools/transfer", json={"newOwnerId": bob["id"]}, headers=auth_headers(alice)
    )
    response = client.delete(f"/api/v1/users/{alice['id']}", headers=auth_headers(alice))
    assert response.status_code == 204
    assert client.get(f"/api/v1/users/{alice['id']}").status_code == 404
    owners = client.get("/api/v1/packages/weather-tools/owners").json()
    assert owners["items"] == []

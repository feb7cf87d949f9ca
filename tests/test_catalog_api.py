from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from registry_api.db.models import RegistryEntry, RegistryVersion
from registry_api.db.session import SessionLocal

from tests.conftest import auth_headers, create_entry, publish


def test_create_package_makes_caller_primary_owner(client: TestClient, alice):
    body = create_entry(
        client,
        alice,
        "weather-tools",
        description="Forecasts over MCP",
        keywords=["weather", "forecast"],
        homepage="https://example.com/weather",
    )
    assert body["id"] == "weather-tools"
    assert body["kind"] == "package"
    assert body["primaryOwnerId"] == alice["id"]
    assert body["primaryOwner"]["username"] == "alice"
    assert body["owners"] == ["Alice Liddell"]
    assert body["versions"] == []
    assert body["defaultVersion"] is None
    assert body["stats"]["totalOwners"] == 1


def test_create_requires_credentials(client: TestClient):
    response = client.post("/api/v1/packages", json={"id": "nope", "name": "nope", "categories": ["server"]})
    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"


def test_create_rejects_invalid_payloads(client: TestClient, alice):
    headers = auth_headers(alice)
    response = client.post(
        "/api/v1/packages",
        json={"id": "bad-pkg", "name": "Bad Name", "categories": ["server"]},
        headers=headers,
    )
    assert response.status_code == 400
    assert any(issue["path"] == "name" for issue in response.json()["details"]["issues"])

    response = client.post(
        "/api/v1/packages",
        json={"id": "too-many", "name": "too-many", "categories": ["server"], "keywords": list("abcdef")},
        headers=headers,
    )
    assert response.status_code == 400

    response = client.post(
        "/api/v1/packages",
        json={"id": "no-category", "name": "no-category"},
        headers=headers,
    )
    assert response.status_code == 400

    response = client.post("/api/v1/services", json={"id": "svc", "name": "Svc"}, headers=headers)
    assert response.status_code == 400


def test_duplicate_entry_is_conflict(client: TestClient, alice, bob):
    create_entry(client, alice, "weather-tools")
    response = client.post(
        "/api/v1/packages",
        json={"id": "weather-tools", "name": "other-name", "categories": ["server"]},
        headers=auth_headers(bob),
    )
    assert response.status_code == 409


def test_detail_of_unknown_entry_is_404(client: TestClient):
    response = client.get("/api/v1/packages/missing")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_kinds_are_separate_namespaces(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    assert client.get("/api/v1/services/weather-tools").status_code == 404
    assert client.get("/api/v1/packages/weather-tools").status_code == 200


def test_public_reads_ignore_bad_credentials(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    response = client.get("/api/v1/packages", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 1


def test_pagination_partitions_the_result_set(client: TestClient, alice):
    for index in range(5):
        create_entry(client, alice, f"pkg-{index}")

    seen = []
    for page in (1, 2, 3):
        response = client.get("/api/v1/packages", params={"page": page, "limit": 2, "sort": "name-asc"})
        assert response.status_code == 200
        body = response.json()
        assert body["pagination"]["total"] == 5
        assert body["pagination"]["totalPages"] == 3
        seen.extend(item["id"] for item in body["packages"])

    assert seen == [f"pkg-{index}" for index in range(5)]
    last = client.get("/api/v1/packages", params={"page": 3, "limit": 2}).json()["pagination"]
    assert last["hasNextPage"] is False
    assert last["hasPrevPage"] is True


def test_out_of_range_paging_is_clamped(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    body = client.get("/api/v1/packages", params={"page": "0", "limit": "1000"}).json()
    assert body["pagination"]["page"] == 1
    assert body["pagination"]["limit"] == 100


def test_huge_page_number_returns_an_empty_page(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    response = client.get("/api/v1/packages", params={"page": "100000000000000000000", "limit": "10"})
    assert response.status_code == 200
    body = response.json()
    assert body["packages"] == []
    assert body["pagination"]["total"] == 1
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["hasPrevPage"] is True


def test_text_search_matches_keywords_and_description(client: TestClient, alice):
    create_entry(client, alice, "weather-tools", keywords=["forecast"])
    create_entry(client, alice, "git-helper", description="Wraps git_history lookups")
    create_entry(client, alice, "calendar")

    ids = [item["id"] for item in client.get("/api/v1/packages", params={"q": "FORECAST"}).json()["packages"]]
    assert ids == ["weather-tools"]

    # underscore is literal, not a wildcard
    ids = [item["id"] for item in client.get("/api/v1/packages", params={"q": "git_h"}).json()["packages"]]
    assert ids == ["git-helper"]


def test_category_owner_and_contributor_filters(client: TestClient, alice, bob, carol):
    create_entry(client, alice, "weather-tools", categories=["server", "hook"])
    create_entry(client, bob, "sandboxer", categories=["sandbox"])
    assert publish(client, bob, "sandboxer", "1.0.0", data={"contributors": carol["id"]}).status_code == 201

    hooks = client.get("/api/v1/packages", params={"type": "hook"}).json()
    assert [item["id"] for item in hooks["packages"]] == ["weather-tools"]
    assert hooks["filters"]["type"] == "hook"

    by_owner = client.get("/api/v1/packages", params={"owner": "Bob Builder"}).json()
    assert [item["id"] for item in by_owner["packages"]] == ["sandboxer"]

    by_contributor = client.get("/api/v1/packages", params={"contributor": "carol"}).json()
    assert [item["id"] for item in by_contributor["packages"]] == ["sandboxer"]
    assert set(by_contributor["packages"][0]["contributors"]) == {"Bob Builder", "Carol Danvers"}


def test_verified_filter_and_admin_verification(client: TestClient, alice, admin):
    create_entry(client, alice, "weather-tools")
    create_entry(client, alice, "calendar")

    response = client.patch("/api/v1/packages/calendar", json={"isVerified": True}, headers=auth_headers(alice))
    assert response.status_code == 403

    response = client.patch("/api/v1/packages/calendar", json={"isVerified": True}, headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["isVerified"] is True
    assert response.json()["audits"][0]["action"] == "verify"

    verified = client.get("/api/v1/packages", params={"verified": "verified"}).json()["packages"]
    unverified = client.get("/api/v1/packages", params={"verified": "unverified"}).json()["packages"]
    assert [item["id"] for item in verified] == ["calendar"]
    assert [item["id"] for item in unverified] == ["weather-tools"]

    relevance = client.get("/api/v1/packages").json()["packages"]
    assert relevance[0]["id"] == "calendar"


def test_services_expose_type(client: TestClient, alice):
    create_entry(client, alice, "sandbox-runner", kind="service", name="Sandbox Runner", type="sandbox")
    body = client.get("/api/v1/services").json()
    assert body["services"][0]["type"] == "sandbox"
    assert body["services"][0]["kind"] == "service"


def test_update_entry_by_owner_and_non_owner(client: TestClient, alice, bob):
    create_entry(client, alice, "weather-tools")

    response = client.patch(
        "/api/v1/packages/weather-tools",
        json={"description": "Now with radar"},
        headers=auth_headers(bob),
    )
    assert response.status_code == 403

    response = client.patch("/api/v1/packages/weather-tools", json={"description": "Now with radar"})
    assert response.status_code == 401

    response = client.patch(
        "/api/v1/packages/weather-tools",
        json={"description": "Now with radar", "keywords": ["radar"]},
        headers=auth_headers(alice),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["description"] == "Now with radar"
    assert body["keywords"] == ["radar"]
    assert body["audits"][0]["action"] == "update"


def test_deprecation_requires_message(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    headers = auth_headers(alice)

    response = client.patch("/api/v1/packages/weather-tools", json={"isDeprecated": True}, headers=headers)
    assert response.status_code == 400

    response = client.patch(
        "/api/v1/packages/weather-tools",
        json={"isDeprecated": True, "deprecationMessage": "Use weather-next"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["isDeprecated"] is True
    assert response.json()["deprecationMessage"] == "Use weather-next"

    response = client.patch("/api/v1/packages/weather-tools", json={"isDeprecated": False}, headers=headers)
    assert response.json()["deprecationMessage"] is None
    actions = [audit["action"] for audit in response.json()["audits"]]
    assert "deprecate" in actions and "undeprecate" in actions


def test_owner_management_and_transfer(client: TestClient, alice, bob, carol):
    create_entry(client, alice, "weather-tools")
    alice_headers = auth_headers(alice)

    response = client.post(
        "/api/v1/packages/weather-tools/owners", json={"userId": bob["id"]}, headers=alice_headers
    )
    assert response.status_code == 201
    assert [owner["id"] for owner in response.json()["items"]] == [bob["id"]]

    response = client.post(
        "/api/v1/packages/weather-tools/owners", json={"userId": bob["id"]}, headers=alice_headers
    )
    assert response.status_code == 409

    response = client.post(
        "/api/v1/packages/weather-tools/owners", json={"userId": "ghost"}, headers=alice_headers
    )
    assert response.status_code == 404

    # a co-owner may edit but not delete or transfer
    assert client.patch(
        "/api/v1/packages/weather-tools", json={"description": "co-owned"}, headers=auth_headers(bob)
    ).status_code == 200
    assert client.delete("/api/v1/packages/weather-tools", headers=auth_headers(bob)).status_code == 403
    assert client.post(
        "/api/v1/packages/weather-tools/transfer", json={"newOwnerId": bob["id"]}, headers=auth_headers(bob)
    ).status_code == 403

    response = client.delete(f"/api/v1/packages/weather-tools/owners/{alice['id']}", headers=auth_headers(bob))
    assert response.status_code == 400

    response = client.post(
        "/api/v1/packages/weather-tools/transfer", json={"newOwnerId": carol["id"]}, headers=alice_headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["primaryOwnerId"] == carol["id"]
    assert {owner["id"] for owner in body["secondaryOwners"]} == {alice["id"], bob["id"]}
    assert body["audits"][0]["action"] == "transfer_ownership"

    response = client.delete(f"/api/v1/packages/weather-tools/owners/{bob['id']}", headers=alice_headers)
    assert response.status_code == 204
    owners = client.get("/api/v1/packages/weather-tools/owners").json()
    assert owners["primaryOwner"]["id"] == carol["id"]
    assert [owner["id"] for owner in owners["items"]] == [alice["id"]]


def test_primary_owner_deletes_entry(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    assert publish(client, alice, "weather-tools", "1.0.0").status_code == 201
    response = client.delete("/api/v1/packages/weather-tools", headers=auth_headers(alice))
    assert response.status_code == 204
    assert client.get("/api/v1/packages/weather-tools").status_code == 404
    assert client.get("/api/v1/packages/weather-tools/versions").status_code == 404


def _seed_sortable_entries(client: TestClient, user: dict) -> None:
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    seeds = {
        # id: (created offset, updated offset, verified, downloads)
        "alpha": (0, 2, False, 5),
        "bravo": (1, 0, True, 1),
        "charlie": (2, 1, False, 9),
    }
    for entry_id in seeds:
        create_entry(client, user, entry_id)
        assert publish(client, user, entry_id, "1.0.0").status_code == 201
    with SessionLocal() as session:
        for entry_id, (created, updated, verified, downloads) in seeds.items():
            session.execute(
                update(RegistryEntry)
                .where(RegistryEntry.id == entry_id)
                .values(
                    created_at=base + timedelta(days=created),
                    updated_at=base + timedelta(days=updated),
                    is_verified=verified,
                )
            )
            session.execute(
                update(RegistryVersion)
                .where(RegistryVersion.entry_id == entry_id)
                .values(downloads=downloads)
            )
        session.commit()


@pytest.mark.parametrize(
    "sort, expected",
    [
        ("relevance", ["bravo", "alpha", "charlie"]),
        ("downloads", ["charlie", "alpha", "bravo"]),
        ("newest", ["charlie", "bravo", "alpha"]),
        ("oldest", ["alpha", "bravo", "charlie"]),
        ("name-asc", ["alpha", "bravo", "charlie"]),
        ("name-desc", ["charlie", "bravo", "alpha"]),
        ("updated", ["alpha", "charlie", "bravo"]),
    ],
)
def test_listing_sort_orders(client: TestClient, alice, sort, expected):
    _seed_sortable_entries(client, alice)
    body = client.get("/api/v1/packages", params={"sort": sort}).json()
    assert body["filters"]["sort"] == sort
    assert [item["id"] for item in body["packages"]] == expected


def test_openapi_documents_every_sort_key(client: TestClient):
    from registry_api.catalog.query import SORT_OPTIONS

    parameters = client.get("/openapi.json").json()["paths"]["/api/v1/packages"]["get"]["parameters"]
    description = next(item for item in parameters if item["name"] == "sort")["description"]
    for option in SORT_OPTIONS:
        assert option in description

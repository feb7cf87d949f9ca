import hashlib

from fastapi.testclient import TestClient

from registry_api.services.versions_service import DEFAULT_YANK_MESSAGE
from tests.conftest import auth_headers, create_entry, make_tarball, publish


def test_first_version_becomes_default(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")

    response = publish(client, alice, "weather-tools", "1.0.0", data={"license": "MIT", "authors": '["Alice"]'})
    assert response.status_code == 201
    body = response.json()
    assert body["version"] == "1.0.0"
    assert body["isStable"] is True
    assert body["license"] == "MIT"
    assert body["authors"] == ["Alice"]
    assert body["digest"].startswith("sha256:")
    assert body["size"] == len(make_tarball(b"1.0.0"))
    assert body["tarballUrl"] == "/api/v1/packages/weather-tools/versions/1.0.0/download"

    detail = client.get("/api/v1/packages/weather-tools").json()
    assert detail["defaultVersion"] == "1.0.0"
    assert detail["defaultVersionData"]["version"] == "1.0.0"
    assert detail["audits"][0]["action"] == "publish"


def test_later_versions_keep_existing_default(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    for version in ("1.0.0", "0.9.0", "1.1.0-beta.1"):
        assert publish(client, alice, "weather-tools", version).status_code == 201

    detail = client.get("/api/v1/packages/weather-tools").json()
    assert detail["defaultVersion"] == "1.0.0"
    assert detail["maxVersion"] == "1.1.0-beta.1"
    assert detail["maxStableVersion"] == "1.0.0"
    assert detail["newestVersion"] == "1.1.0-beta.1"
    assert detail["stats"]["totalVersions"] == 3
    assert [item["version"] for item in detail["versions"]][0] == "1.1.0-beta.1"


def test_owner_switches_default_version(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    publish(client, alice, "weather-tools", "1.0.0")
    publish(client, alice, "weather-tools", "2.0.0")
    headers = auth_headers(alice)

    response = client.patch("/api/v1/packages/weather-tools", json={"defaultVersion": "2.0.0"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["defaultVersion"] == "2.0.0"

    response = client.patch("/api/v1/packages/weather-tools", json={"defaultVersion": "9.9.9"}, headers=headers)
    assert response.status_code == 400


def test_duplicate_version_is_conflict(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    assert publish(client, alice, "weather-tools", "1.0.0").status_code == 201
    response = publish(client, alice, "weather-tools", "1.0.0")
    assert response.status_code == 409
    assert len(client.get("/api/v1/packages/weather-tools/versions").json()["items"]) == 1


def test_invalid_publications_are_rejected(client: TestClient, alice, bob):
    create_entry(client, alice, "weather-tools")
    headers = auth_headers(alice)

    assert publish(client, alice, "weather-tools", "1.0").status_code == 400
    assert publish(client, bob, "weather-tools", "1.0.0").status_code == 403
    assert publish(client, alice, "missing", "1.0.0").status_code == 404

    response = client.post(
        "/api/v1/packages/weather-tools/versions",
        data={"version": "1.0.0"},
        files={"tarball": ("weather.zip", b"PK", "application/zip")},
        headers=headers,
    )
    assert response.status_code == 400

    response = client.post(
        "/api/v1/packages/weather-tools/versions",
        data={"version": "1.0.0", "authors": "not json"},
        files={"tarball": ("weather.tar.gz", make_tarball(), "application/gzip")},
        headers=headers,
    )
    assert response.status_code == 400

    response = publish(client, alice, "weather-tools", "1.0.0", data={"contributors": "ghost"})
    assert response.status_code == 400
    assert client.get("/api/v1/packages/weather-tools").json()["defaultVersion"] is None


def test_co_owner_cannot_publish(client: TestClient, alice, bob):
    create_entry(client, alice, "weather-tools")
    client.post("/api/v1/packages/weather-tools/owners", json={"userId": bob["id"]}, headers=auth_headers(alice))
    assert publish(client, bob, "weather-tools", "1.0.0").status_code == 403


def test_yank_uses_default_message_and_unyank_clears_it(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    publish(client, alice, "weather-tools", "1.0.0")
    headers = auth_headers(alice)
    url = "/api/v1/packages/weather-tools/versions/1.0.0"

    response = client.patch(url, json={"yankMessage": "too early"}, headers=headers)
    assert response.status_code == 400

    response = client.patch(url, json={"yanked": True}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["isYanked"] is True
    assert body["yankMessage"] == DEFAULT_YANK_MESSAGE
    assert body["yankedByUserId"] == alice["id"]
    assert body["yankedAt"] is not None

    response = client.patch(url, json={"yankMessage": "Security issue, use 1.0.1"}, headers=headers)
    assert response.json()["yankMessage"] == "Security issue, use 1.0.1"

    response = client.patch(url, json={"yanked": False}, headers=headers)
    body = response.json()
    assert body["isYanked"] is False
    assert body["yankMessage"] is None
    assert body["yankedAt"] is None

    actions = [audit["action"] for audit in client.get("/api/v1/packages/weather-tools").json()["audits"]]
    assert actions[:2] == ["unyank", "update"]
    assert "yank" in actions


def test_version_update_requires_publisher_who_is_primary_owner(client: TestClient, alice, bob):
    create_entry(client, alice, "weather-tools")
    publish(client, alice, "weather-tools", "1.0.0")
    url = "/api/v1/packages/weather-tools/versions/1.0.0"

    assert client.patch(url, json={"yanked": True}, headers=auth_headers(bob)).status_code == 403
    assert client.patch(url, json={"yanked": True}).status_code == 401

    # after a transfer the original publisher is only a co-owner
    client.post(
        "/api/v1/packages/weather-tools/transfer", json={"newOwnerId": bob["id"]}, headers=auth_headers(alice)
    )
    assert client.patch(url, json={"yanked": True}, headers=auth_headers(alice)).status_code == 403
    # the new primary owner did not publish it either
    assert client.patch(url, json={"yanked": True}, headers=auth_headers(bob)).status_code == 403


def test_download_counts_and_streams_artifact(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    publish(client, alice, "weather-tools", "1.0.0")
    url = "/api/v1/packages/weather-tools/versions/1.0.0/download"

    for _ in range(3):
        response = client.get(url)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/gzip"
        assert response.content == make_tarball(b"1.0.0")

    assert client.get("/api/v1/packages/weather-tools/versions/1.0.0").json()["downloads"] == 3
    listing = client.get("/api/v1/packages").json()["packages"]
    assert listing[0]["totalDownloads"] == 3
    assert client.get("/api/v1/stats").json()["downloads"] == 3


def test_download_of_missing_artifact_is_404_without_counting(client: TestClient, alice):
    from registry_api.storage import get_storage, tarball_path

    create_entry(client, alice, "weather-tools")
    publish(client, alice, "weather-tools", "1.0.0")
    storage = get_storage()
    storage.open_path(storage.artifact_bucket, tarball_path("weather-tools", "1.0.0")).unlink()

    response = client.get("/api/v1/packages/weather-tools/versions/1.0.0/download")
    assert response.status_code == 404
    assert client.get("/api/v1/packages/weather-tools/versions/1.0.0").json()["downloads"] == 0
    assert client.get("/api/v1/packages/weather-tools/versions/2.0.0/download").status_code == 404


def test_readme_published_with_version_is_served(client: TestClient, alice):
    create_entry(client, alice, "weather-tools")
    response = publish(client, alice, "weather-tools", "1.0.0", readme=b"# Weather tools\n")
    assert response.json()["readmeUrl"].endswith("/packages/weather-tools/1.0.0/README.md")

    response = client.get("/api/v1/packages/weather-tools/versions/1.0.0/readme")
    assert response.status_code == 200
    assert response.text == "# Weather tools\n"
    assert response.headers["content-type"].startswith("text/plain")

    assert client.get("/api/v1/packages/weather-tools/versions/1.0.0/changelog").status_code == 404


def test_changelog_upload_after_publication(client: TestClient, alice, bob):
    create_entry(client, alice, "weather-tools")
    publish(client, alice, "weather-tools", "1.0.0")
    url = "/api/v1/packages/weather-tools/versions/1.0.0/changelog"
    files = {"file": ("CHANGELOG.md", b"## 1.0.0\n- first release\n", "text/markdown")}

    assert client.put(url, files=files, headers=auth_headers(bob)).status_code == 403

    response = client.put(url, files=files, headers=auth_headers(alice))
    assert response.status_code == 200
    assert response.json()["changelogUrl"]
    assert client.get(url).text == "## 1.0.0\n- first release\n"

    response = client.put(
        url, files={"file": ("notes.txt", b"plain", "text/plain")}, headers=auth_headers(alice)
    )
    assert response.status_code == 400


def test_service_versions_use_service_routes(client: TestClient, alice):
    create_entry(client, alice, "sandbox-runner", kind="service", name="Sandbox Runner", type="sandbox")
    response = publish(client, alice, "sandbox-runner", "0.1.0", kind="service")
    assert response.status_code == 201
    assert response.json()["tarballUrl"] == "/api/v1/services/sandbox-runner/versions/0.1.0/download"
    assert client.get("/api/v1/services/sandbox-runner/versions/0.1.0/download").status_code == 200
    assert client.get("/api/v1/packages/sandbox-runner/versions").status_code == 404


def test_failed_artifact_upload_rolls_back_version(client: TestClient, alice, monkeypatch):
    from registry_api.errors import UpstreamError
    from registry_api.storage import ObjectStorage

    create_entry(client, alice, "weather-tools")

    def broken_upload(self, bucket, path, data, content_type):
        raise UpstreamError(f"disk full while writing {path}")

    monkeypatch.setattr(ObjectStorage, "upload", broken_upload)
    response = publish(client, alice, "weather-tools", "1.0.0")
    assert response.status_code == 500
    assert response.json()["message"] == "Internal server error"
    assert "disk full" not in response.text

    monkeypatch.undo()
    assert client.get("/api/v1/packages/weather-tools/versions").json()["items"] == []
    assert client.get("/api/v1/packages/weather-tools").json()["defaultVersion"] is None
    assert publish(client, alice, "weather-tools", "1.0.0").status_code == 201


def test_concurrent_download_increments_are_not_lost(client: TestClient, alice):
    from concurrent.futures import ThreadPoolExecutor

    from registry_api.repo.versions import increment_downloads

    create_entry(client, alice, "weather-tools")
    version_id = publish(client, alice, "weather-tools", "1.0.0").json()["id"]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: increment_downloads(version_id), range(40)))

    assert client.get("/api/v1/packages/weather-tools/versions/1.0.0").json()["downloads"] == 40


def _publish_bytes(client: TestClient, user: dict, entry_id: str, version: str, content: bytes):
    return client.post(
        f"/api/v1/packages/{entry_id}/versions",
        data={"version": version},
        files={"tarball": (f"{entry_id}.tar.gz", make_tarball(content), "application/gzip")},
        headers=auth_headers(user),
    )


def _assert_download_matches_digest(client: TestClient, entry_id: str, version: str) -> bytes:
    base = f"/api/v1/packages/{entry_id}/versions/{version}"
    digest = client.get(base).json()["digest"]
    response = client.get(f"{base}/download")
    assert response.status_code == 200
    assert f"sha256:{hashlib.sha256(response.content).hexdigest()}" == digest
    return response.content


def test_similar_entry_ids_keep_separate_artifacts(client: TestClient, alice):
    create_entry(client, alice, "foo")
    create_entry(client, alice, "foo-", name="foo-dash")
    assert _publish_bytes(client, alice, "foo", "1.0.0", b"foo release").status_code == 201
    assert _publish_bytes(client, alice, "foo-", "1.0.0", b"foo dash release").status_code == 201

    first = _assert_download_matches_digest(client, "foo", "1.0.0")
    second = _assert_download_matches_digest(client, "foo-", "1.0.0")
    assert first != second


def test_similar_versions_keep_separate_artifacts(client: TestClient, alice):
    create_entry(client, alice, "bar")
    assert _publish_bytes(client, alice, "bar", "1.0.0-rc", b"rc").status_code == 201
    assert _publish_bytes(client, alice, "bar", "1.0.0-rc-", b"rc dash").status_code == 201

    first = _assert_download_matches_digest(client, "bar", "1.0.0-rc")
    second = _assert_download_matches_digest(client, "bar", "1.0.0-rc-")
    assert first != second


def test_store_uniqueness_rejects_racing_duplicate(client: TestClient, alice, monkeypatch):
    from registry_api.services import versions_service

    create_entry(client, alice, "weather-tools")
    assert _publish_bytes(client, alice, "weather-tools", "1.0.0", b"winner").status_code == 201
    original = _assert_download_matches_digest(client, "weather-tools", "1.0.0")

    # skip the existence pre-check so only the unique constraint can catch it
    monkeypatch.setattr(versions_service, "get_version_record", lambda entry_id, version: None)
    response = _publish_bytes(client, alice, "weather-tools", "1.0.0", b"loser")
    assert response.status_code == 409
    assert response.json()["error"] == "conflict"

    monkeypatch.undo()
    assert _assert_download_matches_digest(client, "weather-tools", "1.0.0") == original
    assert len(client.get("/api/v1/packages/weather-tools/versions").json()["items"]) == 1


def test_tarballs_are_not_served_from_public_storage(client: TestClient, alice):
    from registry_api.storage import get_storage, readme_path, tarball_path

    create_entry(client, alice, "weather-tools")
    assert publish(client, alice, "weather-tools", "1.0.0", readme=b"# Weather\n").status_code == 201
    storage = get_storage()

    response = client.get(f"/storage/{storage.bucket}/{readme_path('weather-tools', '1.0.0')}")
    assert response.status_code == 200
    assert response.content == b"# Weather\n"

    artifact = tarball_path("weather-tools", "1.0.0")
    assert storage.exists(storage.artifact_bucket, artifact)
    assert client.get(f"/storage/{storage.bucket}/{artifact}").status_code == 404
    assert client.get(f"/storage/{storage.artifact_bucket}/{artifact}").status_code == 404
    assert client.get("/api/v1/packages/weather-tools/versions/1.0.0").json()["downloads"] == 0

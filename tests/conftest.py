import gzip
import io
import os
import shutil
import tempfile
from pathlib import Path

import pytest

_TMP_ROOT = Path(tempfile.mkdtemp(prefix="mcp-registry-tests-"))
_STORAGE_ROOT = _TMP_ROOT / "storage"

# must be set before registry_api is imported; settings and the engine are built at import time
os.environ["MCP_REGISTRY_DATABASE_URL"] = f"sqlite:///{(_TMP_ROOT / 'registry.db').as_posix()}"
os.environ["MCP_REGISTRY_STORAGE_ROOT"] = str(_STORAGE_ROOT)
os.environ["MCP_REGISTRY_AUTO_MIGRATE"] = "false"
os.environ["MCP_REGISTRY_ADMIN_USER_IDS"] = '["admin-1"]'
os.environ["MCP_REGISTRY_SESSION_SECRET"] = "test-session-secret"

from fastapi.testclient import TestClient  # noqa: E402

from registry_api.auth.identity_provider import issue_session_token  # noqa: E402
from registry_api.db.base import Base  # noqa: E402
from registry_api.db.session import engine  # noqa: E402
from registry_api.repo.accounts import create_user  # noqa: E402


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    _STORAGE_ROOT.mkdir(parents=True, exist_ok=True)
    yield
    Base.metadata.drop_all(bind=engine)
    shutil.rmtree(_STORAGE_ROOT, ignore_errors=True)


@pytest.fixture
def client() -> TestClient:
    from registry_api.app import app

    with TestClient(app) as test_client:
        yield test_client


def _make_user(user_id: str, username: str, display_name: str) -> dict:
    return create_user(
        user_id=user_id,
        username=username,
        email=f"{username}@example.com",
        display_name=display_name,
    )


@pytest.fixture
def alice() -> dict:
    return _make_user("user-alice", "alice", "Alice Liddell")


@pytest.fixture
def bob() -> dict:
    return _make_user("user-bob", "bob", "Bob Builder")


@pytest.fixture
def carol() -> dict:
    return _make_user("user-carol", "carol", "Carol Danvers")


@pytest.fixture
def admin() -> dict:
    return _make_user("admin-1", "moderator", "Registry Moderator")


def auth_headers(user: dict) -> dict[str, str]:
    token, _ = issue_session_token(
        user_id=user["id"],
        username=user["username"],
        email=user.get("email"),
        display_name=user.get("displayName"),
    )
    return {"Authorization": f"Bearer {token}"}


def make_tarball(content: bytes = b"package contents") -> bytes:
    buffer = io.BytesIO()
    with gzip.GzipFile(fileobj=buffer, mode="wb") as handle:
        handle.write(content)
    return buffer.getvalue()


def create_entry(client: TestClient, user: dict, entry_id: str, kind: str = "package", **extra) -> dict:
    payload = {"id": entry_id, "name": extra.pop("name", entry_id)}
    if kind == "package":
        payload["categories"] = extra.pop("categories", ["server"])
    else:
        payload["type"] = extra.pop("type", "server")
    payload.update(extra)
    response = client.post(f"/api/v1/{kind}s", json=payload, headers=auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()


def publish(
    client: TestClient,
    user: dict,
    entry_id: str,
    version: str,
    kind: str = "package",
    *,
    readme: bytes | None = None,
    data: dict | None = None,
):
    files = {"tarball": (f"{entry_id}.tar.gz", make_tarball(version.encode()), "application/gzip")}
    if readme is not None:
        files["readme"] = ("README.md", readme, "text/markdown")
    return client.post(
        f"/api/v1/{kind}s/{entry_id}/versions",
        data={"version": version, **(data or {})},
        files=files,
        headers=auth_headers(user),
    )

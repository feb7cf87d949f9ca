"""Object storage for registry artifacts (tarballs, READMEs, changelogs).

Objects live on the local filesystem under ``<storage_root>/<bucket>/<path>``.
Documents go to the public bucket, published below ``storage_public_url``;
tarballs go to the artifact bucket, which is only reachable through the
download route. Writes replace any existing object at the same path.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path, PurePosixPath
from typing import Optional

import requests

from registry_api.config.settings import RegistrySettings, get_settings
from registry_api.errors import UpstreamError

LOGGER = logging.getLogger(__name__)

_SAFE_PATTERN = re.compile(r"[^A-Za-z0-9._@+-]+")
_FORBIDDEN_COMPONENTS = ("", ".", "..")
_FETCH_TIMEOUT_SECONDS = 10


def _safe_component(value: str) -> str:
    cleaned = _SAFE_PATTERN.sub("_", value.strip())
    cleaned = cleaned.strip("._-")
    return cleaned or "artifact"


def _path_component(value: str) -> str:
    """Use ``value`` verbatim as one path segment; distinct inputs never share a path."""
    if value in _FORBIDDEN_COMPONENTS or "/" in value or "\\" in value:
        raise ValueError(f"invalid path component: {value!r}")
    return value


def version_prefix(entry_id: str, version: str) -> str:
    return str(PurePosixPath("packages") / _path_component(entry_id) / _path_component(version))


def readme_path(entry_id: str, version: str) -> str:
    return f"{version_prefix(entry_id, version)}/README.md"


def changelog_path(entry_id: str, version: str) -> str:
    return f"{version_prefix(entry_id, version)}/CHANGELOG.md"


def tarball_path(entry_id: str, version: str) -> str:
    filename = f"{_path_component(entry_id)}@{_path_component(version)}.tar.gz"
    return f"{version_prefix(entry_id, version)}/{filename}"


class ObjectStorage:
    def __init__(self, settings: Optional[RegistrySettings] = None) -> None:
        self._settings = settings or get_settings()

    @property
    def root(self) -> Path:
        root = self._settings.resolved_storage_root()
        root.mkdir(parents=True, exist_ok=True)
        return root

    @property
    def bucket(self) -> str:
        return self._settings.storage_bucket

    @property
    def artifact_bucket(self) -> str:
        return self._settings.storage_artifact_bucket

    def bucket_root(self, bucket: str) -> Path:
        path = self.root / _safe_component(bucket)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _object_path(self, bucket: str, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"invalid object path: {path}")
        return self.root / _safe_component(bucket) / Path(*relative.parts)

    def public_url(self, bucket: str, path: str) -> str:
        base = self._settings.storage_public_url.rstrip("/")
        return f"{base}/{bucket}/{path}"

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` and return its public URL."""
        target = self._object_path(bucket, path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".upload-")
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, target)
        except OSError as exc:
            LOGGER.exception("Failed to store object %s/%s", bucket, path)
            raise UpstreamError(f"storage write failed for {bucket}/{path}") from exc
        LOGGER.debug("Stored %s/%s (%d bytes, %s)", bucket, path, len(data), content_type)
        return self.public_url(bucket, path)

    def exists(self, bucket: str, path: str) -> bool:
        try:
            return self._object_path(bucket, path).is_file()
        except ValueError:
            return False

    def open_path(self, bucket: str, path: str) -> Path:
        return self._object_path(bucket, path)

    def read(self, bucket: str, path: str) -> Optional[bytes]:
        target = self._object_path(bucket, path)
        if not target.is_file():
            return None
        try:
            return target.read_bytes()
        except OSError as exc:
            LOGGER.exception("Failed to read object %s/%s", bucket, path)
            raise UpstreamError(f"storage read failed for {bucket}/{path}") from exc

    def _local_location(self, url: str) -> Optional[tuple[str, str]]:
        base = self._settings.storage_public_url.rstrip("/") + "/"
        if not url.startswith(base):
            return None
        bucket, _, path = url[len(base):].partition("/")
        if not bucket or not path:
            return None
        return bucket, path

    def read_url(self, url: str) -> Optional[bytes]:
        """Fetch an object by public URL; ``None`` when it does not exist."""
        location = self._local_location(url)
        if location is not None:
            return self.read(*location)
        try:
            response = requests.get(url, timeout=_FETCH_TIMEOUT_SECONDS)
        except requests.RequestException as exc:
            LOGGER.exception("Failed to fetch %s", url)
            raise UpstreamError(f"fetch failed for {url}") from exc
        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            LOGGER.error("Fetching %s returned HTTP %s", url, response.status_code)
            raise UpstreamError(f"fetch failed for {url}: HTTP {response.status_code}")
        return response.content


_storage: Optional[ObjectStorage] = None


def get_storage() -> ObjectStorage:
    global _storage
    if _storage is None:
        _storage = ObjectStorage()
    return _storage


__all__ = [
    "ObjectStorage",
    "changelog_path",
    "get_storage",
    "readme_path",
    "tarball_path",
    "version_prefix",
]

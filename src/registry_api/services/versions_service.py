from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Optional
from urllib.parse import urlparse

from fastapi import UploadFile
from fastapi.responses import FileResponse, PlainTextResponse

from registry_api.catalog import semver
from registry_api.config.settings import get_settings
from registry_api.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from registry_api.models.version_detail import VersionDetail
from registry_api.models.version_list import VersionList
from registry_api.models.version_update_request import VersionUpdateRequest
from registry_api.repo.audit import record_audit
from registry_api.repo.entries import get_entry_record
from registry_api.repo.versions import (
    create_version,
    discard_version,
    get_version_record,
    increment_downloads,
    list_versions,
    set_yank_state,
    update_version,
)
from registry_api.security_api import require_actor
from registry_api.services import permissions
from registry_api.storage import changelog_path, get_storage, readme_path, tarball_path

LOGGER = logging.getLogger(__name__)

DEFAULT_YANK_MESSAGE = "This version has been yanked and is no longer recommended for use."
MARKDOWN_CONTENT_TYPES = ("text/markdown", "text/x-markdown")
TARBALL_CONTENT_TYPES = ("application/gzip", "application/x-gzip", "application/tar+gzip")
DOCUMENTS = ("readme", "changelog")


def _collection(kind: str) -> str:
    return f"{kind}s"


def version_payload(kind: str, record: dict[str, Any]) -> dict[str, Any]:
    payload = dict(record)
    if record.get("tarball"):
        payload["tarballUrl"] = (
            f"/api/v1/{_collection(kind)}/{record['entryId']}/versions/{record['version']}/download"
        )
    return payload


def _entry_or_404(kind: str, entry_id: str) -> dict[str, Any]:
    entry = get_entry_record(entry_id, kind)
    if not entry:
        raise NotFoundError(f"{kind.capitalize()} '{entry_id}' not found.")
    return entry


def _version_or_404(entry_id: str, version: str) -> dict[str, Any]:
    record = get_version_record(entry_id, version)
    if not record:
        raise NotFoundError(f"Version '{version}' of '{entry_id}' not found.")
    return record


def _content_type(upload: UploadFile) -> str:
    return (upload.content_type or "").split(";")[0].strip().lower()


async def _read_upload(
    upload: UploadFile,
    *,
    field: str,
    allowed_types: tuple[str, ...],
    max_bytes: int,
) -> bytes:
    content_type = _content_type(upload)
    if content_type not in allowed_types:
        raise ValidationError(
            f"Unsupported content type for {field}: {content_type or 'unknown'}.",
            issues=[{"path": field, "message": f"Expected one of: {', '.join(allowed_types)}."}],
        )
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ValidationError(
            f"{field} exceeds the {max_bytes} byte limit.",
            issues=[{"path": field, "message": f"At most {max_bytes} bytes."}],
        )
    if not data:
        raise ValidationError(f"{field} is empty.", issues=[{"path": field, "message": "Empty file."}])
    return data


def _parse_authors(raw: Optional[str]) -> list[str]:
    if raw is None or not raw.strip():
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(
            "authors must be a JSON list of strings.",
            issues=[{"path": "authors", "message": "Invalid JSON."}],
        ) from exc
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError(
            "authors must be a JSON list of strings.",
            issues=[{"path": "authors", "message": "Expected a list of strings."}],
        )
    return [item.strip() for item in value if item.strip()]


def _parse_contributors(values: Optional[list[str]]) -> list[str]:
    result: list[str] = []
    for value in values or []:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return list(dict.fromkeys(result))


def _validate_document_url(value: str, field: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(
            f"{field} must be an http(s) URL.",
            issues=[{"path": field, "message": "Must be an http(s) URL."}],
        )
    return value


def _require_version_update(entry: dict[str, Any], record: dict[str, Any], actor_id: str) -> None:
    if not permissions.can_update_version(entry, record, actor_id):
        raise AuthorizationError(
            "Only the publisher of this version, as primary owner, can modify it."
        )


class VersionsService:
    async def list_versions(self, kind: str, entry_id: str) -> VersionList:
        _entry_or_404(kind, entry_id)
        items = [version_payload(kind, record) for record in list_versions(entry_id)]
        return VersionList.from_dict({"items": items})

    async def get_version(self, kind: str, entry_id: str, version: str) -> VersionDetail:
        _entry_or_404(kind, entry_id)
        return VersionDetail.from_dict(version_payload(kind, _version_or_404(entry_id, version)))

    async def create_version(
        self,
        kind: str,
        entry_id: str,
        version: str,
        license: Optional[str],
        authors: Optional[str],
        contributors: Optional[list[str]],
        tarball: Optional[UploadFile],
        readme: Optional[UploadFile],
        changelog: Optional[UploadFile],
    ) -> VersionDetail:
        actor_id = require_actor()
        settings = get_settings()
        entry = _entry_or_404(kind, entry_id)
        if not permissions.can_create_version(entry, actor_id):
            raise AuthorizationError("Only the primary owner can publish versions.")

        version = (version or "").strip()
        try:
            parsed = semver.parse(version)
        except semver.InvalidVersion as exc:
            raise ValidationError(
                f"'{version}' is not a valid semantic version.",
                issues=[{"path": "version", "message": "Invalid semantic version."}],
            ) from exc
        if tarball is None:
            raise ValidationError(
                "A tarball is required.",
                issues=[{"path": "tarball", "message": "Required."}],
            )
        author_list = _parse_authors(authors)
        contributor_ids = _parse_contributors(contributors)
        tarball_bytes = await _read_upload(
            tarball,
            field="tarball",
            allowed_types=TARBALL_CONTENT_TYPES,
            max_bytes=settings.max_tarball_bytes,
        )
        readme_bytes = None
        if readme is not None:
            readme_bytes = await _read_upload(
                readme,
                field="readme",
                allowed_types=MARKDOWN_CONTENT_TYPES,
                max_bytes=settings.max_readme_bytes,
            )
        changelog_bytes = None
        if changelog is not None:
            changelog_bytes = await _read_upload(
                changelog,
                field="changelog",
                allowed_types=MARKDOWN_CONTENT_TYPES,
                max_bytes=settings.max_changelog_bytes,
            )
        if get_version_record(entry_id, version):
            raise ConflictError(f"Version '{version}' of '{entry_id}' already exists.")

        storage = get_storage()
        bucket = storage.bucket
        artifact_path = tarball_path(entry_id, version)
        try:
            record = create_version(
                entry_id=entry_id,
                version=version,
                publisher_id=actor_id,
                is_stable=parsed.is_stable,
                size=len(tarball_bytes),
                license=(license or "").strip() or None,
                authors=author_list,
                contributor_ids=contributor_ids,
                digest=f"sha256:{hashlib.sha256(tarball_bytes).hexdigest()}",
                tarball=artifact_path,
                readme_url=storage.public_url(bucket, readme_path(entry_id, version)) if readme_bytes else None,
                changelog_url=storage.public_url(bucket, changelog_path(entry_id, version)) if changelog_bytes else None,
            )
        except ValueError as exc:
            if str(exc) == "version_exists":
                raise ConflictError(f"Version '{version}' of '{entry_id}' already exists.") from exc
            if str(exc) == "contributor_not_found":
                raise ValidationError(
                    "Unknown contributor.",
                    issues=[{"path": "contributors", "message": "Every contributor must be a registered user."}],
                ) from exc
            raise

        # a version whose artifacts could not be stored is rolled back
        try:
            storage.upload(storage.artifact_bucket, artifact_path, tarball_bytes, _content_type(tarball))
            if readme_bytes:
                storage.upload(bucket, readme_path(entry_id, version), readme_bytes, "text/markdown")
            if changelog_bytes:
                storage.upload(bucket, changelog_path(entry_id, version), changelog_bytes, "text/markdown")
        except UpstreamError:
            discard_version(record["id"])
            raise

        record_audit(
            action="publish",
            user_id=actor_id,
            entry_id=entry_id,
            version_id=record["id"],
            metadata={"version": version},
        )
        LOGGER.info("Published %s %s@%s by %s", kind, entry_id, version, actor_id)
        return VersionDetail.from_dict(version_payload(kind, record))

    async def update_version(
        self,
        kind: str,
        entry_id: str,
        version: str,
        request: VersionUpdateRequest,
    ) -> VersionDetail:
        actor_id = require_actor()
        if request is None:
            raise ValidationError("Payload is required.")
        entry = _entry_or_404(kind, entry_id)
        record = _version_or_404(entry_id, version)
        _require_version_update(entry, record, actor_id)

        fields = request.model_fields_set
        changes: dict[str, Any] = {}
        if "readme" in fields:
            changes["readme_url"] = (
                _validate_document_url(request.readme, "readme") if request.readme else None
            )
        if "changelog" in fields:
            changes["changelog_url"] = (
                _validate_document_url(request.changelog, "changelog") if request.changelog else None
            )

        yank_action = None
        wants_yank = request.yanked if "yanked" in fields else None
        if wants_yank is True and not record["isYanked"]:
            yank_action = "yank"
        elif wants_yank is False and record["isYanked"]:
            yank_action = "unyank"
        elif "yank_message" in fields and wants_yank is not False:
            if not record["isYanked"]:
                raise ValidationError(
                    "A yank message can only be set on a yanked version.",
                    issues=[{"path": "yankMessage", "message": "Version is not yanked."}],
                )
            changes["yank_message"] = request.yank_message or DEFAULT_YANK_MESSAGE

        if yank_action == "yank":
            record = set_yank_state(
                record["id"],
                yanked=True,
                message=request.yank_message or DEFAULT_YANK_MESSAGE,
                actor_id=actor_id,
            )
        elif yank_action == "unyank":
            record = set_yank_state(record["id"], yanked=False, message=None, actor_id=actor_id)
        if changes:
            record = update_version(record["id"], changes)

        if yank_action:
            record_audit(
                action=yank_action,
                user_id=actor_id,
                entry_id=entry_id,
                version_id=record["id"],
                metadata={"version": version, "message": record.get("yankMessage")},
            )
            LOGGER.info("%s %s@%s %sed by %s", kind, entry_id, version, yank_action, actor_id)
        if changes:
            record_audit(
                action="update",
                user_id=actor_id,
                entry_id=entry_id,
                version_id=record["id"],
                metadata={"version": version, "fields": sorted(changes)},
            )
        return VersionDetail.from_dict(version_payload(kind, record))

    async def upload_document(
        self,
        kind: str,
        entry_id: str,
        version: str,
        document: str,
        file: Optional[UploadFile],
    ) -> VersionDetail:
        actor_id = require_actor()
        settings = get_settings()
        entry = _entry_or_404(kind, entry_id)
        record = _version_or_404(entry_id, version)
        _require_version_update(entry, record, actor_id)
        if file is None:
            raise ValidationError(
                f"A {document} file is required.",
                issues=[{"path": document, "message": "Required."}],
            )
        max_bytes = settings.max_readme_bytes if document == "readme" else settings.max_changelog_bytes
        data = await _read_upload(
            file, field=document, allowed_types=MARKDOWN_CONTENT_TYPES, max_bytes=max_bytes
        )
        storage = get_storage()
        path = readme_path(entry_id, version) if document == "readme" else changelog_path(entry_id, version)
        url = storage.upload(storage.bucket, path, data, "text/markdown")
        record = update_version(record["id"], {f"{document}_url": url})
        record_audit(
            action="update",
            user_id=actor_id,
            entry_id=entry_id,
            version_id=record["id"],
            metadata={"version": version, "fields": [f"{document}_url"]},
        )
        return VersionDetail.from_dict(version_payload(kind, record))

    async def get_document(
        self, kind: str, entry_id: str, version: str, document: str
    ) -> PlainTextResponse:
        _entry_or_404(kind, entry_id)
        record = _version_or_404(entry_id, version)
        url = record.get(f"{document}Url")
        label = "README" if document == "readme" else "Changelog"
        if not url:
            raise NotFoundError(f"{label} not found for {entry_id}@{version}.")
        content = get_storage().read_url(url)
        if content is None:
            raise NotFoundError(f"{label} not found for {entry_id}@{version}.")
        return PlainTextResponse(content.decode("utf-8", errors="replace"))

    async def download(self, kind: str, entry_id: str, version: str) -> FileResponse:
        _entry_or_404(kind, entry_id)
        record = _version_or_404(entry_id, version)
        storage = get_storage()
        artifact = record.get("tarball")
        if not artifact or not storage.exists(storage.artifact_bucket, artifact):
            raise NotFoundError(f"Artifact for {entry_id}@{version} not found.")
        increment_downloads(record["id"])
        return FileResponse(
            storage.open_path(storage.artifact_bucket, artifact),
            media_type="application/gzip",
            filename=f"{entry_id}@{version}.tar.gz",
        )

from __future__ import annotations

import logging
import re
from typing import Any, Optional
from urllib.parse import urlparse

from registry_api.catalog.query import CATEGORIES, CatalogQuery, pagination
from registry_api.config.settings import get_settings
from registry_api.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from registry_api.models.entry_create_request import EntryCreateRequest
from registry_api.models.entry_detail import EntryDetail
from registry_api.models.entry_update_request import EntryUpdateRequest
from registry_api.models.owner_add_request import OwnerAddRequest
from registry_api.models.owner_list import OwnerList
from registry_api.models.ownership_transfer_request import OwnershipTransferRequest
from registry_api.models.package_list_response import PackageListResponse
from registry_api.models.service_list_response import ServiceListResponse
from registry_api.repo.accounts import get_user, get_users
from registry_api.repo.audit import count_audits, list_audits, record_audit
from registry_api.repo.catalog import count_contributors, list_entries, summarize_entry
from registry_api.repo.entries import (
    add_owner,
    create_entry,
    delete_entry,
    get_entry_record,
    remove_owner,
    transfer_entry,
    update_entry,
)
from registry_api.repo.versions import get_version_record, list_versions
from registry_api.security_api import is_admin, require_actor
from registry_api.services import permissions
from registry_api.services.versions_service import version_payload

LOGGER = logging.getLogger(__name__)

PACKAGE_NAME_PATTERN = re.compile(r"^[a-z](?:[a-z0-9_-]{0,62}[a-z0-9])?$")
MAX_PACKAGE_KEYWORDS = 5
_PLAIN_FIELDS = ("name", "description", "homepage", "repository", "keywords", "categories", "type")


def _issue(path: str, message: str) -> dict[str, str]:
    return {"path": path, "message": message}


def _validate_url(value: Optional[str], field: str, issues: list[dict[str, str]]) -> Optional[str]:
    if value is None or value == "":
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        issues.append(_issue(field, "Must be an http(s) URL."))
    return value


def _normalize_keywords(
    kind: str, keywords: Optional[list[str]], issues: list[dict[str, str]]
) -> list[str]:
    values = list(dict.fromkeys(item.strip() for item in keywords or [] if item.strip()))
    if kind == "package" and len(values) > MAX_PACKAGE_KEYWORDS:
        issues.append(_issue("keywords", f"At most {MAX_PACKAGE_KEYWORDS} keywords are allowed."))
    return values


def _resolve_categories(
    kind: str,
    categories: Optional[list[str]],
    type_value: Optional[str],
    issues: list[dict[str, str]],
) -> list[str]:
    if kind == "service":
        if not type_value:
            issues.append(_issue("type", "Service type is required."))
            return []
        if type_value not in CATEGORIES:
            issues.append(_issue("type", f"Must be one of: {', '.join(CATEGORIES)}."))
        return [type_value]
    values = list(dict.fromkeys(categories or []))
    if not values:
        issues.append(_issue("categories", "At least one category is required."))
    for value in values:
        if value not in CATEGORIES:
            issues.append(_issue("categories", f"Unknown category: {value}."))
    return values


def _validate_name(kind: str, name: str, issues: list[dict[str, str]]) -> str:
    if kind == "package" and not PACKAGE_NAME_PATTERN.match(name):
        issues.append(
            _issue("name", "Package names are lowercase letters, digits, '-' or '_', starting with a letter.")
        )
    return name


def _raise_issues(issues: list[dict[str, str]]) -> None:
    if issues:
        raise ValidationError("Invalid request.", issues=issues)


def _entry_or_404(kind: str, entry_id: str) -> dict[str, Any]:
    entry = get_entry_record(entry_id, kind)
    if not entry:
        raise NotFoundError(f"{kind.capitalize()} '{entry_id}' not found.")
    return entry


def _summary_payload(record: dict[str, Any]) -> dict[str, Any]:
    payload = dict(record)
    payload["type"] = (record.get("categories") or [None])[0] if record.get("kind") == "service" else None
    return payload


class CatalogService:
    async def list_entries(
        self,
        kind: str,
        q: Optional[str],
        sort: Optional[str],
        verified: Optional[str],
        type: Optional[str],
        owner: Optional[str],
        contributor: Optional[str],
        page: Optional[str],
        limit: Optional[str],
    ) -> PackageListResponse | ServiceListResponse:
        settings = get_settings()
        query = CatalogQuery.from_params(
            kind,
            q=q,
            sort=sort,
            verified=verified,
            category=type,
            owner=owner,
            contributor=contributor,
            page=page,
            limit=limit,
            default_limit=settings.default_page_size,
            max_limit=settings.max_page_size,
        )
        records, total = list_entries(query)
        payload = {
            "pagination": pagination(query, total),
            "filters": query.echo(),
        }
        items = [_summary_payload(record) for record in records]
        if kind == "service":
            return ServiceListResponse.from_dict({**payload, "services": items})
        return PackageListResponse.from_dict({**payload, "packages": items})

    async def create_entry(self, kind: str, request: EntryCreateRequest) -> EntryDetail:
        actor_id = require_actor()
        if request is None:
            raise ValidationError("Payload is required.")
        issues: list[dict[str, str]] = []
        name = _validate_name(kind, request.name.strip(), issues)
        categories = _resolve_categories(kind, request.categories, request.type, issues)
        keywords = _normalize_keywords(kind, request.keywords, issues)
        homepage = _validate_url(request.homepage, "homepage", issues)
        repository = _validate_url(request.repository, "repository", issues)
        _raise_issues(issues)
        try:
            create_entry(
                entry_id=request.id,
                kind=kind,
                name=name,
                categories=categories,
                keywords=keywords,
                description=request.description,
                homepage=homepage,
                repository=repository,
                primary_owner_id=actor_id,
            )
        except ValueError as exc:
            if str(exc) == "entry_exists":
                raise ConflictError(
                    f"An entry with id '{request.id}' or name '{name}' already exists."
                ) from exc
            raise
        LOGGER.info("%s %s created by %s", kind, request.id, actor_id)
        return await self.get_entry(kind, request.id)

    async def get_entry(self, kind: str, entry_id: str) -> EntryDetail:
        entry = _entry_or_404(kind, entry_id)
        summary = summarize_entry(entry_id) or {}
        versions = [version_payload(kind, record) for record in list_versions(entry_id)]
        users = get_users([entry["primaryOwnerId"], *entry["ownerIds"]])
        default_data = next(
            (item for item in versions if item["id"] == entry["defaultVersionId"]), None
        )
        payload = _summary_payload(summary)
        payload.update(
            {
                "primaryOwner": users.get(entry["primaryOwnerId"]),
                "secondaryOwners": [users[uid] for uid in entry["ownerIds"] if uid in users],
                "versions": versions,
                "audits": list_audits(entry_id),
                "defaultVersionData": default_data,
                "stats": {
                    "totalVersions": len(versions),
                    "totalDownloads": summary.get("totalDownloads", 0),
                    "latestVersion": versions[0]["version"] if versions else None,
                    "yankedVersions": sum(1 for item in versions if item["isYanked"]),
                    "totalOwners": 1 + len(entry["ownerIds"]),
                    "totalContributors": count_contributors(entry_id),
                    "totalAudits": count_audits(entry_id),
                },
            }
        )
        return EntryDetail.from_dict(payload)

    async def update_entry(
        self, kind: str, entry_id: str, request: EntryUpdateRequest
    ) -> EntryDetail:
        actor_id = require_actor()
        if request is None:
            raise ValidationError("Payload is required.")
        entry = _entry_or_404(kind, entry_id)
        fields = request.model_fields_set
        admin = is_admin()

        if "is_verified" in fields and not permissions.can_verify_entry(is_admin=admin):
            raise AuthorizationError("Only registry administrators can change verification.")
        if fields & {"is_deprecated", "deprecation_message"} and not permissions.can_deprecate_entry(
            entry, actor_id, is_admin=admin
        ):
            raise AuthorizationError("Only owners can deprecate this entry.")
        if fields & set(_PLAIN_FIELDS) and not permissions.can_update_entry(entry, actor_id):
            raise AuthorizationError("Only owners can update this entry.")

        target_version = None
        if "default_version" in fields:
            if not permissions.is_owner(entry, actor_id):
                raise AuthorizationError("Only owners can change the default version.")
            if request.default_version is not None:
                target_version = get_version_record(entry_id, request.default_version)
                if not permissions.can_set_default_version(entry, actor_id, target_version):
                    raise ValidationError(
                        f"Version '{request.default_version}' does not exist for '{entry_id}'.",
                        issues=[_issue("defaultVersion", "Unknown version.")],
                    )

        issues: list[dict[str, str]] = []
        changes: dict[str, Any] = {}
        if "name" in fields and request.name is not None:
            changes["name"] = _validate_name(kind, request.name.strip(), issues)
        if "description" in fields:
            changes["description"] = request.description
        if "homepage" in fields:
            changes["homepage"] = _validate_url(request.homepage, "homepage", issues)
        if "repository" in fields:
            changes["repository"] = _validate_url(request.repository, "repository", issues)
        if "keywords" in fields:
            changes["keywords"] = _normalize_keywords(kind, request.keywords, issues)
        if fields & {"categories", "type"}:
            changes["categories"] = _resolve_categories(
                kind, request.categories, request.type, issues
            )
        if "default_version" in fields:
            changes["default_version_id"] = target_version["id"] if target_version else None
        if "is_verified" in fields and request.is_verified is not None:
            changes["is_verified"] = request.is_verified
        if "is_deprecated" in fields and request.is_deprecated is not None:
            changes["is_deprecated"] = request.is_deprecated
            if request.is_deprecated:
                message = request.deprecation_message or entry.get("deprecationMessage")
                if not message or not message.strip():
                    issues.append(
                        _issue("deprecationMessage", "A deprecated entry needs a deprecation message.")
                    )
                changes["deprecation_message"] = message
            else:
                changes["deprecation_message"] = None
        elif "deprecation_message" in fields:
            if entry["isDeprecated"] and not (request.deprecation_message or "").strip():
                issues.append(
                    _issue("deprecationMessage", "A deprecated entry needs a deprecation message.")
                )
            changes["deprecation_message"] = request.deprecation_message
        _raise_issues(issues)

        if changes:
            try:
                update_entry(entry_id, changes)
            except ValueError as exc:
                if str(exc) == "entry_exists":
                    raise ConflictError(f"Name '{changes.get('name')}' is already taken.") from exc
                raise
        self._audit_entry_update(entry, changes, actor_id)
        return await self.get_entry(kind, entry_id)

    def _audit_entry_update(
        self, entry: dict[str, Any], changes: dict[str, Any], actor_id: str
    ) -> None:
        entry_id = entry["id"]
        if "is_verified" in changes and changes["is_verified"] != entry["isVerified"]:
            record_audit(
                action="verify" if changes["is_verified"] else "unverify",
                user_id=actor_id,
                entry_id=entry_id,
            )
        if "is_deprecated" in changes and changes["is_deprecated"] != entry["isDeprecated"]:
            record_audit(
                action="deprecate" if changes["is_deprecated"] else "undeprecate",
                user_id=actor_id,
                entry_id=entry_id,
                metadata={"message": changes.get("deprecation_message")},
            )
        updated = sorted(
            field
            for field in changes
            if field not in {"is_verified", "is_deprecated", "deprecation_message"}
        )
        if updated:
            record_audit(
                action="update",
                user_id=actor_id,
                entry_id=entry_id,
                metadata={"fields": updated},
            )

    async def delete_entry(self, kind: str, entry_id: str) -> None:
        actor_id = require_actor()
        entry = _entry_or_404(kind, entry_id)
        if not permissions.can_delete_entry(entry, actor_id):
            raise AuthorizationError("Only the primary owner can delete this entry.")
        delete_entry(entry_id)
        LOGGER.info("%s %s deleted by %s", kind, entry_id, actor_id)
        return None

    async def transfer_entry(
        self, kind: str, entry_id: str, request: OwnershipTransferRequest
    ) -> EntryDetail:
        actor_id = require_actor()
        if request is None:
            raise ValidationError("Payload is required.")
        entry = _entry_or_404(kind, entry_id)
        if not permissions.can_transfer_entry(entry, actor_id, is_admin=is_admin()):
            raise AuthorizationError("Only the primary owner can transfer this entry.")
        if not get_user(request.new_owner_id):
            raise NotFoundError(f"User '{request.new_owner_id}' not found.")
        if request.new_owner_id != entry["primaryOwnerId"]:
            transfer_entry(entry_id, request.new_owner_id)
            record_audit(
                action="transfer_ownership",
                user_id=actor_id,
                entry_id=entry_id,
                metadata={"from": entry["primaryOwnerId"], "to": request.new_owner_id},
            )
            LOGGER.info(
                "%s %s transferred from %s to %s",
                kind,
                entry_id,
                entry["primaryOwnerId"],
                request.new_owner_id,
            )
        return await self.get_entry(kind, entry_id)

    async def list_owners(self, kind: str, entry_id: str) -> OwnerList:
        entry = _entry_or_404(kind, entry_id)
        users = get_users([entry["primaryOwnerId"], *entry["ownerIds"]])
        return OwnerList.from_dict(
            {
                "primaryOwner": users.get(entry["primaryOwnerId"]),
                "items": [users[uid] for uid in entry["ownerIds"] if uid in users],
            }
        )

    async def add_owner(self, kind: str, entry_id: str, request: OwnerAddRequest) -> OwnerList:
        actor_id = require_actor()
        if request is None:
            raise ValidationError("Payload is required.")
        entry = _entry_or_404(kind, entry_id)
        if not permissions.can_manage_owners(entry, actor_id):
            raise AuthorizationError("Only owners can add owners.")
        if not get_user(request.user_id):
            raise NotFoundError(f"User '{request.user_id}' not found.")
        if permissions.is_owner(entry, request.user_id):
            raise ConflictError(f"User '{request.user_id}' is already an owner.")
        try:
            add_owner(entry_id, request.user_id)
        except ValueError as exc:
            raise ConflictError(f"User '{request.user_id}' is already an owner.") from exc
        return await self.list_owners(kind, entry_id)

    async def remove_owner(self, kind: str, entry_id: str, user_id: str) -> None:
        actor_id = require_actor()
        entry = _entry_or_404(kind, entry_id)
        if not permissions.can_manage_owners(entry, actor_id):
            raise AuthorizationError("Only owners can remove owners.")
        if permissions.is_primary_owner(entry, user_id):
            raise ValidationError("The primary owner cannot be removed; transfer ownership first.")
        try:
            remove_owner(entry_id, user_id)
        except ValueError as exc:
            raise NotFoundError(f"User '{user_id}' is not an owner of '{entry_id}'.") from exc
        return None

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from registry_api.db.models import (
    RegistryEntry,
    RegistryUser,
    RegistryVersion,
    RegistryVersionContributor,
)
from registry_api.db.session import SessionLocal
from registry_api.repo.common import _as_utc, _generate_id, _now


def _version_from_model(
    version: RegistryVersion, contributor_ids: list[str] | None = None
) -> dict[str, Any]:
    return {
        "id": version.id,
        "entryId": version.entry_id,
        "version": version.version,
        "publisherId": version.publisher_id,
        "isStable": bool(version.is_stable),
        "size": int(version.size or 0),
        "license": version.license,
        "authors": list(version.authors or []),
        "contributors": contributor_ids or [],
        "readmeUrl": version.readme_url,
        "changelogUrl": version.changelog_url,
        "digest": version.digest,
        "tarball": version.tarball,
        "downloads": int(version.downloads or 0),
        "isYanked": bool(version.is_yanked),
        "yankMessage": version.yank_message,
        "yankedAt": _as_utc(version.yanked_at),
        "yankedByUserId": version.yanked_by_user_id,
        "createdAt": _as_utc(version.created_at),
        "updatedAt": _as_utc(version.updated_at),
    }


def _contributors_by_version(session, version_ids: list[str]) -> dict[str, list[str]]:
    if not version_ids:
        return {}
    rows = session.execute(
        select(RegistryVersionContributor.version_id, RegistryVersionContributor.user_id)
        .where(RegistryVersionContributor.version_id.in_(version_ids))
        .order_by(RegistryVersionContributor.created_at, RegistryVersionContributor.user_id)
    ).all()
    result: dict[str, list[str]] = {}
    for version_id, user_id in rows:
        result.setdefault(version_id, []).append(user_id)
    return result


def list_versions(entry_id: str) -> list[dict[str, Any]]:
    """Versions of an entry, newest first."""
    with SessionLocal() as session:
        versions = session.execute(
            select(RegistryVersion)
            .where(RegistryVersion.entry_id == entry_id)
            .order_by(RegistryVersion.created_at.desc(), RegistryVersion.id.desc())
        ).scalars().all()
        contributors = _contributors_by_version(session, [item.id for item in versions])
        return [_version_from_model(item, contributors.get(item.id)) for item in versions]


def get_version_record(entry_id: str, version: str) -> Optional[dict[str, Any]]:
    with SessionLocal() as session:
        record = session.execute(
            select(RegistryVersion).where(
                RegistryVersion.entry_id == entry_id,
                RegistryVersion.version == version,
            )
        ).scalar_one_or_none()
        if record is None:
            return None
        contributors = _contributors_by_version(session, [record.id])
        return _version_from_model(record, contributors.get(record.id))


def get_version_by_id(version_id: str) -> Optional[dict[str, Any]]:
    with SessionLocal() as session:
        record = session.get(RegistryVersion, version_id)
        if record is None:
            return None
        contributors = _contributors_by_version(session, [record.id])
        return _version_from_model(record, contributors.get(record.id))


def create_version(
    *,
    entry_id: str,
    version: str,
    publisher_id: str,
    is_stable: bool,
    size: int,
    license: str | None,
    authors: list[str],
    contributor_ids: list[str],
    digest: str | None,
    tarball: str | None,
    readme_url: str | None,
    changelog_url: str | None,
) -> dict[str, Any]:
    """Insert a version and, when the entry has none, make it the default.

    Both writes share one transaction. A duplicate ``(entry, version)`` pair is
    detected by the unique constraint and reported as ``version_exists``.
    """
    version_id = _generate_id()
    now = _now()
    with SessionLocal() as session:
        if contributor_ids:
            known = set(
                session.execute(
                    select(RegistryUser.id).where(RegistryUser.id.in_(contributor_ids))
                ).scalars()
            )
            missing = [user_id for user_id in contributor_ids if user_id not in known]
            if missing:
                raise ValueError("contributor_not_found")
        record = RegistryVersion(
            id=version_id,
            entry_id=entry_id,
            version=version,
            publisher_id=publisher_id,
            is_stable=is_stable,
            size=size,
            license=license,
            authors=authors,
            digest=digest,
            tarball=tarball,
            readme_url=readme_url,
            changelog_url=changelog_url,
            downloads=0,
            is_yanked=False,
            created_at=now,
            updated_at=now,
        )
        session.add(record)
        try:
            session.flush()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("version_exists") from exc
        for user_id in dict.fromkeys(contributor_ids):
            session.add(
                RegistryVersionContributor(
                    version_id=version_id,
                    user_id=user_id,
                    entry_id=entry_id,
                )
            )
        session.execute(
            update(RegistryEntry)
            .where(RegistryEntry.id == entry_id, RegistryEntry.default_version_id.is_(None))
            .values(default_version_id=version_id)
        )
        session.execute(
            update(RegistryEntry).where(RegistryEntry.id == entry_id).values(updated_at=now)
        )
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("version_exists") from exc
        return _version_from_model(record, list(dict.fromkeys(contributor_ids)))


def update_version(version_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    with SessionLocal() as session:
        record = session.get(RegistryVersion, version_id)
        if record is None:
            raise ValueError("version_not_found")
        for field, value in changes.items():
            setattr(record, field, value)
        record.updated_at = _now()
        session.commit()
        contributors = _contributors_by_version(session, [record.id])
        return _version_from_model(record, contributors.get(record.id))


def set_yank_state(
    version_id: str,
    *,
    yanked: bool,
    message: str | None,
    actor_id: str | None,
    at: datetime | None = None,
) -> dict[str, Any]:
    if yanked:
        changes = {
            "is_yanked": True,
            "yank_message": message,
            "yanked_at": at or _now(),
            "yanked_by_user_id": actor_id,
        }
    else:
        changes = {
            "is_yanked": False,
            "yank_message": None,
            "yanked_at": None,
            "yanked_by_user_id": None,
        }
    return update_version(version_id, changes)


def increment_downloads(version_id: str) -> None:
    """Atomic ``downloads = downloads + 1`` at the store."""
    with SessionLocal() as session:
        session.execute(
            update(RegistryVersion)
            .where(RegistryVersion.id == version_id)
            .values(downloads=RegistryVersion.downloads + 1)
        )
        session.commit()


def version_strings(entry_ids: list[str]) -> dict[str, list[tuple[str, datetime]]]:
    """``(version, created_at)`` pairs per entry for the given entries."""
    if not entry_ids:
        return {}
    with SessionLocal() as session:
        rows = session.execute(
            select(RegistryVersion.entry_id, RegistryVersion.version, RegistryVersion.created_at)
            .where(RegistryVersion.entry_id.in_(entry_ids))
        ).all()
    result: dict[str, list[tuple[str, datetime]]] = {}
    for entry_id, version, created_at in rows:
        result.setdefault(entry_id, []).append((version, _as_utc(created_at)))
    return result


def count_versions() -> tuple[int, int]:
    """Total releases and total downloads across the registry."""
    with SessionLocal() as session:
        releases, downloads = session.execute(
            select(func.count(RegistryVersion.id), func.coalesce(func.sum(RegistryVersion.downloads), 0))
        ).one()
        return int(releases or 0), int(downloads or 0)


def discard_version(version_id: str) -> None:
    """Remove a version whose artifacts never made it to storage."""
    with SessionLocal() as session:
        record = session.get(RegistryVersion, version_id)
        if record is None:
            return
        session.execute(
            update(RegistryEntry)
            .where(
                RegistryEntry.id == record.entry_id,
                RegistryEntry.default_version_id == version_id,
            )
            .values(default_version_id=None)
        )
        session.delete(record)
        session.commit()

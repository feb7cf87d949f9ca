from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from registry_api.db.models import RegistryEntry, RegistryEntryOwner, RegistryVersion
from registry_api.db.session import SessionLocal
from registry_api.repo.common import _as_utc, _keyword_text, _now


def _entry_from_model(
    entry: RegistryEntry,
    *,
    owner_ids: list[str] | None = None,
    default_version: str | None = None,
) -> dict[str, Any]:
    return {
        "id": entry.id,
        "kind": entry.kind,
        "name": entry.name,
        "categories": list(entry.categories or []),
        "keywords": list(entry.keywords or []),
        "description": entry.description,
        "homepage": entry.homepage,
        "repository": entry.repository,
        "isVerified": bool(entry.is_verified),
        "isDeprecated": bool(entry.is_deprecated),
        "deprecationMessage": entry.deprecation_message,
        "primaryOwnerId": entry.primary_owner_id,
        "ownerIds": owner_ids or [],
        "defaultVersionId": entry.default_version_id,
        "defaultVersion": default_version,
        "createdAt": _as_utc(entry.created_at),
        "updatedAt": _as_utc(entry.updated_at),
    }


def _secondary_owner_ids(session, entry_id: str) -> list[str]:
    rows = session.execute(
        select(RegistryEntryOwner.user_id)
        .where(RegistryEntryOwner.entry_id == entry_id)
        .order_by(RegistryEntryOwner.created_at, RegistryEntryOwner.user_id)
    ).scalars()
    return list(rows)


def _load(session, entry: RegistryEntry) -> dict[str, Any]:
    default_version = None
    if entry.default_version_id:
        default_version = session.execute(
            select(RegistryVersion.version).where(RegistryVersion.id == entry.default_version_id)
        ).scalar_one_or_none()
    return _entry_from_model(
        entry,
        owner_ids=_secondary_owner_ids(session, entry.id),
        default_version=default_version,
    )


def get_entry_record(entry_id: str, kind: str | None = None) -> Optional[dict[str, Any]]:
    with SessionLocal() as session:
        entry = session.get(RegistryEntry, entry_id)
        if not entry or (kind and entry.kind != kind):
            return None
        return _load(session, entry)


def create_entry(
    *,
    entry_id: str,
    kind: str,
    name: str,
    categories: list[str],
    keywords: list[str],
    description: str | None,
    homepage: str | None,
    repository: str | None,
    primary_owner_id: str,
) -> dict[str, Any]:
    now = _now()
    with SessionLocal() as session:
        entry = RegistryEntry(
            id=entry_id,
            kind=kind,
            name=name,
            categories=categories,
            keywords=keywords,
            keyword_text=_keyword_text(keywords),
            description=description,
            homepage=homepage,
            repository=repository,
            primary_owner_id=primary_owner_id,
            created_at=now,
            updated_at=now,
        )
        session.add(entry)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("entry_exists") from exc
        return _load(session, entry)


def update_entry(entry_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    """Apply column changes; ``keywords`` also refreshes the search text."""
    with SessionLocal() as session:
        entry = session.get(RegistryEntry, entry_id)
        if not entry:
            raise ValueError("entry_not_found")
        for field, value in changes.items():
            setattr(entry, field, value)
        if "keywords" in changes:
            entry.keyword_text = _keyword_text(changes["keywords"])
        entry.updated_at = _now()
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("entry_exists") from exc
        return _load(session, entry)


def delete_entry(entry_id: str) -> None:
    with SessionLocal() as session:
        entry = session.get(RegistryEntry, entry_id)
        if not entry:
            raise ValueError("entry_not_found")
        session.delete(entry)
        session.commit()


def touch_entry(session, entry_id: str) -> None:
    session.execute(
        update(RegistryEntry).where(RegistryEntry.id == entry_id).values(updated_at=_now())
    )


def add_owner(entry_id: str, user_id: str) -> None:
    with SessionLocal() as session:
        session.add(RegistryEntryOwner(entry_id=entry_id, user_id=user_id))
        touch_entry(session, entry_id)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("owner_exists") from exc


def remove_owner(entry_id: str, user_id: str) -> None:
    with SessionLocal() as session:
        result = session.execute(
            delete(RegistryEntryOwner).where(
                RegistryEntryOwner.entry_id == entry_id,
                RegistryEntryOwner.user_id == user_id,
            )
        )
        if not result.rowcount:
            session.rollback()
            raise ValueError("owner_not_found")
        touch_entry(session, entry_id)
        session.commit()


def transfer_entry(entry_id: str, new_owner_id: str) -> dict[str, Any]:
    """Make ``new_owner_id`` primary; the previous primary owner stays a co-owner."""
    with SessionLocal() as session:
        entry = session.get(RegistryEntry, entry_id)
        if not entry:
            raise ValueError("entry_not_found")
        previous_owner_id = entry.primary_owner_id
        if previous_owner_id == new_owner_id:
            return _load(session, entry)
        session.execute(
            delete(RegistryEntryOwner).where(
                RegistryEntryOwner.entry_id == entry_id,
                RegistryEntryOwner.user_id == new_owner_id,
            )
        )
        if session.get(RegistryEntryOwner, (entry_id, previous_owner_id)) is None:
            session.add(RegistryEntryOwner(entry_id=entry_id, user_id=previous_owner_id))
        entry.primary_owner_id = new_owner_id
        entry.updated_at = _now()
        session.commit()
        return _load(session, entry)

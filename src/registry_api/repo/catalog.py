from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import func, select

from registry_api.catalog import semver
from registry_api.catalog.query import CatalogQuery, count_statement, page_statement
from registry_api.db.models import (
    RegistryEntry,
    RegistryEntryOwner,
    RegistryUser,
    RegistryVersion,
    RegistryVersionContributor,
)
from registry_api.db.session import SessionLocal
from registry_api.repo.common import _as_utc
from registry_api.repo.entries import _entry_from_model


def _unique(values) -> list[str]:
    return [value for value in dict.fromkeys(values) if value]


def _owner_names(session, entries: list[RegistryEntry]) -> dict[str, list[str]]:
    entry_ids = [entry.id for entry in entries]
    primary_rows = session.execute(
        select(RegistryEntry.id, RegistryUser.display_name)
        .join(RegistryUser, RegistryUser.id == RegistryEntry.primary_owner_id)
        .where(RegistryEntry.id.in_(entry_ids))
    ).all()
    secondary_rows = session.execute(
        select(RegistryEntryOwner.entry_id, RegistryUser.display_name)
        .join(RegistryUser, RegistryUser.id == RegistryEntryOwner.user_id)
        .where(RegistryEntryOwner.entry_id.in_(entry_ids))
        .order_by(RegistryEntryOwner.created_at, RegistryEntryOwner.user_id)
    ).all()
    names: dict[str, list[str]] = {entry_id: [] for entry_id in entry_ids}
    for entry_id, display_name in [*primary_rows, *secondary_rows]:
        names[entry_id].append(display_name)
    return {entry_id: _unique(values) for entry_id, values in names.items()}


def _contributor_names(session, entry_ids: list[str]) -> dict[str, list[str]]:
    publisher_rows = session.execute(
        select(RegistryVersion.entry_id, RegistryUser.display_name)
        .join(RegistryUser, RegistryUser.id == RegistryVersion.publisher_id)
        .where(RegistryVersion.entry_id.in_(entry_ids))
        .order_by(RegistryVersion.created_at)
    ).all()
    credited_rows = session.execute(
        select(RegistryVersionContributor.entry_id, RegistryUser.display_name)
        .join(RegistryUser, RegistryUser.id == RegistryVersionContributor.user_id)
        .where(RegistryVersionContributor.entry_id.in_(entry_ids))
        .order_by(RegistryVersionContributor.created_at)
    ).all()
    names: dict[str, list[str]] = {entry_id: [] for entry_id in entry_ids}
    for entry_id, display_name in [*publisher_rows, *credited_rows]:
        names[entry_id].append(display_name)
    return {entry_id: _unique(values) for entry_id, values in names.items()}


def _version_facts(session, entries: list[RegistryEntry]) -> dict[str, dict[str, Any]]:
    entry_ids = [entry.id for entry in entries]
    rows = session.execute(
        select(
            RegistryVersion.entry_id,
            RegistryVersion.id,
            RegistryVersion.version,
            RegistryVersion.created_at,
        ).where(RegistryVersion.entry_id.in_(entry_ids))
    ).all()
    by_entry: dict[str, list[tuple[str, str, Any]]] = {entry_id: [] for entry_id in entry_ids}
    for entry_id, version_id, version, created_at in rows:
        by_entry[entry_id].append((version_id, version, _as_utc(created_at)))
    defaults = {entry.id: entry.default_version_id for entry in entries}
    facts: dict[str, dict[str, Any]] = {}
    for entry_id, versions in by_entry.items():
        strings = [version for _, version, _ in versions]
        newest = max(versions, key=lambda item: (item[2], item[0]), default=None)
        default = next(
            (version for version_id, version, _ in versions if version_id == defaults[entry_id]),
            None,
        )
        facts[entry_id] = {
            "defaultVersion": default,
            "maxVersion": semver.max_version(strings),
            "maxStableVersion": semver.max_stable_version(strings),
            "newestVersion": newest[1] if newest else None,
        }
    return facts


def summarize_entries(
    session, entries: list[RegistryEntry], downloads: dict[str, int]
) -> list[dict[str, Any]]:
    if not entries:
        return []
    owners = _owner_names(session, entries)
    contributors = _contributor_names(session, [entry.id for entry in entries])
    facts = _version_facts(session, entries)
    summaries = []
    for entry in entries:
        record = _entry_from_model(entry, default_version=facts[entry.id]["defaultVersion"])
        record.update(facts[entry.id])
        record["totalDownloads"] = int(downloads.get(entry.id, 0))
        record["owners"] = owners.get(entry.id, [])
        record["contributors"] = contributors.get(entry.id, [])
        summaries.append(record)
    return summaries


def list_entries(query: CatalogQuery) -> tuple[list[dict[str, Any]], int]:
    """One page of entry summaries plus the total matching the same filters."""
    with SessionLocal() as session:
        total = session.execute(count_statement(query)).scalar_one()
        rows = session.execute(page_statement(query)).all()
        entries = [row[0] for row in rows]
        downloads = {row[0].id: int(row[1] or 0) for row in rows}
        return summarize_entries(session, entries, downloads), int(total)


def summarize_entry(entry_id: str) -> Optional[dict[str, Any]]:
    with SessionLocal() as session:
        entry = session.get(RegistryEntry, entry_id)
        if entry is None:
            return None
        total = session.execute(
            select(func.coalesce(func.sum(RegistryVersion.downloads), 0)).where(
                RegistryVersion.entry_id == entry_id
            )
        ).scalar_one()
        return summarize_entries(session, [entry], {entry_id: int(total or 0)})[0]


def count_contributors(entry_id: str) -> int:
    """Distinct users who published or are credited on any version."""
    with SessionLocal() as session:
        publishers = set(
            session.execute(
                select(RegistryVersion.publisher_id).where(
                    RegistryVersion.entry_id == entry_id,
                    RegistryVersion.publisher_id.is_not(None),
                )
            ).scalars()
        )
        credited = set(
            session.execute(
                select(RegistryVersionContributor.user_id).where(
                    RegistryVersionContributor.entry_id == entry_id
                )
            ).scalars()
        )
        return len(publishers | credited)


def count_entries() -> dict[str, int]:
    with SessionLocal() as session:
        rows = session.execute(
            select(RegistryEntry.kind, func.count()).group_by(RegistryEntry.kind)
        ).all()
        counts = {"package": 0, "service": 0}
        for kind, total in rows:
            counts[kind] = int(total)
        return counts

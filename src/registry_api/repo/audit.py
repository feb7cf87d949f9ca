from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import func, select

from registry_api.db.models import RegistryAudit
from registry_api.db.session import SessionLocal
from registry_api.repo.common import _as_utc, _now

AUDIT_ACTIONS = (
    "verify",
    "unverify",
    "deprecate",
    "undeprecate",
    "transfer_ownership",
    "yank",
    "unyank",
    "update",
    "publish",
)


def record_audit(
    *,
    action: str,
    user_id: Optional[str],
    entry_id: str,
    version_id: Optional[str] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> None:
    if action not in AUDIT_ACTIONS:
        raise ValueError(f"unknown audit action: {action}")
    with SessionLocal() as session:
        session.add(
            RegistryAudit(
                action=action,
                user_id=user_id,
                entry_id=entry_id,
                version_id=version_id,
                metadata_json=metadata or None,
                timestamp=_now(),
            )
        )
        session.commit()


def _audit_from_model(audit: RegistryAudit) -> dict[str, Any]:
    return {
        "id": audit.id,
        "action": audit.action,
        "userId": audit.user_id,
        "entryId": audit.entry_id,
        "versionId": audit.version_id,
        "metadata": audit.metadata_json,
        "timestamp": _as_utc(audit.timestamp),
    }


def list_audits(entry_id: str, limit: int | None = None) -> list[dict[str, Any]]:
    with SessionLocal() as session:
        stmt = (
            select(RegistryAudit)
            .where(RegistryAudit.entry_id == entry_id)
            .order_by(RegistryAudit.timestamp.desc(), RegistryAudit.id.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        return [_audit_from_model(audit) for audit in session.execute(stmt).scalars()]


def count_audits(entry_id: str) -> int:
    with SessionLocal() as session:
        return session.execute(
            select(func.count()).select_from(RegistryAudit).where(RegistryAudit.entry_id == entry_id)
        ).scalar_one()

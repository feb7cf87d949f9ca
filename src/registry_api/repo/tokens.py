from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from registry_api.db.models import RegistryApiToken
from registry_api.db.security import generate_api_token, hash_token
from registry_api.db.session import SessionLocal
from registry_api.repo.common import _as_utc, _generate_id, _now


def _token_from_model(token: RegistryApiToken) -> dict[str, Any]:
    return {
        "id": token.id,
        "userId": token.user_id,
        "name": token.name,
        "revoked": bool(token.revoked),
        "revokedAt": _as_utc(token.revoked_at),
        "createdAt": _as_utc(token.created_at),
        "lastUsedAt": _as_utc(token.last_used_at),
        "expiresAt": _as_utc(token.expires_at),
    }


def list_tokens(user_id: str) -> list[dict[str, Any]]:
    with SessionLocal() as session:
        tokens = session.execute(
            select(RegistryApiToken)
            .where(RegistryApiToken.user_id == user_id)
            .order_by(RegistryApiToken.created_at.desc(), RegistryApiToken.id)
        ).scalars()
        return [_token_from_model(token) for token in tokens]


def create_token(
    *,
    user_id: str,
    name: str,
    expires_at: datetime | None,
    prefix: str,
) -> tuple[dict[str, Any], str]:
    """Persist a new token and return ``(record, plaintext)``.

    Only the hash is stored; the id is generated up front so the row is
    written once with its final hash.
    """
    plaintext, token_hash = generate_api_token(prefix)
    with SessionLocal() as session:
        record = RegistryApiToken(
            id=_generate_id(),
            user_id=user_id,
            name=name,
            token_hash=token_hash,
            revoked=False,
            created_at=_now(),
            expires_at=expires_at,
        )
        session.add(record)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("token_name_exists") from exc
        return _token_from_model(record), plaintext


def revoke_token(token_id: str, user_id: str) -> dict[str, Any]:
    with SessionLocal() as session:
        token = session.get(RegistryApiToken, token_id)
        if not token:
            raise ValueError("token_not_found")
        if token.user_id != user_id:
            raise ValueError("token_owner_mismatch")
        if not token.revoked:
            token.revoked = True
            token.revoked_at = _now()
            session.commit()
        return _token_from_model(token)


def resolve_token(token_value: str) -> Optional[dict[str, Any]]:
    """Return the active token record matching ``token_value``, if any."""
    now = _now()
    with SessionLocal() as session:
        token = session.execute(
            select(RegistryApiToken).where(RegistryApiToken.token_hash == hash_token(token_value))
        ).scalar_one_or_none()
        if token is None or token.revoked:
            return None
        expires_at = _as_utc(token.expires_at)
        if expires_at is not None and expires_at <= now:
            return None
        token.last_used_at = now
        session.commit()
        return _token_from_model(token)

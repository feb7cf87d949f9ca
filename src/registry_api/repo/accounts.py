from __future__ import annotations

from typing import Any, Iterable, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from registry_api.db.models import RegistryEntry, RegistryUser
from registry_api.db.session import SessionLocal
from registry_api.repo.common import _as_utc, _now


def _user_from_model(user: RegistryUser) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "username": user.username,
        "displayName": user.display_name,
        "avatarUrl": user.avatar_url,
        "createdAt": _as_utc(user.created_at),
        "updatedAt": _as_utc(user.updated_at),
    }


def get_user(user_id: str) -> Optional[dict[str, Any]]:
    with SessionLocal() as session:
        user = session.get(RegistryUser, user_id)
        return _user_from_model(user) if user else None


def get_user_by_username(username: str) -> Optional[dict[str, Any]]:
    with SessionLocal() as session:
        user = session.execute(
            select(RegistryUser).where(func.lower(RegistryUser.username) == username.lower())
        ).scalar_one_or_none()
        return _user_from_model(user) if user else None


def get_users(user_ids: Iterable[str]) -> dict[str, dict[str, Any]]:
    ids = {user_id for user_id in user_ids if user_id}
    if not ids:
        return {}
    with SessionLocal() as session:
        users = session.execute(select(RegistryUser).where(RegistryUser.id.in_(ids))).scalars()
        return {user.id: _user_from_model(user) for user in users}


def create_user(
    *,
    user_id: str,
    username: str,
    email: str | None = None,
    display_name: str | None = None,
    avatar_url: str | None = None,
) -> dict[str, Any]:
    with SessionLocal() as session:
        user = RegistryUser(
            id=user_id,
            username=username,
            email=email,
            display_name=display_name,
            avatar_url=avatar_url,
        )
        session.add(user)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("user_exists") from exc
        return _user_from_model(user)


def ensure_user(
    *,
    user_id: str,
    username: str,
    email: str | None = None,
    display_name: str | None = None,
    avatar_url: str | None = None,
) -> dict[str, Any]:
    """Return the user row for an identity-provider subject, creating it if absent."""
    existing = get_user(user_id)
    if existing:
        return existing
    try:
        return create_user(
            user_id=user_id,
            username=username,
            email=email,
            display_name=display_name,
            avatar_url=avatar_url,
        )
    except ValueError:
        # concurrent provisioning, or the username/email is taken by another subject
        existing = get_user(user_id)
        if existing:
            return existing
    return create_user(
        user_id=user_id,
        username=f"{username}-{user_id[:8]}",
        display_name=display_name,
        avatar_url=avatar_url,
    )


def update_user(user_id: str, changes: dict[str, Any]) -> dict[str, Any]:
    with SessionLocal() as session:
        user = session.get(RegistryUser, user_id)
        if not user:
            raise ValueError("user_not_found")
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = _now()
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("email_taken") from exc
        return _user_from_model(user)


def count_primary_entries(user_id: str) -> int:
    with SessionLocal() as session:
        return session.execute(
            select(func.count())
            .select_from(RegistryEntry)
            .where(RegistryEntry.primary_owner_id == user_id)
        ).scalar_one()


def delete_user(user_id: str) -> None:
    with SessionLocal() as session:
        user = session.get(RegistryUser, user_id)
        if not user:
            raise ValueError("user_not_found")
        session.delete(user)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ValueError("user_owns_entries") from exc

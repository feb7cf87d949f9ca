"""Authorization decisions for registry mutations.

Every function is a pure predicate over already-loaded records (the dicts
produced by ``registry_api.repo``). Callers turn ``False`` into a 403.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

Record = Mapping[str, Any]


def is_primary_owner(entry: Record, user_id: Optional[str]) -> bool:
    return bool(user_id) and entry.get("primaryOwnerId") == user_id


def is_owner(entry: Record, user_id: Optional[str]) -> bool:
    if not user_id:
        return False
    return is_primary_owner(entry, user_id) or user_id in (entry.get("ownerIds") or [])


def can_update_entry(entry: Record, user_id: Optional[str]) -> bool:
    return is_owner(entry, user_id)


def can_delete_entry(entry: Record, user_id: Optional[str]) -> bool:
    return is_primary_owner(entry, user_id)


def can_set_default_version(
    entry: Record, user_id: Optional[str], version: Optional[Record]
) -> bool:
    """Owner, and the target version exists and belongs to this entry."""
    if not is_owner(entry, user_id) or version is None:
        return False
    return version.get("entryId") == entry.get("id")


def can_create_version(entry: Record, user_id: Optional[str]) -> bool:
    # co-owners cannot publish; only the primary owner can
    return is_primary_owner(entry, user_id)


def can_update_version(entry: Record, version: Record, user_id: Optional[str]) -> bool:
    """Original publisher AND primary owner of the entry."""
    if not user_id:
        return False
    return version.get("publisherId") == user_id and is_primary_owner(entry, user_id)


def can_manage_owners(entry: Record, user_id: Optional[str]) -> bool:
    return is_owner(entry, user_id)


def can_transfer_entry(entry: Record, user_id: Optional[str], *, is_admin: bool = False) -> bool:
    return is_admin or is_primary_owner(entry, user_id)


def can_verify_entry(*, is_admin: bool) -> bool:
    return is_admin


def can_deprecate_entry(entry: Record, user_id: Optional[str], *, is_admin: bool = False) -> bool:
    return is_admin or is_owner(entry, user_id)


def can_delete_account(
    target_user_id: str, user_id: Optional[str], *, primary_entry_count: int
) -> bool:
    """Only the account holder, and only once they no longer own any entry."""
    return bool(user_id) and target_user_id == user_id and primary_entry_count == 0


def can_update_account(target_user_id: str, user_id: Optional[str], *, is_admin: bool = False) -> bool:
    return is_admin or (bool(user_id) and target_user_id == user_id)


def can_manage_tokens(target_user_id: str, user_id: Optional[str]) -> bool:
    return bool(user_id) and target_user_id == user_id


__all__ = [
    "can_create_version",
    "can_delete_account",
    "can_delete_entry",
    "can_deprecate_entry",
    "can_manage_owners",
    "can_manage_tokens",
    "can_set_default_version",
    "can_transfer_entry",
    "can_update_account",
    "can_update_entry",
    "can_update_version",
    "can_verify_entry",
    "is_owner",
    "is_primary_owner",
]

from __future__ import annotations

import logging

from registry_api.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from registry_api.models.account import Account
from registry_api.models.user import User
from registry_api.models.user_update_request import UserUpdateRequest
from registry_api.repo.accounts import (
    count_primary_entries,
    delete_user,
    get_user,
    get_user_by_username,
    update_user,
)
from registry_api.security_api import is_admin, require_identity
from registry_api.services import permissions

LOGGER = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"display_name", "email", "avatar_url"}


class AccountService:
    async def get_account(self) -> Account:
        identity = require_identity()
        record = get_user(identity.user_id)
        if not record:
            raise NotFoundError("Account not found.")
        return Account.from_dict(
            {**record, "isAdmin": identity.is_admin, "credential": identity.credential}
        )

    async def get_user(self, user_id: str) -> User:
        record = get_user(user_id)
        if not record:
            raise NotFoundError(f"User '{user_id}' not found.")
        return User.from_dict(record)

    async def get_user_by_username(self, username: str) -> User:
        record = get_user_by_username(username)
        if not record:
            raise NotFoundError(f"User '{username}' not found.")
        return User.from_dict(record)

    async def update_user(self, user_id: str, request: UserUpdateRequest) -> User:
        identity = require_identity()
        if request is None:
            raise ValidationError("Payload is required.")
        if not get_user(user_id):
            raise NotFoundError(f"User '{user_id}' not found.")
        if not permissions.can_update_account(user_id, identity.user_id, is_admin=is_admin()):
            raise AuthorizationError("You can only update your own profile.")
        changes = {
            field: getattr(request, field)
            for field in request.model_fields_set & _UPDATABLE_FIELDS
        }
        if not changes:
            return User.from_dict(get_user(user_id))
        try:
            record = update_user(user_id, changes)
        except ValueError as exc:
            if str(exc) == "email_taken":
                raise ConflictError("Email address is already in use.") from exc
            raise
        return User.from_dict(record)

    async def delete_user(self, user_id: str) -> None:
        identity = require_identity()
        if not get_user(user_id):
            raise NotFoundError(f"User '{user_id}' not found.")
        if user_id != identity.user_id:
            raise AuthorizationError("You can only delete your own account.")
        owned = count_primary_entries(user_id)
        if not permissions.can_delete_account(
            user_id, identity.user_id, primary_entry_count=owned
        ):
            raise AuthorizationError(
                "Transfer or delete the packages and services you own before deleting your account.",
                details={"ownedEntries": owned},
            )
        try:
            delete_user(user_id)
        except ValueError as exc:
            if str(exc) == "user_owns_entries":
                raise AuthorizationError(
                    "Transfer or delete the packages and services you own before deleting your account."
                ) from exc
            raise
        LOGGER.info("Account %s deleted", user_id)
        return None

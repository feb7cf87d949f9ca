from __future__ import annotations

from registry_api.apis.users_api_base import BaseUsersApi
from registry_api.models.account import Account
from registry_api.models.user import User
from registry_api.models.user_update_request import UserUpdateRequest
from registry_api.services.account_service import AccountService

_service = AccountService()


class UsersApiImpl(BaseUsersApi):
    async def get_account(self) -> Account:
        return await _service.get_account()

    async def get_user(
        self,
        user_id: str,
    ) -> User:
        return await _service.get_user(user_id)

    async def get_user_by_username(
        self,
        username: str,
    ) -> User:
        return await _service.get_user_by_username(username)

    async def update_user(
        self,
        user_id: str,
        user_update_request: UserUpdateRequest,
    ) -> User:
        return await _service.update_user(user_id, user_update_request)

    async def delete_user(
        self,
        user_id: str,
    ) -> None:
        return await _service.delete_user(user_id)

# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401

from pydantic import StrictStr
from registry_api.models.account import Account
from registry_api.models.user import User
from registry_api.models.user_update_request import UserUpdateRequest


class BaseUsersApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BaseUsersApi.subclasses = BaseUsersApi.subclasses + (cls,)
    async def get_account(
        self,
    ) -> Account:
        ...


    async def get_user(
        self,
        user_id: StrictStr,
    ) -> User:
        ...


    async def get_user_by_username(
        self,
        username: StrictStr,
    ) -> User:
        ...


    async def update_user(
        self,
        user_id: StrictStr,
        user_update_request: UserUpdateRequest,
    ) -> User:
        ...


    async def delete_user(
        self,
        user_id: StrictStr,
    ) -> None:
        ...

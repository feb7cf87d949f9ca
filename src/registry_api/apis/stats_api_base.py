# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401

from registry_api.models.registry_stats import RegistryStats


class BaseStatsApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BaseStatsApi.subclasses = BaseStatsApi.subclasses + (cls,)
    async def get_stats(
        self,
    ) -> RegistryStats:
        ...

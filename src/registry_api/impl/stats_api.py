from __future__ import annotations

from registry_api.apis.stats_api_base import BaseStatsApi
from registry_api.models.registry_stats import RegistryStats
from registry_api.services.stats_service import StatsService

_service = StatsService()


class StatsApiImpl(BaseStatsApi):
    async def get_stats(self) -> RegistryStats:
        return await _service.get_stats()

from __future__ import annotations

from registry_api.models.registry_stats import RegistryStats
from registry_api.repo.catalog import count_entries
from registry_api.repo.versions import count_versions


class StatsService:
    async def get_stats(self) -> RegistryStats:
        entries = count_entries()
        releases, downloads = count_versions()
        return RegistryStats(
            packages=entries["package"],
            services=entries["service"],
            releases=releases,
            downloads=downloads,
        )

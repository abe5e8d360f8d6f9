"""Read-mostly facades: profile, dashboard, admin, health."""

from __future__ import annotations

from typing import Any, Mapping

from adapters.endpoints import ENDPOINTS
from adapters.http_client import ApiClient


class ProfileService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_profile(self) -> Any:
        return await self._client.get(ENDPOINTS.profile.get)

    async def update_profile(self, profile: Mapping[str, Any]) -> Any:
        return await self._client.put(ENDPOINTS.profile.update, dict(profile))


class DashboardService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_stats(self) -> Any:
        return await self._client.get(ENDPOINTS.dashboard.stats)

    async def get_recent(self) -> Any:
        return await self._client.get(ENDPOINTS.dashboard.recent)


class AdminService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def get_users(self, params: Mapping[str, Any] | None = None) -> Any:
        return await self._client.get(ENDPOINTS.admin.users, params=dict(params or {}))

    async def get_statistics(self) -> Any:
        return await self._client.get(ENDPOINTS.admin.statistics)


class HealthService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def check(self) -> Any:
        return await self._client.get(ENDPOINTS.health)

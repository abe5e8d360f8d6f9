"""Material substitution requests.

Substitutions are reviewed rather than edited, so there is no update/delete:
approve/reject take their place.
"""

from __future__ import annotations

from typing import Any, Mapping

from adapters.endpoints import ENDPOINTS, ItemId
from adapters.http_client import ApiClient


class SubstitutionService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self._paths = ENDPOINTS.substitutions

    async def get_all(self, params: Mapping[str, Any] | None = None) -> Any:
        return await self._client.get(self._paths.list, params=dict(params or {}))

    async def get_by_id(self, item_id: ItemId) -> Any:
        return await self._client.get(self._paths.get(item_id))

    async def create(self, data: Mapping[str, Any]) -> Any:
        return await self._client.post(self._paths.create, dict(data))

    async def approve(self, item_id: ItemId, approval: Mapping[str, Any] | None = None) -> Any:
        return await self._client.put(self._paths.approve(item_id), dict(approval or {}))

    async def reject(self, item_id: ItemId, rejection: Mapping[str, Any] | None = None) -> Any:
        return await self._client.put(self._paths.reject(item_id), dict(rejection or {}))

"""CRUD facade shared by the per-entity services."""

from __future__ import annotations

from typing import Any, Mapping

from adapters.endpoints import CrudPaths, ItemId
from adapters.http_client import ApiClient


class CrudService:
    """List/get/create/update/delete against one collection.

    Each method returns the decoded response body unchanged.
    """

    def __init__(self, client: ApiClient, paths: CrudPaths) -> None:
        self._client = client
        self._paths = paths

    async def get_all(self, params: Mapping[str, Any] | None = None) -> Any:
        return await self._client.get(self._paths.list, params=dict(params or {}))

    async def get_by_id(self, item_id: ItemId) -> Any:
        return await self._client.get(self._paths.get(item_id))

    async def create(self, data: Mapping[str, Any]) -> Any:
        return await self._client.post(self._paths.create, dict(data))

    async def update(self, item_id: ItemId, data: Mapping[str, Any]) -> Any:
        return await self._client.put(self._paths.update(item_id), dict(data))

    async def delete(self, item_id: ItemId) -> Any:
        return await self._client.delete(self._paths.delete(item_id))

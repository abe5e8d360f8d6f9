"""Vendor facade."""

from __future__ import annotations

from typing import Any, Sequence

from adapters.domain_services.base import CrudService
from adapters.endpoints import ENDPOINTS
from adapters.http_client import ApiClient


class VendorService(CrudService):
    def __init__(self, client: ApiClient) -> None:
        super().__init__(client, ENDPOINTS.vendors)

    async def rank(self, items: Sequence[Any]) -> Any:
        """Ranked vendor candidates per BOQ item (`{"itemVendors": {...}}`)."""

        return await self._client.post(ENDPOINTS.vendors.rank, {"items": list(items)})

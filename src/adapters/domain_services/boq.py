"""Bill of quantities (BOQ) facade."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from adapters.domain_services.base import CrudService
from adapters.endpoints import ENDPOINTS
from adapters.http_client import ApiClient


class BoqService(CrudService):
    def __init__(self, client: ApiClient) -> None:
        super().__init__(client, ENDPOINTS.boq)

    async def upload_file(self, file: Path | str) -> Any:
        """Upload a BOQ spreadsheet as multipart field `file`."""

        return await self._client.upload(ENDPOINTS.boq.upload, file)

from __future__ import annotations

from adapters.domain_services.base import CrudService
from adapters.endpoints import ENDPOINTS
from adapters.http_client import ApiClient


class PurchaseOrderService(CrudService):
    def __init__(self, client: ApiClient) -> None:
        super().__init__(client, ENDPOINTS.po)


class SupplierService(CrudService):
    def __init__(self, client: ApiClient) -> None:
        super().__init__(client, ENDPOINTS.supplier)

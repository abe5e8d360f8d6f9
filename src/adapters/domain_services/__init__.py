"""Domain service facades.

Thin per-entity call groups over `ApiClient`. They add no behavior of their
own: auth, error classification and timeouts come from the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass

from adapters.domain_services.account import (
    AdminService,
    DashboardService,
    HealthService,
    ProfileService,
)
from adapters.domain_services.base import CrudService
from adapters.domain_services.boq import BoqService
from adapters.domain_services.orders import PurchaseOrderService, SupplierService
from adapters.domain_services.substitutions import SubstitutionService
from adapters.domain_services.vendors import VendorService
from adapters.http_client import ApiClient


@dataclass(frozen=True)
class Services:
    profile: ProfileService
    boq: BoqService
    vendor: VendorService
    substitution: SubstitutionService
    po: PurchaseOrderService
    supplier: SupplierService
    dashboard: DashboardService
    admin: AdminService
    health: HealthService


def build_services(client: ApiClient) -> Services:
    return Services(
        profile=ProfileService(client),
        boq=BoqService(client),
        vendor=VendorService(client),
        substitution=SubstitutionService(client),
        po=PurchaseOrderService(client),
        supplier=SupplierService(client),
        dashboard=DashboardService(client),
        admin=AdminService(client),
        health=HealthService(client),
    )


__all__ = [
    "AdminService",
    "BoqService",
    "CrudService",
    "DashboardService",
    "HealthService",
    "ProfileService",
    "PurchaseOrderService",
    "Services",
    "SubstitutionService",
    "SupplierService",
    "VendorService",
    "build_services",
]

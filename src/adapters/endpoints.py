"""Backend endpoint table.

Static lookup: logical operation -> path, or path builder for id-based routes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

ItemId = int | str


@dataclass(frozen=True)
class AuthPaths:
    login: str = "/api/auth/login"
    register: str = "/api/auth/register"
    verify: str = "/api/auth/verify"
    refresh_token: str = "/api/auth/refresh-token"


@dataclass(frozen=True)
class ProfilePaths:
    get: str = "/api/profile"
    update: str = "/api/profile"


@dataclass(frozen=True)
class AdminPaths:
    users: str = "/api/admin/users"
    statistics: str = "/api/admin/statistics"


@dataclass(frozen=True)
class DashboardPaths:
    stats: str = "/api/dashboard/stats"
    recent: str = "/api/dashboard/recent"


@dataclass(frozen=True)
class CrudPaths:
    """Collection path plus `<collection>/<id>` item paths."""

    collection: str

    @property
    def list(self) -> str:
        return self.collection

    @property
    def create(self) -> str:
        return self.collection

    def get(self, item_id: ItemId) -> str:
        return f"{self.collection}/{item_id}"

    def update(self, item_id: ItemId) -> str:
        return self.get(item_id)

    def delete(self, item_id: ItemId) -> str:
        return self.get(item_id)


@dataclass(frozen=True)
class BoqPaths(CrudPaths):
    collection: str = "/api/boq"

    @property
    def upload(self) -> str:
        return f"{self.collection}/upload"


@dataclass(frozen=True)
class VendorPaths(CrudPaths):
    collection: str = "/api/vendors"

    @property
    def rank(self) -> str:
        return f"{self.collection}/rank"


@dataclass(frozen=True)
class SubstitutionPaths(CrudPaths):
    collection: str = "/api/substitutions"

    def approve(self, item_id: ItemId) -> str:
        return f"{self.get(item_id)}/approve"

    def reject(self, item_id: ItemId) -> str:
        return f"{self.get(item_id)}/reject"


@dataclass(frozen=True)
class Endpoints:
    auth: AuthPaths = field(default_factory=AuthPaths)
    profile: ProfilePaths = field(default_factory=ProfilePaths)
    admin: AdminPaths = field(default_factory=AdminPaths)
    dashboard: DashboardPaths = field(default_factory=DashboardPaths)
    boq: BoqPaths = field(default_factory=BoqPaths)
    vendors: VendorPaths = field(default_factory=VendorPaths)
    substitutions: SubstitutionPaths = field(default_factory=SubstitutionPaths)
    po: CrudPaths = field(default_factory=lambda: CrudPaths("/api/po"))
    supplier: CrudPaths = field(default_factory=lambda: CrudPaths("/api/supplier"))
    health: str = "/api/health"


ENDPOINTS = Endpoints()

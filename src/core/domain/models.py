"""Domain models (Pydantic v2).

These describe *what* the client exchanges with the backend, not *how* it is
fetched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Session(BaseModel):
    """Authenticated identity: bearer token plus the cached user profile."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(
        ...,
        min_length=1,
        description="Opaque bearer token issued by the login endpoint.",
    )
    user: Any = Field(
        default=None,
        description="User profile as returned by the backend (any JSON value).",
    )


class Credentials(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class PageEnvelope(BaseModel):
    """One page of a paginated listing.

    Accepted shapes:
    - a bare JSON list of items
    - `{"data": [...], "totalPages": n, "totalItems": n}`, where `total` is
      accepted in place of `totalItems`
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    items: list[Any] = Field(..., alias="data")
    total_pages: int | None = Field(default=None, alias="totalPages", ge=0)
    total_items: int | None = Field(default=None, alias="totalItems", ge=0)
    total: int | None = Field(default=None, ge=0)

    @field_validator("total_pages", "total_items", "total", mode="before")
    @classmethod
    def _empty_as_missing(cls, value: Any) -> Any:
        if value in ("", 0):
            return None
        return value

    @classmethod
    def from_response(cls, body: Any) -> "PageEnvelope":
        if isinstance(body, list):
            return cls(data=body)
        return cls.model_validate(body)

    @property
    def page_count(self) -> int:
        return self.total_pages or 0

    @property
    def item_count(self) -> int:
        return self.total_items or self.total or 0

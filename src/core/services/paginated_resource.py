"""Paginated async resource.

Same settle/error handling as `Resource`, plus page bookkeeping. Every
accepted page change issues exactly one fetch of `{"page": n, "limit": size}`;
`data` always holds the items of the last completed fetch only.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Generic, TypeVar

from pydantic import ValidationError

from core.domain.models import PageEnvelope
from core.log import get_logger
from core.services.resource import StateHolder, failure_message

logger = get_logger(__name__)

T = TypeVar("T")

PAGE_ERROR_MESSAGE = "Failed to fetch data"


@dataclass(frozen=True)
class PageState(Generic[T]):
    data: list[T] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    page: int = 1
    total_pages: int = 0
    total_items: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


class PaginatedResource(StateHolder[PageState[T]]):
    """Page-indexed wrapper around `operation(params) -> body`.

    `body` is either a list of items or a mapping with `data` and optional
    `totalPages` / `totalItems` (or `total`). Navigation methods never raise;
    `fetch_page` and `refetch` re-raise for callers that await them directly.
    """

    def __init__(
        self,
        operation: Callable[[dict[str, int]], Awaitable[Any]],
        *,
        initial_page: int = 1,
        page_size: int = 10,
    ) -> None:
        if initial_page < 1:
            raise ValueError("initial_page must be >= 1")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        super().__init__(PageState(page=initial_page))
        self._operation = operation
        self._page_size = page_size
        self._mounted = False

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def page(self) -> int:
        return self._state.page

    async def fetch_page(self, page: int | None = None) -> PageEnvelope:
        page = self._state.page if page is None else page
        self._begin()
        try:
            body = await self._operation({"page": page, "limit": self._page_size})
            envelope = PageEnvelope.from_response(body)
        except ValidationError:
            logger.warning("resource.unexpected_page_shape", page=page)
            self._settle(error=PAGE_ERROR_MESSAGE)
            raise
        except Exception as exc:
            self._settle(error=failure_message(exc, PAGE_ERROR_MESSAGE))
            raise
        except BaseException:
            self._settle()
            raise
        self._settle(
            data=list(envelope.items),
            error=None,
            total_pages=envelope.page_count,
            total_items=envelope.item_count,
        )
        return envelope

    async def refetch(self) -> PageEnvelope:
        """Re-issue the call for the current page; `page` is not touched."""

        return await self.fetch_page(self._state.page)

    async def mount(self) -> None:
        """Fetch the initial page once."""

        if self._mounted:
            return
        self._mounted = True
        await self._load(self._state.page)

    async def next_page(self) -> bool:
        if self._state.page >= self._state.total_pages:
            return False
        await self._change_page(self._state.page + 1)
        return True

    async def prev_page(self) -> bool:
        if self._state.page <= 1:
            return False
        await self._change_page(self._state.page - 1)
        return True

    async def go_to_page(self, page: int) -> bool:
        if page < 1 or page > self._state.total_pages:
            return False
        await self._change_page(page)
        return True

    async def set_page(self, page: int) -> bool:
        """Assign the page directly (no upper bound check); pages below 1 are ignored."""

        if page < 1:
            return False
        return await self._change_page(page)

    async def _change_page(self, page: int) -> bool:
        if page == self._state.page:
            return False
        self._publish(replace(self._state, page=page))
        await self._load(page)
        return True

    async def _load(self, page: int) -> None:
        try:
            envelope = await self.fetch_page(page)
        except Exception as exc:
            logger.debug("resource.page_failed", page=page, error=repr(exc))
            return

        # Keep page within [1, max(total_pages, 1)] once the backend has
        # reported its size; the stale page costs one extra fetch.
        last_page = max(envelope.page_count, 1)
        if self._state.page == page and page > last_page:
            await self._change_page(last_page)

import asyncio

import pytest
from pydantic import ValidationError

from core.services.paginated_resource import PAGE_ERROR_MESSAGE, PageState, PaginatedResource


class PagedBackend:
    """Serves `total_pages` pages of two items each and records every call."""

    def __init__(self, total_pages: int = 3, total_items: int = 6) -> None:
        self.total_pages = total_pages
        self.total_items = total_items
        self.calls: list[dict[str, int]] = []
        self.fail_with: Exception | None = None

    async def __call__(self, params: dict[str, int]):
        self.calls.append(params)
        if self.fail_with is not None:
            raise self.fail_with
        page = params["page"]
        return {
            "data": [f"item-{page}-a", f"item-{page}-b"],
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
        }


async def mounted(backend: PagedBackend, **kwargs) -> PaginatedResource:
    resource = PaginatedResource(backend, **kwargs)
    await resource.mount()
    return resource


@pytest.mark.asyncio
async def test_mount_fetches_initial_page():
    backend = PagedBackend()

    resource = await mounted(backend, page_size=10)

    assert backend.calls == [{"page": 1, "limit": 10}]
    assert resource.state == PageState(
        data=["item-1-a", "item-1-b"],
        loading=False,
        error=None,
        page=1,
        total_pages=3,
        total_items=6,
    )


@pytest.mark.asyncio
async def test_go_to_page_out_of_range_is_noop():
    backend = PagedBackend(total_pages=3)
    resource = await mounted(backend)

    assert await resource.go_to_page(5) is False
    assert await resource.go_to_page(0) is False

    assert resource.page == 1
    assert len(backend.calls) == 1


@pytest.mark.asyncio
async def test_go_to_page_issues_exactly_one_fetch():
    backend = PagedBackend(total_pages=3)
    resource = await mounted(backend, page_size=10)

    assert await resource.go_to_page(2) is True

    assert backend.calls[1:] == [{"page": 2, "limit": 10}]
    assert resource.page == 2
    assert resource.state.data == ["item-2-a", "item-2-b"]


@pytest.mark.asyncio
async def test_next_page_on_last_page_is_noop():
    backend = PagedBackend(total_pages=3)
    resource = await mounted(backend, initial_page=3)

    assert await resource.next_page() is False

    assert resource.page == 3
    assert len(backend.calls) == 1


@pytest.mark.asyncio
async def test_next_and_prev_page_move_by_one():
    backend = PagedBackend(total_pages=3)
    resource = await mounted(backend, page_size=5)

    await resource.next_page()
    await resource.next_page()
    await resource.prev_page()

    assert [call["page"] for call in backend.calls] == [1, 2, 3, 2]
    assert resource.page == 2


@pytest.mark.asyncio
async def test_prev_page_on_first_page_is_noop():
    backend = PagedBackend()
    resource = await mounted(backend)

    assert await resource.prev_page() is False
    assert len(backend.calls) == 1


@pytest.mark.asyncio
async def test_refetch_reissues_current_page():
    backend = PagedBackend()
    resource = await mounted(backend, initial_page=2, page_size=4)

    await resource.refetch()

    assert backend.calls == [{"page": 2, "limit": 4}, {"page": 2, "limit": 4}]
    assert resource.page == 2


@pytest.mark.asyncio
async def test_bare_list_response_has_zero_totals():
    async def operation(params):
        return ["a", "b"]

    resource = PaginatedResource(operation)
    await resource.mount()

    assert resource.state.data == ["a", "b"]
    assert resource.state.total_pages == 0
    assert resource.state.total_items == 0


@pytest.mark.asyncio
async def test_total_alias_is_accepted():
    async def operation(params):
        return {"data": [1], "totalPages": 4, "total": 37}

    resource = PaginatedResource(operation)
    await resource.mount()

    assert resource.state.total_pages == 4
    assert resource.state.total_items == 37


@pytest.mark.asyncio
async def test_failed_page_keeps_data_and_navigation_does_not_raise():
    backend = PagedBackend(total_pages=3)
    resource = await mounted(backend)
    backend.fail_with = RuntimeError("backend down")

    assert await resource.next_page() is True

    assert resource.page == 2
    assert resource.state.error == "backend down"
    assert resource.state.data == ["item-1-a", "item-1-b"]
    assert resource.state.loading is False


@pytest.mark.asyncio
async def test_refetch_reraises_for_direct_callers():
    backend = PagedBackend()
    resource = await mounted(backend)
    backend.fail_with = RuntimeError()

    with pytest.raises(RuntimeError):
        await resource.refetch()

    assert resource.state.error == PAGE_ERROR_MESSAGE


@pytest.mark.asyncio
async def test_response_without_items_is_rejected():
    async def operation(params):
        return {"results": [1, 2]}

    resource = PaginatedResource(operation)
    await resource.mount()

    assert resource.state.error == PAGE_ERROR_MESSAGE
    assert resource.state.data == []
    with pytest.raises(ValidationError):
        await resource.refetch()


@pytest.mark.asyncio
async def test_set_page_fetches_without_bounds_then_clamps_to_last_page():
    backend = PagedBackend(total_pages=3)
    resource = await mounted(backend)

    await resource.set_page(5)

    assert [call["page"] for call in backend.calls] == [1, 5, 3]
    assert resource.page == 3


@pytest.mark.asyncio
async def test_set_page_to_current_page_does_not_fetch():
    backend = PagedBackend()
    resource = await mounted(backend)

    assert await resource.set_page(1) is False
    assert len(backend.calls) == 1


@pytest.mark.asyncio
async def test_set_page_below_one_is_noop():
    backend = PagedBackend()
    resource = await mounted(backend)

    assert await resource.set_page(0) is False
    assert await resource.set_page(-3) is False

    assert resource.page == 1
    assert len(backend.calls) == 1
    assert resource.state.error is None


def test_invalid_construction_arguments():
    with pytest.raises(ValueError):
        PaginatedResource(PagedBackend(), initial_page=0)
    with pytest.raises(ValueError):
        PaginatedResource(PagedBackend(), page_size=0)


@pytest.mark.asyncio
async def test_page_state_is_published_to_subscribers():
    backend = PagedBackend()
    resource = PaginatedResource(backend)
    seen: list[PageState] = []
    resource.subscribe(seen.append)

    await resource.mount()
    await resource.go_to_page(2)

    assert [(s.page, s.loading) for s in seen] == [
        (1, True),
        (1, False),
        (2, False),
        (2, True),
        (2, False),
    ]


@pytest.mark.asyncio
async def test_cancelled_fetch_settles_loading():
    gate = asyncio.Event()
    backend = PagedBackend()

    async def operation(params):
        if params["page"] == 2:
            await gate.wait()
        return await backend(params)

    resource = PaginatedResource(operation)
    await resource.mount()
    pending = asyncio.create_task(resource.fetch_page(2))
    await asyncio.sleep(0)
    assert resource.state.loading is True

    pending.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pending

    assert resource.state.loading is False
    assert resource.state.data == ["item-1-a", "item-1-b"]

    await resource.refetch()
    assert resource.state.loading is False

"""Async resource state (single fetch).

A `Resource` binds one asynchronous operation and republishes its lifecycle
as immutable `ResourceState` snapshots:

    idle ──execute──▶ loading ──ok──▶ succeeded
                         │
                         └──fail──▶ failed   (previous data kept)

Concurrent `execute` calls are not deduplicated. Each one publishes its own
settlement, so the call that settles last decides `data`/`error`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, TypeVar

from core.errors import ApiStatusError
from core.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
S = TypeVar("S")

DEFAULT_ERROR_MESSAGE = "An error occurred"


class ResourceStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ResourceState(Generic[T]):
    data: T | None = None
    loading: bool = False
    error: str | None = None
    status: ResourceStatus = ResourceStatus.IDLE

    @property
    def settled(self) -> bool:
        return self.status in (ResourceStatus.SUCCEEDED, ResourceStatus.FAILED)


def failure_message(error: BaseException, fallback: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Message published in `error`: server message, exception text, then `fallback`."""

    if isinstance(error, ApiStatusError) and error.server_message:
        return error.server_message
    return str(error) or fallback


class StateHolder(Generic[S]):
    """Keeps the current snapshot and notifies subscribers on every change."""

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[Callable[[S], None]] = []
        self._in_flight = 0

    @property
    def state(self) -> S:
        return self._state

    @property
    def in_flight(self) -> int:
        return self._in_flight

    def subscribe(self, listener: Callable[[S], None]) -> Callable[[], None]:
        """Register `listener`; returns a function that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, state: S) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _begin(self, **changes: Any) -> None:
        self._in_flight += 1
        self._publish(replace(self._state, loading=True, error=None, **changes))

    def _settle(self, **changes: Any) -> None:
        self._in_flight -= 1
        self._publish(replace(self._state, loading=self._in_flight > 0, **changes))


class Resource(StateHolder[ResourceState[T]]):
    """Reactive wrapper around `operation`.

    With `auto_invoke=True` the state starts as loading and `mount()` runs
    `execute()` once. With `auto_invoke=False` the operation does not run
    until `execute`/`refetch` is called.
    """

    def __init__(
        self,
        operation: Callable[..., Awaitable[T]],
        *,
        auto_invoke: bool = True,
        fallback_message: str = DEFAULT_ERROR_MESSAGE,
    ) -> None:
        initial: ResourceState[T] = ResourceState(
            loading=auto_invoke,
            status=ResourceStatus.LOADING if auto_invoke else ResourceStatus.IDLE,
        )
        super().__init__(initial)
        self._operation = operation
        self._auto_invoke = auto_invoke
        self._fallback_message = fallback_message
        self._mounted = False

    @property
    def data(self) -> T | None:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> str | None:
        return self._state.error

    async def execute(self, *args: Any, **kwargs: Any) -> T:
        """Run the operation, publish the outcome and return or re-raise it."""

        previous = self._state.status
        self._begin(status=ResourceStatus.LOADING)
        try:
            result = await self._operation(*args, **kwargs)
        except Exception as exc:
            self._settle(
                error=failure_message(exc, self._fallback_message),
                status=ResourceStatus.FAILED,
            )
            raise
        except BaseException:
            # Cancelled: data and error stay as they were.
            if self._in_flight > 1:
                self._settle()
            elif previous is ResourceStatus.LOADING:
                self._settle(status=ResourceStatus.IDLE)
            else:
                self._settle(status=previous)
            raise
        self._settle(data=result, error=None, status=ResourceStatus.SUCCEEDED)
        return result

    async def refetch(self, *args: Any, **kwargs: Any) -> T:
        return await self.execute(*args, **kwargs)

    def set_data(self, data: T | None) -> None:
        self._publish(replace(self._state, data=data))

    async def mount(self) -> None:
        """Bind the resource; runs the first `execute()` when auto-invoke is on.

        Failures end up in `state.error` and are not raised from here.
        """

        if self._mounted:
            return
        self._mounted = True
        if not self._auto_invoke:
            return
        try:
            await self.execute()
        except Exception as exc:
            logger.debug("resource.mount_failed", error=repr(exc))

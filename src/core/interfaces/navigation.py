"""Session-expired port."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SessionExpiredHandler(Protocol):
    """Sends the user to the login surface after the backend rejected the session.

    Called by the pipeline only, once per 401 response, after the session has
    been cleared.
    """

    def __call__(self) -> None:
        ...

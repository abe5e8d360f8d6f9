"""Session store contract.

The interceptor pipeline reads the token through this interface and the auth
flows write through it; neither knows where the session is kept.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Holds at most one session (token + cached user profile).

    Rules:
    - `set_session` writes both fields in one step, never one without the other.
    - `clear_session` is idempotent.
    - All methods are synchronous; none of them suspends the event loop.
    """

    def get_token(self) -> str | None:
        ...

    def get_user(self) -> Any | None:
        ...

    def set_session(self, token: str, user: Any) -> None:
        ...

    def clear_session(self) -> None:
        ...

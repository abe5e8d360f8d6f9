"""Auth flows on top of the API client.

`login` is the only flow that writes a session; `logout` is the only one that
removes it outside the pipeline's 401 handler.
"""

from __future__ import annotations

from typing import Any, Mapping

from adapters.endpoints import ENDPOINTS
from adapters.http_client import ApiClient
from core.domain.models import Credentials
from core.interfaces.session_store import SessionStore
from core.log import get_logger

logger = get_logger(__name__)


class AuthService:
    def __init__(self, client: ApiClient, store: SessionStore | None = None) -> None:
        self._client = client
        self._store = store or client.pipeline.store

    async def login(self, credentials: Credentials | Mapping[str, Any]) -> Any:
        """Authenticate and persist `{token, user}` when the response carries a token."""

        payload = (
            credentials.model_dump()
            if isinstance(credentials, Credentials)
            else dict(credentials)
        )
        body = await self._client.post(ENDPOINTS.auth.login, payload)
        token = body.get("token") if isinstance(body, dict) else None
        if token:
            self._store.set_session(str(token), body.get("user"))
            logger.info("auth.login", user=_user_label(body.get("user")))
        return body

    async def register(self, user_data: Mapping[str, Any]) -> Any:
        return await self._client.post(ENDPOINTS.auth.register, dict(user_data))

    async def verify(self) -> Any:
        return await self._client.get(ENDPOINTS.auth.verify)

    def logout(self) -> None:
        self._store.clear_session()

    def current_user(self) -> Any | None:
        return self._store.get_user()

    def is_authenticated(self) -> bool:
        return bool(self._store.get_token())


def _user_label(user: Any) -> str | None:
    if isinstance(user, dict):
        for key in ("username", "email", "name", "id"):
            if user.get(key) is not None:
                return str(user[key])
    return None

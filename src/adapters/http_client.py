"""httpx wrapper and interceptor pipeline.

- `build_async_client` standardizes base URL, timeout and default headers.
- `InterceptorPipeline` holds the request arm (bearer token) and the response
  arm (error classification, session invalidation on 401).
- `ApiClient` drives one `httpx.AsyncClient` through the pipeline and returns
  decoded JSON bodies.
"""

from __future__ import annotations

import asyncio
import mimetypes
import secrets
from pathlib import Path
from typing import Any, Mapping, NoReturn

import httpx

from core.config import AppSettings
from core.errors import (
    ErrorKind,
    NoResponseError,
    UnauthorizedError,
    status_error_for,
)
from core.interfaces.navigation import SessionExpiredHandler
from core.interfaces.session_store import SessionStore
from core.log import get_logger

logger = get_logger(__name__)

# Raised by httpx before anything is written to the wire.
_CONSTRUCTION_ERRORS: tuple[type[Exception], ...] = (
    httpx.UnsupportedProtocol,
    httpx.LocalProtocolError,
)

_LOG_EVENTS: dict[ErrorKind, str] = {
    ErrorKind.FORBIDDEN: "api.forbidden",
    ErrorKind.NOT_FOUND: "api.not_found",
    ErrorKind.SERVER_ERROR: "api.server_error",
    ErrorKind.OTHER_STATUS: "api.error",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    event_hooks: Mapping[str, list[Any]] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` bound to the backend origin."""

    settings = settings or AppSettings()
    headers: dict[str, str] = dict(settings.default_headers)
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        headers=headers,
        event_hooks={k: list(v) for k, v in (event_hooks or {}).items()},
        transport=transport,
    )


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class InterceptorPipeline:
    """Cross-cutting behavior applied to every call.

    Request arm: attaches `Authorization: Bearer <token>` when the store holds
    a session. Response arm: passes successes through and turns every failure
    into exactly one raised exception. A 401 additionally clears the session
    and fires the session-expired handler before raising. Nothing is retried.
    """

    def __init__(
        self,
        store: SessionStore,
        on_session_expired: SessionExpiredHandler | None = None,
    ) -> None:
        self._store = store
        self._on_session_expired = on_session_expired

    @property
    def store(self) -> SessionStore:
        return self._store

    async def on_request(self, request: httpx.Request) -> None:
        token = self._store.get_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def on_response(self, response: httpx.Response) -> httpx.Response:
        if not response.is_error:
            return response

        await response.aread()
        status = response.status_code
        payload = _decode_body(response)
        request = response.request
        error_cls = status_error_for(status)
        error = error_cls(
            status,
            payload=payload,
            method=request.method,
            url=str(request.url),
        )

        if isinstance(error, UnauthorizedError):
            self._store.clear_session()
            logger.warning("api.unauthorized", method=request.method, url=str(request.url))
            if self._on_session_expired is not None:
                self._on_session_expired()
            raise error

        logger.error(
            _LOG_EVENTS[error.kind],
            status=status,
            message=error.server_message,
            method=request.method,
            url=str(request.url),
        )
        raise error

    def on_transport_error(self, exc: Exception, request: httpx.Request) -> NoReturn:
        logger.error(
            "api.no_response",
            method=request.method,
            url=str(request.url),
            error=repr(exc),
        )
        raise NoResponseError(method=request.method, url=str(request.url)) from exc

    def on_request_error(self, exc: BaseException) -> None:
        logger.error("api.request_failed", error=repr(exc))


class ApiClient:
    """JSON client for the procurement backend.

    Usage:
        async with build_api_client(store=FileSessionStore()) as api:
            vendors = await api.get("/api/vendors", params={"page": 1})
    """

    def __init__(
        self,
        pipeline: InterceptorPipeline,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._pipeline = pipeline
        self._client = build_async_client(
            self._settings,
            event_hooks={"request": [pipeline.on_request]},
            transport=transport,
        )

    @property
    def pipeline(self) -> InterceptorPipeline:
        return self._pipeline

    @property
    def settings(self) -> AppSettings:
        return self._settings

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        try:
            request = self._client.build_request(
                method,
                url,
                params=params,
                json=json,
                files=files,
                headers=headers,
            )
        except Exception as exc:
            self._pipeline.on_request_error(exc)
            raise

        # httpx timeouts apply per connect/read/write step; the whole exchange,
        # body included, is bounded by `timeout_ms`.
        try:
            response = await asyncio.wait_for(
                self._client.send(request),
                self._settings.timeout_seconds,
            )
        except _CONSTRUCTION_ERRORS as exc:
            self._pipeline.on_request_error(exc)
            raise
        except (httpx.TransportError, asyncio.TimeoutError) as exc:
            self._pipeline.on_transport_error(exc, request)

        return await self._pipeline.on_response(response)

    async def get(self, url: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return _decode_body(await self.request("GET", url, params=params))

    async def post(self, url: str, body: Any = None) -> Any:
        return _decode_body(await self.request("POST", url, json=body))

    async def put(self, url: str, body: Any = None) -> Any:
        return _decode_body(await self.request("PUT", url, json=body))

    async def delete(self, url: str) -> Any:
        return _decode_body(await self.request("DELETE", url))

    async def upload(self, url: str, file: Path | str, *, filename: str | None = None) -> Any:
        """POST a file as multipart form data under the single field `file`."""

        path = Path(file)
        name = filename or path.name
        content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        # An explicit boundary replaces the JSON Content-Type default.
        boundary = secrets.token_hex(16)
        response = await self.request(
            "POST",
            url,
            files={"file": (name, path.read_bytes(), content_type)},
            headers={"Content-Type": f"multipart/form-data; boundary={boundary}"},
        )
        return _decode_body(response)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_api_client(
    settings: AppSettings | None = None,
    *,
    store: SessionStore,
    on_session_expired: SessionExpiredHandler | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiClient:
    pipeline = InterceptorPipeline(store, on_session_expired)
    return ApiClient(pipeline, settings, transport=transport)

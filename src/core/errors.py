"""API error taxonomy.

Every failure that leaves the HTTP pipeline is one of these exceptions, except
failures raised while building a request, which propagate unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

NO_RESPONSE_MESSAGE = "No response from server. Please check your connection."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    OTHER_STATUS = "other_status"
    NO_RESPONSE = "no_response"
    CONSTRUCTION_ERROR = "construction_error"

    @classmethod
    def from_status(cls, status_code: int) -> "ErrorKind":
        if status_code == 401:
            return cls.UNAUTHORIZED
        if status_code == 403:
            return cls.FORBIDDEN
        if status_code == 404:
            return cls.NOT_FOUND
        if 500 <= status_code <= 599:
            return cls.SERVER_ERROR
        return cls.OTHER_STATUS


def _body_field(payload: Any, key: str) -> str | None:
    if not isinstance(payload, dict):
        return None
    value = payload.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return None


class ApiError(Exception):
    """Base class for failures produced by the interceptor pipeline."""

    kind: ErrorKind = ErrorKind.OTHER_STATUS


class ApiStatusError(ApiError):
    """The server answered with a non-success status."""

    def __init__(
        self,
        status_code: int,
        *,
        payload: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        self.method = method
        self.url = url
        super().__init__(self.server_message or f"Error: {status_code}")

    @property
    def server_message(self) -> str | None:
        """`message` field of the JSON error body, when the server sent one."""

        return _body_field(self.payload, "message")

    @property
    def server_error(self) -> str | None:
        return _body_field(self.payload, "error")


class UnauthorizedError(ApiStatusError):
    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ApiStatusError):
    kind = ErrorKind.FORBIDDEN


class NotFoundError(ApiStatusError):
    kind = ErrorKind.NOT_FOUND


class ServerError(ApiStatusError):
    kind = ErrorKind.SERVER_ERROR


class NoResponseError(ApiError):
    """The request was sent but no response arrived (network failure or timeout)."""

    kind = ErrorKind.NO_RESPONSE

    def __init__(self, *, method: str | None = None, url: str | None = None) -> None:
        self.method = method
        self.url = url
        super().__init__(NO_RESPONSE_MESSAGE)


_STATUS_ERRORS: dict[ErrorKind, type[ApiStatusError]] = {
    ErrorKind.UNAUTHORIZED: UnauthorizedError,
    ErrorKind.FORBIDDEN: ForbiddenError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.SERVER_ERROR: ServerError,
    ErrorKind.OTHER_STATUS: ApiStatusError,
}


def status_error_for(status_code: int) -> type[ApiStatusError]:
    return _STATUS_ERRORS[ErrorKind.from_status(status_code)]


def get_error_message(error: BaseException) -> str:
    """Human readable message for any failure coming out of the client.

    Priority:
    - server `message`, then server `error`, then `Error: <status>`
    - the connectivity message when no response arrived
    - the exception text, or a generic fallback
    """

    if isinstance(error, ApiStatusError):
        return error.server_message or error.server_error or f"Error: {error.status_code}"
    if isinstance(error, NoResponseError):
        return NO_RESPONSE_MESSAGE
    return str(error) or UNEXPECTED_ERROR_MESSAGE

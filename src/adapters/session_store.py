"""Session store implementations.

- `FileSessionStore`: JSON file in the user config dir; survives restarts.
- `MemorySessionStore`: process-local, used by tests and embedded callers.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from core.config import AppSettings
from core.domain.models import Session
from core.interfaces.session_store import SessionStore
from core.log import get_logger

logger = get_logger(__name__)


class MemorySessionStore(SessionStore):
    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session | None:
        return self._session

    def get_token(self) -> str | None:
        return self._session.token if self._session else None

    def get_user(self) -> Any | None:
        return self._session.user if self._session else None

    def set_session(self, token: str, user: Any) -> None:
        self._session = Session(token=token, user=user)

    def clear_session(self) -> None:
        self._session = None


class FileSessionStore(SessionStore):
    """Persists the session as `{"token": ..., "user": ...}`.

    The file is re-read on every access so a login from another process is
    seen by the next request. Writes go through a temp file plus `os.replace`
    so a reader never observes a token without its user.
    """

    def __init__(self, path: Path | None = None, *, settings: AppSettings | None = None) -> None:
        if path is None:
            path = (settings or AppSettings()).session_file
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Session | None:
        if not self._path.exists():
            return None
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return Session.model_validate(raw)
        except ValueError as exc:
            # Corrupt or hand-edited file: behave as logged out.
            logger.warning("session.unreadable", path=str(self._path), error=str(exc))
            return None

    def get_token(self) -> str | None:
        session = self._load()
        return session.token if session else None

    def get_user(self) -> Any | None:
        session = self._load()
        return session.user if session else None

    def set_session(self, token: str, user: Any) -> None:
        session = Session(token=token, user=user)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(
            json.dumps(session.model_dump(mode="json"), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        os.replace(tmp, self._path)

    def clear_session(self) -> None:
        self._path.unlink(missing_ok=True)

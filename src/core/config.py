"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (HTTP client, session store) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "procura"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "procura"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "procura"
    return Path.home() / ".config" / "procura"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def get_default_session_file() -> Path:
    return get_user_config_dir() / "session.json"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Write/update variables in the user's global .env file."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# procura user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    The instance is frozen: the HTTP pipeline is built once from it and the
    values do not change for the lifetime of the client.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROCURA_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="https://tatvadirect.onrender.com",
        min_length=8,
        description="Backend origin every endpoint path is resolved against.",
    )
    timeout_ms: int = Field(
        default=30_000,
        gt=0,
        description="Per-request deadline in milliseconds.",
    )
    default_headers: dict[str, str] = Field(
        default_factory=lambda: {
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
        description="Headers sent with every request.",
    )
    login_url: str = Field(
        default="/login",
        min_length=1,
        description="Login surface users are sent to when the session expires.",
    )
    session_file: Path = Field(
        default_factory=get_default_session_file,
        description="JSON file holding the persisted session (token + user).",
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR).",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of the console format.",
    )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

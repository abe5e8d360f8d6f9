"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.domain_services import HealthService
from adapters.http_client import build_api_client
from adapters.session_store import FileSessionStore, MemorySessionStore
from cli.ui_components import print_banner
from core.config import AppSettings, get_user_env_file
from core.errors import ApiError, get_error_message

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_health(settings: AppSettings) -> tuple[bool, str]:
    # Anonymous store: the check must not touch (or clear) the real session.
    async with build_api_client(settings, store=MemorySessionStore()) as client:
        try:
            body = await HealthService(client).check()
        except ApiError as exc:
            return False, get_error_message(exc)
    status = body.get("status") if isinstance(body, dict) else None
    return True, str(status or "reachable")


@app.command()
def run() -> None:
    """Run baseline diagnostics."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="Procura Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.timeout_ms} ms")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "DEFAULTS", str(env_file))

    store = FileSessionStore(settings=settings)
    if store.get_token():
        table.add_row("Session", "OK", str(store.path))
    else:
        table.add_row("Session", "NONE", "Run `procura login` to sign in")

    ok_http, detail_http = asyncio.run(_check_health(settings))
    table.add_row("Backend health", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Check the base URL with `procura setup` or your network connection."
        )

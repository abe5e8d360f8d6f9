"""Command line entry point (`procura`).

Each command builds one `ApiClient` backed by the persisted session file and
the terminal session-expired notice, runs its calls, and closes the client.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, TypeVar

import typer
from rich.console import Console

from adapters.domain_services import BoqService, HealthService, VendorService
from adapters.http_client import ApiClient, build_api_client
from adapters.session_store import FileSessionStore
from cli import doctor
from cli.ui_components import (
    LoginRedirectNotice,
    build_boq_table,
    build_vendor_ranking_table,
    build_vendors_table,
)
from core.config import AppSettings, write_user_env_vars
from core.domain.models import Credentials
from core.errors import ApiError, get_error_message
from core.log import configure_logging
from core.services.auth import AuthService
from core.services.paginated_resource import PaginatedResource
from core.services.resource import Resource

R = TypeVar("R")

app = typer.Typer(no_args_is_help=True, help="Procurement backend client.")
vendors_app = typer.Typer(no_args_is_help=True, help="Vendor listing and ranking.")
boq_app = typer.Typer(no_args_is_help=True, help="Bills of quantities.")
app.add_typer(vendors_app, name="vendors")
app.add_typer(boq_app, name="boq")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def _startup() -> None:
    configure_logging(AppSettings())


def _open_client(settings: AppSettings) -> ApiClient:
    return build_api_client(
        settings,
        store=FileSessionStore(settings=settings),
        on_session_expired=LoginRedirectNotice(_console, settings),
    )


def _run(flow: Callable[[ApiClient], Awaitable[R]]) -> R:
    """Run `flow` with a fresh client; API failures end the command with exit code 1."""

    settings = AppSettings()

    async def _main() -> R:
        async with _open_client(settings) as client:
            return await flow(client)

    try:
        return asyncio.run(_main())
    except ApiError as exc:
        _console.print(f"[red]Error:[/red] {get_error_message(exc)}")
        raise typer.Exit(code=1) from exc


@app.command()
def login(
    username: str = typer.Option(..., prompt=True, help="Account username or email."),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Sign in and store the session token."""

    credentials = Credentials(username=username, password=password)

    async def flow(client: ApiClient) -> Any:
        return await AuthService(client).login(credentials)

    body = _run(flow)
    if isinstance(body, dict) and body.get("token"):
        user = body.get("user") or {}
        name = user.get("name") or user.get("username") if isinstance(user, dict) else None
        _console.print(f"[green]Signed in[/green]{f' as {name}' if name else ''}.")
    else:
        _console.print("[yellow]Login response did not include a token; no session stored.[/yellow]")
        raise typer.Exit(code=1)


@app.command()
def logout() -> None:
    """Forget the stored session (safe to run when already signed out)."""

    async def flow(client: ApiClient) -> None:
        AuthService(client).logout()

    _run(flow)
    _console.print("Signed out.")


@app.command()
def whoami() -> None:
    """Show the cached user profile."""

    store = FileSessionStore(settings=AppSettings())
    if not store.get_token():
        _console.print("Not signed in.")
        raise typer.Exit(code=1)
    _console.print_json(data=store.get_user())


@app.command()
def verify() -> None:
    """Check the stored token against the backend."""

    async def flow(client: ApiClient) -> Any:
        return await AuthService(client).verify()

    _console.print_json(data=_run(flow))


@app.command()
def health() -> None:
    """Backend health check."""

    async def flow(client: ApiClient) -> Any:
        return await HealthService(client).check()

    _console.print_json(data=_run(flow))


@vendors_app.command("list")
def vendors_list(
    page: int = typer.Option(1, min=1, help="Page to show."),
    limit: int = typer.Option(10, min=1, max=100, help="Vendors per page."),
) -> None:
    """List vendors one page at a time."""

    async def flow(client: ApiClient) -> None:
        listing = PaginatedResource(VendorService(client).get_all, initial_page=page, page_size=limit)
        await listing.mount()
        if listing.state.error:
            _console.print(f"[red]Error:[/red] {listing.state.error}")
            raise typer.Exit(code=1)
        _console.print(build_vendors_table(listing.state))

    _run(flow)


@vendors_app.command("rank")
def vendors_rank(
    items_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of normalized BOQ items."),
) -> None:
    """Rank vendors for each BOQ item."""

    items = json.loads(items_file.read_text(encoding="utf-8"))
    if not isinstance(items, list) or not items:
        raise typer.BadParameter("expected a non-empty JSON list of items", param_hint="ITEMS_FILE")

    async def flow(client: ApiClient) -> Any:
        ranking = Resource(VendorService(client).rank, auto_invoke=False)
        return await ranking.execute(items)

    result = _run(flow)
    item_vendors = result.get("itemVendors", {}) if isinstance(result, dict) else {}
    _console.print(build_vendor_ranking_table(items, item_vendors))


@boq_app.command("list")
def boq_list(
    page: int = typer.Option(1, min=1),
    limit: int = typer.Option(10, min=1, max=100),
) -> None:
    """List bills of quantities."""

    async def flow(client: ApiClient) -> None:
        listing = PaginatedResource(BoqService(client).get_all, initial_page=page, page_size=limit)
        await listing.mount()
        if listing.state.error:
            _console.print(f"[red]Error:[/red] {listing.state.error}")
            raise typer.Exit(code=1)
        _console.print(build_boq_table(listing.state))

    _run(flow)


@boq_app.command("upload")
def boq_upload(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="BOQ spreadsheet or CSV."),
) -> None:
    """Upload a BOQ file."""

    async def flow(client: ApiClient) -> Any:
        return await BoqService(client).upload_file(file)

    _console.print_json(data=_run(flow))


@app.command()
def setup() -> None:
    """Interactive backend setup (stored in the user config .env)."""

    current = AppSettings()
    base_url = typer.prompt("API base URL", default=current.base_url, show_default=True).strip()
    timeout_ms = typer.prompt("Request timeout (ms)", default=current.timeout_ms, type=int, show_default=True)

    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")
    if timeout_ms <= 0:
        raise typer.BadParameter("timeout must be positive")

    env_path = write_user_env_vars(
        {
            "PROCURA_BASE_URL": base_url,
            "PROCURA_TIMEOUT_MS": str(timeout_ms),
        }
    )
    _console.print(f"[green]Saved API config to:[/green] {env_path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()

"""CLI UI components (Rich).

Tables and panels live here so command functions only orchestrate calls.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.formatting import format_currency, format_date, status_color, truncate_text
from core.services.paginated_resource import PageState


def print_banner(console: Console) -> None:
    title = Text("PROCURA", style="bold cyan")
    subtitle = Text("BOQ • Vendors • Purchase orders", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


class LoginRedirectNotice:
    """Session-expired handler for the terminal.

    The CLI has no page to redirect, so the "navigation" is a full stop notice
    pointing at the login surface and the `login` command.
    """

    def __init__(self, console: Console, settings: AppSettings) -> None:
        self._console = console
        self._settings = settings
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1
        login_surface = self._settings.base_url.rstrip("/") + self._settings.login_url
        body = Text()
        body.append("Your session has expired or is no longer valid.\n\n")
        body.append("Sign in again with ")
        body.append("procura login", style="bold")
        body.append(f"\nLogin page: {login_surface}", style="dim")
        self._console.print(Panel(body, title="Session expired", border_style="red"))


def _cell(value: Any) -> str:
    if value is None or value == "":
        return "-"
    return str(value)


def _money(value: Any) -> str:
    if isinstance(value, (int, float)) or (isinstance(value, str) and value.strip()):
        try:
            return format_currency(value)
        except ArithmeticError:
            return str(value)
    return "-"


def _date(value: Any) -> str:
    if not value:
        return "-"
    try:
        return format_date(value)
    except (TypeError, ValueError):
        return str(value)


def page_caption(state: PageState[Any]) -> str:
    pages = max(state.total_pages, 1)
    return f"Page {state.page} of {pages} • {state.total_items} items"


def build_vendors_table(state: PageState[Any]) -> Table:
    table = Table(title="Vendors", caption=page_caption(state))
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Category", style="white")
    table.add_column("Location", style="white")
    table.add_column("Status")
    for vendor in state.data:
        if not isinstance(vendor, Mapping):
            table.add_row("-", str(vendor), "-", "-", "-")
            continue
        status = vendor.get("status")
        table.add_row(
            _cell(vendor.get("id") or vendor.get("_id")),
            _cell(truncate_text(vendor.get("name"), 40)),
            _cell(vendor.get("category")),
            _cell(vendor.get("location") or vendor.get("city")),
            Text(_cell(status), style=status_color(status)),
        )
    return table


def build_boq_table(state: PageState[Any]) -> Table:
    table = Table(title="Bills of quantities", caption=page_caption(state))
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Project", style="cyan")
    table.add_column("Items", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Created")
    table.add_column("Status")
    for boq in state.data:
        if not isinstance(boq, Mapping):
            continue
        items = boq.get("items")
        status = boq.get("status")
        table.add_row(
            _cell(boq.get("id") or boq.get("_id")),
            _cell(truncate_text(boq.get("projectName") or boq.get("name"), 40)),
            _cell(len(items) if isinstance(items, list) else boq.get("itemCount")),
            _money(boq.get("totalAmount")),
            _date(boq.get("createdAt")),
            Text(_cell(status), style=status_color(status)),
        )
    return table


def build_vendor_ranking_table(
    items: Sequence[Mapping[str, Any]],
    item_vendors: Mapping[str, Any],
) -> Table:
    """One row per (item, vendor) candidate; rank 1 is flagged as recommended."""

    table = Table(title="Supplier Selection")
    table.add_column("Item", style="cyan")
    table.add_column("Vendor", style="white")
    table.add_column("Price", justify="right")
    table.add_column("Lead time", justify="right")
    table.add_column("", style="green")
    for item in items:
        item_id = str(item.get("id"))
        label = _cell(item.get("normalizedName") or item.get("name") or item_id)
        vendors = item_vendors.get(item_id) or []
        if not vendors:
            table.add_row(label, "-", "-", "-", "")
            continue
        for vendor in vendors:
            lead_time = vendor.get("leadTime")
            table.add_row(
                label,
                _cell(vendor.get("name")),
                _money(vendor.get("price")),
                f"{lead_time} days" if lead_time is not None else "-",
                "Recommended" if vendor.get("rank") == 1 else "",
            )
            label = ""
    return table

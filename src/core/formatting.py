"""Display helpers used by the CLI tables."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping


_CURRENCY_SYMBOLS: dict[str, str] = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

_STATUS_COLORS: dict[str, str] = {
    "pending": "orange1",
    "approved": "green",
    "rejected": "red",
    "completed": "blue",
    "active": "green",
    "inactive": "grey50",
    "draft": "grey70",
}
DEFAULT_STATUS_COLOR = "grey50"

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^[6-9]\d{9}$")


def _group_indian(digits: str) -> str:
    # 12,34,567: last three digits, then groups of two.
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: float | int | Decimal | str, currency: str = "INR") -> str:
    """`1234567.5` -> `₹12,34,567.50` (Indian digit grouping, two decimals)."""

    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):.2f}".partition(".")
    code = currency.upper()
    symbol = _CURRENCY_SYMBOLS.get(code, f"{code} ")
    return f"{sign}{symbol}{_group_indian(whole)}.{fraction}"


def _as_datetime(value: str | date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_date(value: str | date | datetime, include_time: bool = False) -> str:
    """`2025-01-05T14:30` -> `5 Jan 2025` (or `5 Jan 2025, 02:30 pm`)."""

    moment = _as_datetime(value)
    out = f"{moment.day} {moment:%b %Y}"
    if include_time:
        out += f", {moment:%I:%M} {moment:%p}".lower()
    return out


def truncate_text(text: str | None, max_length: int = 50) -> str | None:
    if not text or len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def status_color(status: str | None) -> str:
    """Rich color name for a workflow status."""

    if not status:
        return DEFAULT_STATUS_COLOR
    return _STATUS_COLORS.get(status.lower(), DEFAULT_STATUS_COLOR)


def calculate_percentage(value: float, total: float | None) -> int:
    if not total:
        return 0
    return int(Decimal(str(value / total * 100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def group_by(items: Iterable[Mapping[str, Any]], key: str) -> dict[Any, list[Mapping[str, Any]]]:
    grouped: dict[Any, list[Mapping[str, Any]]] = {}
    for item in items:
        grouped.setdefault(item.get(key), []).append(item)
    return grouped


def sort_by(items: Iterable[Mapping[str, Any]], key: str, order: str = "asc") -> list[Mapping[str, Any]]:
    return sorted(items, key=lambda item: item[key], reverse=order == "desc")


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def is_valid_phone(phone: str) -> bool:
    """Indian mobile number: ten digits starting with 6-9."""

    return bool(_PHONE_RE.match(phone))

from datetime import date, datetime

import pytest

from core.formatting import (
    DEFAULT_STATUS_COLOR,
    calculate_percentage,
    format_currency,
    format_date,
    group_by,
    is_valid_email,
    is_valid_phone,
    sort_by,
    status_color,
    truncate_text,
)


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (0, "₹0.00"),
        (999, "₹999.00"),
        (1000, "₹1,000.00"),
        (123456.789, "₹1,23,456.79"),
        (12345678, "₹1,23,45,678.00"),
        (-2500.5, "-₹2,500.50"),
        ("450", "₹450.00"),
    ],
)
def test_format_currency_indian_grouping(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_other_codes():
    assert format_currency(1500, "usd") == "$1,500.00"
    assert format_currency(10, "AED") == "AED 10.00"


def test_format_date():
    assert format_date("2025-01-05T14:30:00Z") == "5 Jan 2025"
    assert format_date(date(2024, 12, 31)) == "31 Dec 2024"
    assert format_date(datetime(2025, 3, 9, 14, 5), include_time=True) == "9 Mar 2025, 02:05 pm"


def test_truncate_text():
    assert truncate_text("short") == "short"
    assert truncate_text(None) is None
    assert truncate_text("x" * 12, max_length=10) == "x" * 10 + "..."


def test_status_color():
    assert status_color("Approved") == "green"
    assert status_color("pending") == "orange1"
    assert status_color("unknown") == DEFAULT_STATUS_COLOR
    assert status_color(None) == DEFAULT_STATUS_COLOR


def test_calculate_percentage():
    assert calculate_percentage(1, 3) == 33
    assert calculate_percentage(2, 3) == 67
    assert calculate_percentage(5, 0) == 0


def test_group_and_sort():
    orders = [
        {"id": 3, "status": "draft"},
        {"id": 1, "status": "approved"},
        {"id": 2, "status": "draft"},
    ]

    assert [o["id"] for o in group_by(orders, "status")["draft"]] == [3, 2]
    assert [o["id"] for o in sort_by(orders, "id")] == [1, 2, 3]
    assert [o["id"] for o in sort_by(orders, "id", "desc")] == [3, 2, 1]


def test_validators():
    assert is_valid_email("buyer@site.co.in")
    assert not is_valid_email("buyer@site")
    assert is_valid_phone("9876543210")
    assert not is_valid_phone("1234567890")
    assert not is_valid_phone("98765")

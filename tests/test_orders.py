"""Tests for the order record engine: dates, model, repository and the order views."""

from datetime import date, timedelta

import pydantic
import pytest

from repair_desk.application.classifier import (
    OrderState,
    classify,
    is_overdue,
    is_pending,
    partition,
)
from repair_desk.application.formatter import (
    format_income,
    format_order,
    format_order_details,
    format_order_list,
)
from repair_desk.application.income import total_income
from repair_desk.application.search import search_orders
from repair_desk.application.sorter import sort_orders
from repair_desk.domain.dates import days_between, format_date, is_valid_date, parse_date
from repair_desk.domain.errors import (
    CapacityExceeded,
    IndexOutOfRange,
    InvalidPhoneFormat,
    InvalidRange,
    OrderNotFound,
)
from repair_desk.domain.order import IN_PROGRESS, Order
from repair_desk.infrastructure.order_repository import OrderRepository


def _make_order(**kwargs) -> Order:
    """Build a valid Order, overriding any field via ``kwargs``."""
    defaults = dict(
        name="Camera A",
        brand="Canon",
        customer_name="Ivan Petrov",
        phone="79161234567",
        status="Accepted",
        price=100.0,
        date_appointment="01-01-2024",
        date_issue=IN_PROGRESS,
    )
    return Order(**{**defaults, **kwargs})


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("text", ["01-01-2024", "29-02-2024", "31-12-1999", "15-06-0001"])
def test_parse_date_accepts_real_dates_and_round_trips(text: str) -> None:
    """Valid DD-MM-YYYY text parses and formats back to the same string."""
    parsed = parse_date(text)
    assert parsed is not None
    assert format_date(parsed) == text
    assert (parsed.day, parsed.month, parsed.year) == tuple(int(p) for p in text.split("-"))


@pytest.mark.parametrize(
    "text",
    [
        "31-02-2024",  # impossible day
        "29-02-2023",  # not a leap year
        "32-01-2024",
        "01-13-2024",
        "00-01-2024",
        "1-01-2024",  # wrong length
        "01/01/2024",  # wrong separators
        "2024-01-01",
        "01-01-24",
        "aa-bb-cccc",
        "01-01-2024 ",
        "",
        None,
    ],
)
def test_parse_date_rejects_everything_else(text: str | None) -> None:
    assert parse_date(text) is None
    assert not is_valid_date(text)


def test_parse_date_rejects_non_ascii_digits() -> None:
    """Arabic-Indic digits are digits to ``str.isdigit`` but not to the date format."""
    assert parse_date("٠١-٠١-٢٠٢٤") is None


def test_days_between() -> None:
    day = date(2024, 1, 1)
    assert days_between(day, day) == 0
    assert days_between(day, day + timedelta(days=22)) == 22
    assert days_between(date(2023, 12, 31), date(2024, 3, 1)) == 61


def test_days_between_never_negative() -> None:
    """Stepping forward from a later date reaches the earlier one immediately."""
    assert days_between(date(2024, 2, 1), date(2024, 1, 1)) == 0


# ---------------------------------------------------------------------------
# Order model
# ---------------------------------------------------------------------------


def test_order_gets_stable_unique_id() -> None:
    first, second = _make_order(), _make_order()
    assert first.id != second.id
    with pytest.raises(pydantic.ValidationError):
        first.id = second.id


@pytest.mark.parametrize(
    "field, length",
    [("name", 51), ("brand", 21), ("customer_name", 51), ("phone", 31), ("status", 31)],
)
def test_order_rejects_oversize_text(field: str, length: int) -> None:
    with pytest.raises(pydantic.ValidationError):
        _make_order(**{field: "x" * length})
    # exactly at the limit is fine
    assert len(getattr(_make_order(**{field: "x" * (length - 1)}), field)) == length - 1


def test_order_rejects_invalid_dates() -> None:
    with pytest.raises(pydantic.ValidationError):
        _make_order(date_appointment="31-02-2024")
    with pytest.raises(pydantic.ValidationError):
        _make_order(date_issue="soon")


def test_order_issue_date_accepts_sentinel_in_any_case() -> None:
    order = _make_order(date_issue="IN PROGRESS")
    assert order.in_progress
    assert order.issue is None


def test_order_assignment_is_validated() -> None:
    """Editing a field re-runs its validation and keeps the old value on failure."""
    order = _make_order(date_issue="10-01-2024")
    with pytest.raises(pydantic.ValidationError):
        order.date_issue = "not a date"
    assert order.date_issue == "10-01-2024"


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


def test_repository_preserves_insertion_order() -> None:
    repo = OrderRepository()
    orders = [_make_order(name=f"Device {i}") for i in range(3)]
    for order in orders:
        repo.add(order)

    assert repo.all() == orders
    assert repo.get(1) is orders[1]
    assert repo.get_by_id(orders[2].id) is orders[2]


def test_repository_rejects_101st_order() -> None:
    """A full repository refuses the next order and keeps its size."""
    repo = OrderRepository([_make_order() for _ in range(100)])

    with pytest.raises(CapacityExceeded):
        repo.add(_make_order())

    assert len(repo) == 100


def test_repository_remove_at_shifts_following_orders() -> None:
    orders = [_make_order(name=n, price=p) for n, p in [("A", 3.0), ("B", 1.0), ("C", 2.0)]]
    repo = OrderRepository(orders)

    removed = repo.remove_at(0)

    assert removed.name == "A"
    assert [o.name for o in repo.all()] == ["B", "C"]
    assert repo.get(0).name == "B"
    sort_orders("price", repo.all())
    assert [o.name for o in repo.all()] == ["B", "C"]


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_repository_remove_at_out_of_range(index: int) -> None:
    repo = OrderRepository([_make_order(), _make_order()])

    with pytest.raises(IndexOutOfRange):
        repo.remove_at(index)

    assert len(repo) == 2


def test_repository_remove_by_id() -> None:
    keep, drop = _make_order(name="keep"), _make_order(name="drop")
    repo = OrderRepository([keep, drop])

    repo.remove(drop.id)

    assert repo.all() == [keep]
    with pytest.raises(OrderNotFound):
        repo.remove(drop.id)


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------


def test_is_overdue_boundary() -> None:
    """21 days is still on time, 22 days is overdue."""
    start = date(2024, 1, 1)
    assert not is_overdue(start, start + timedelta(days=21))
    assert is_overdue(start, start + timedelta(days=22))


def test_classify() -> None:
    assert classify(_make_order(date_issue=IN_PROGRESS)) is OrderState.pending
    assert classify(_make_order(date_issue="in progress")) is OrderState.pending
    assert classify(_make_order(date_issue="23-01-2024")) is OrderState.overdue
    assert classify(_make_order(date_issue="22-01-2024")) is OrderState.on_time
    assert is_pending(_make_order())


def test_partition_reports_only_overdue_and_pending_with_positions() -> None:
    orders = [
        _make_order(name="on time", date_issue="05-01-2024"),
        _make_order(name="late", date_issue="01-03-2024"),
        _make_order(name="working"),
    ]

    overdue, pending = partition(orders)

    assert [(i, o.name) for i, o in overdue] == [(1, "late")]
    assert [(i, o.name) for i, o in pending] == [(2, "working")]


# ---------------------------------------------------------------------------
# Sorter
# ---------------------------------------------------------------------------


def test_sort_by_price() -> None:
    orders = [_make_order(price=p) for p in (30.5, 10.0, 20.0)]
    sort_orders("price", orders)
    assert [o.price for o in orders] == [10.0, 20.0, 30.5]


def test_sort_text_is_case_sensitive_and_stable() -> None:
    orders = [
        _make_order(brand="sony", name="1"),
        _make_order(brand="Apple", name="2"),
        _make_order(brand="Sony", name="3"),
        _make_order(brand="Apple", name="4"),
    ]
    sort_orders("brand", orders)
    assert [o.name for o in orders] == ["2", "4", "3", "1"]


def test_sort_by_phone_is_numeric() -> None:
    orders = [_make_order(phone=p) for p in ("900", "1000", "+5")]
    sort_orders("phone", orders)
    assert [o.phone for o in orders] == ["+5", "900", "1000"]


def test_sort_by_phone_fails_on_non_numeric_and_keeps_order() -> None:
    orders = [_make_order(phone="300"), _make_order(phone="+7 (916) 123"), _make_order(phone="100")]
    before = list(orders)

    with pytest.raises(InvalidPhoneFormat):
        sort_orders("phone", orders)

    assert orders == before


def test_sort_rejects_unknown_field() -> None:
    with pytest.raises(ValueError):
        sort_orders("date_issue", [_make_order()])


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


def test_search_is_case_insensitive_substring() -> None:
    camera, drum = _make_order(name="Camera A"), _make_order(name="Drum")
    assert search_orders("name", "cam", [camera, drum]) == [camera]
    assert search_orders("name", "  CAMERA ", [camera, drum]) == [camera]


def test_search_empty_query_matches_nothing() -> None:
    orders = [_make_order(), _make_order(name="Drum")]
    assert search_orders("name", "", orders) == []
    assert search_orders("status", "   ", orders) == []


def test_search_returns_new_list_in_repository_order() -> None:
    orders = [
        _make_order(customer_name="Anna Smirnova"),
        _make_order(customer_name="Oleg"),
        _make_order(customer_name="Ivan Smirnov"),
    ]
    result = search_orders("customer_name", "smirnov", orders)

    assert result == [orders[0], orders[2]]
    result.clear()
    assert len(orders) == 3


# ---------------------------------------------------------------------------
# Income
# ---------------------------------------------------------------------------


def test_total_income_inclusive_window() -> None:
    orders = [
        _make_order(price=10.0, date_issue="01-01-2024"),
        _make_order(price=20.0, date_issue="31-01-2024"),
        _make_order(price=40.0, date_issue="31-12-2023"),
        _make_order(price=80.0, date_issue="01-02-2024"),
        _make_order(price=160.0, date_issue=IN_PROGRESS),
    ]
    assert total_income("01-01-2024", "31-01-2024", orders) == pytest.approx(30.0)


def test_total_income_single_day_and_empty() -> None:
    orders = [_make_order(price=12.5, date_issue="15-05-2024")]
    assert total_income("15-05-2024", "15-05-2024", orders) == pytest.approx(12.5)
    assert total_income(date(2024, 1, 1), date(2024, 1, 2), orders) == 0.0


@pytest.mark.parametrize(
    "start, end", [("31-01-2024", "01-01-2024"), ("bad", "01-01-2024"), ("01-01-2024", "32-01-2024")]
)
def test_total_income_invalid_range(start: str, end: str) -> None:
    with pytest.raises(InvalidRange):
        total_income(start, end, [_make_order()])


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------


def test_format_order_line() -> None:
    order = _make_order(price=1500.5, date_issue="10-01-2024")
    assert format_order(order) == (
        "Camera A | Brand: Canon | Customer: Ivan Petrov | Price: 1500.50"
        " | Status: Accepted | Phone: 79161234567"
        " | Received: 01-01-2024 | Issued: 10-01-2024"
    )


def test_format_order_details_uses_placeholder_for_empty_text() -> None:
    block = format_order_details(_make_order(status=""), 3)
    lines = block.splitlines()
    assert lines[0] == "3. Camera A"
    assert "   Status: -" in lines
    assert len(lines) == 8


def test_format_order_list_and_income() -> None:
    assert format_order_list([]) == "No orders found"
    assert format_order_list([_make_order(), _make_order(name="Drum")]).count("\n\n") == 1
    assert format_income("01-01-2024", "31-01-2024", 30) == "From 01-01-2024 to 31-01-2024: 30.00"

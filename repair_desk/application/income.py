from datetime import date

from repair_desk.domain.dates import parse_date
from repair_desk.domain.errors import InvalidRange
from repair_desk.domain.order import Order


def _bound(value: date | str) -> date:
    if isinstance(value, date):
        return value
    parsed = parse_date(value)
    if parsed is None:
        raise InvalidRange(f"Invalid date {value!r}, expected DD-MM-YYYY")
    return parsed


def total_income(start: date | str, end: date | str, orders: list[Order]) -> float:
    """Sum the price of every order issued between ``start`` and ``end`` inclusive.

    Orders still in progress, or whose issue date does not parse, are skipped.

    Raises:
        InvalidRange: if a bound does not parse or ``start`` is after ``end``.
    """
    first, last = _bound(start), _bound(end)
    if first > last:
        raise InvalidRange(f"Start date {first} is after end date {last}")

    total = 0.0
    for order in orders:
        issued = order.issue
        if issued is not None and first <= issued <= last:
            total += order.price
    return total

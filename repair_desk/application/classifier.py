from datetime import date
from enum import StrEnum

from repair_desk.domain.dates import days_between
from repair_desk.domain.order import Order, is_in_progress

OVERDUE_AFTER_DAYS = 21


class OrderState(StrEnum):
    overdue = "overdue"
    pending = "pending"
    on_time = "on_time"


def is_overdue(appointment: date, issue: date, limit: int = OVERDUE_AFTER_DAYS) -> bool:
    """True when the device was issued more than ``limit`` days after intake."""
    return days_between(appointment, issue) > limit


def is_pending(order: Order) -> bool:
    return is_in_progress(order.date_issue)


def classify(order: Order, limit: int = OVERDUE_AFTER_DAYS) -> OrderState:
    if is_pending(order):
        return OrderState.pending
    appointment, issue = order.appointment, order.issue
    if appointment is not None and issue is not None and is_overdue(appointment, issue, limit):
        return OrderState.overdue
    return OrderState.on_time


def partition(
    orders: list[Order], limit: int = OVERDUE_AFTER_DAYS
) -> tuple[list[tuple[int, Order]], list[tuple[int, Order]]]:
    """Split ``orders`` into (overdue, pending), each entry carrying its position.

    On-time orders are left out; only the exceptions are reported.
    """
    overdue: list[tuple[int, Order]] = []
    pending: list[tuple[int, Order]] = []
    for index, order in enumerate(orders):
        state = classify(order, limit)
        if state is OrderState.overdue:
            overdue.append((index, order))
        elif state is OrderState.pending:
            pending.append((index, order))
    return overdue, pending

"""Plain-text rendering of orders for the menu."""

from repair_desk.domain.order import Order

_EMPTY = "-"


def _text(value: object) -> str:
    if value is None or value == "":
        return _EMPTY
    return str(value)


def _price(value: float | None) -> str:
    return _EMPTY if value is None else f"{value:.2f}"


def format_order(order: Order) -> str:
    """One line, fields always in the same order."""
    return (
        f"{_text(order.name)} | Brand: {_text(order.brand)}"
        f" | Customer: {_text(order.customer_name)} | Price: {_price(order.price)}"
        f" | Status: {_text(order.status)} | Phone: {_text(order.phone)}"
        f" | Received: {_text(order.date_appointment)} | Issued: {_text(order.date_issue)}"
    )


def format_order_details(order: Order, position: int) -> str:
    """Multi-line block headed by the 1-based display ``position``."""
    return "\n".join(
        [
            f"{position}. {_text(order.name)}",
            f"   Brand: {_text(order.brand)}",
            f"   Customer: {_text(order.customer_name)}",
            f"   Price: {_price(order.price)}",
            f"   Status: {_text(order.status)}",
            f"   Phone: {_text(order.phone)}",
            f"   Received: {_text(order.date_appointment)}",
            f"   Issued: {_text(order.date_issue)}",
        ]
    )


def format_order_list(orders: list[Order]) -> str:
    if not orders:
        return "No orders found"
    return "\n\n".join(format_order_details(o, i) for i, o in enumerate(orders, start=1))


def format_overdue(order: Order, position: int) -> str:
    return (
        f"{position}. {_text(order.name)} | Brand: {_text(order.brand)}"
        f" | Received: {_text(order.date_appointment)} | Issued: {_text(order.date_issue)}"
        f" | Status: {_text(order.status)}"
    )


def format_pending(order: Order, position: int) -> str:
    return (
        f"{position}. {_text(order.name)} | Brand: {_text(order.brand)}"
        f" | Received: {_text(order.date_appointment)} | Status: {_text(order.status)}"
        f" | {_text(order.date_issue)}"
    )


def format_income(start: str, end: str, total: float) -> str:
    return f"From {start} to {end}: {total:.2f}"

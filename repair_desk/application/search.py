from enum import StrEnum

from repair_desk.domain.order import Order


class SearchField(StrEnum):
    name = "name"
    brand = "brand"
    customer_name = "customer_name"
    status = "status"


def search_orders(field: SearchField | str, query: str, orders: list[Order]) -> list[Order]:
    """Return the orders whose ``field`` contains ``query``, ignoring case.

    A blank query matches nothing rather than everything. The result is a new
    list in repository order.
    """
    field = SearchField(field)
    needle = query.strip().lower()
    if not needle:
        return []
    return [o for o in orders if needle in (getattr(o, field.value) or "").lower()]

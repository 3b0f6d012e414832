import re
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from loguru import logger

from repair_desk.domain.errors import InvalidPhoneFormat
from repair_desk.domain.order import Order

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)


class SortField(StrEnum):
    name = "name"
    brand = "brand"
    customer_name = "customer_name"
    phone = "phone"
    status = "status"
    price = "price"


def _phone_number(order: Order) -> int:
    if not _INTEGER.fullmatch(order.phone):
        raise InvalidPhoneFormat(
            f"Phone {order.phone!r} of order {order.name!r} is not a whole number"
        )
    return int(order.phone)


_SORT_KEYS: dict[SortField, Callable[[Order], Any]] = {
    SortField.name: lambda o: o.name,
    SortField.brand: lambda o: o.brand,
    SortField.customer_name: lambda o: o.customer_name,
    SortField.phone: _phone_number,
    SortField.status: lambda o: o.status,
    SortField.price: lambda o: o.price,
}


def sort_orders(field: SortField | str, orders: list[Order]) -> None:
    """Sort ``orders`` in place, ascending and stable, by ``field``.

    Text compares on the raw stored string, without case folding.

    Raises:
        InvalidPhoneFormat: sorting by phone when any phone is not an integer.
            The list is left untouched.
    """
    field = SortField(field)
    key = _SORT_KEYS[field]
    # Compute every key first so a bad phone aborts before anything moves
    keys = [key(order) for order in orders]
    ordered = [order for _, order in sorted(zip(keys, orders), key=lambda pair: pair[0])]
    orders[:] = ordered
    logger.info(f"Sorted {len(orders)} order(s) by {field}")

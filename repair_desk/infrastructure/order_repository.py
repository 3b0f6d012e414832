from uuid import UUID

from loguru import logger

from repair_desk.domain.errors import CapacityExceeded, IndexOutOfRange, OrderNotFound
from repair_desk.domain.order import Order


class OrderRepository:
    """In-memory, insertion-ordered collection of orders.

    Holds no persistence logic: callers pair every mutation with a save
    through the store (see ``OrderService``).
    """

    MAX_ORDERS = 100

    def __init__(self, orders: list[Order] | None = None, capacity: int = MAX_ORDERS) -> None:
        self._capacity = capacity
        self._orders: list[Order] = list(orders or [])
        if len(self._orders) > capacity:
            logger.warning(
                f"Loaded {len(self._orders)} orders, above capacity {capacity} — "
                f"no further orders can be added"
            )

    def __len__(self) -> int:
        return len(self._orders)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._orders) >= self._capacity

    def add(self, order: Order) -> None:
        if self.is_full:
            raise CapacityExceeded(f"Maximum number of orders reached ({self._capacity})")
        self._orders.append(order)

    def get(self, index: int) -> Order:
        self._check_index(index)
        return self._orders[index]

    def get_by_id(self, order_id: UUID) -> Order:
        return self._orders[self.index_of(order_id)]

    def index_of(self, order_id: UUID) -> int:
        for index, order in enumerate(self._orders):
            if order.id == order_id:
                return index
        raise OrderNotFound(f"No order with id {order_id}")

    def remove_at(self, index: int) -> Order:
        self._check_index(index)
        return self._orders.pop(index)

    def remove(self, order_id: UUID) -> Order:
        return self._orders.pop(self.index_of(order_id))

    def all(self) -> list[Order]:
        """The live list; sorting it reorders the repository."""
        return self._orders

    def _check_index(self, index: int) -> None:
        # negative indexes are selections, not Python-style offsets from the end
        if not 0 <= index < len(self._orders):
            raise IndexOutOfRange(
                f"Index {index} out of range, {len(self._orders)} order(s) stored"
            )

from typing import Any
from uuid import UUID

import pydantic
from loguru import logger

from repair_desk.application.classifier import OVERDUE_AFTER_DAYS, partition
from repair_desk.application.income import total_income
from repair_desk.application.search import SearchField, search_orders
from repair_desk.application.sorter import SortField, sort_orders
from repair_desk.domain.errors import CapacityExceeded, PersistenceFailure, ValidationError
from repair_desk.domain.interfaces import IOrderStore
from repair_desk.domain.order import Order, OrderField
from repair_desk.infrastructure.order_repository import OrderRepository


def to_validation_error(exc: pydantic.ValidationError) -> ValidationError:
    """Collapse a pydantic error into the domain ``ValidationError``."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'value'}: {err['msg']}"
        for err in exc.errors()
    )
    return ValidationError(details)


class OrderService:
    """Application service for order-related operations.

    Every mutation is applied to the repository first and then the whole
    collection is saved. A failed save keeps the change in memory, raises
    ``PersistenceFailure`` and leaves ``unsaved`` set until a later save
    succeeds.
    """

    def __init__(
        self,
        store: IOrderStore,
        capacity: int = OrderRepository.MAX_ORDERS,
        overdue_after_days: int = OVERDUE_AFTER_DAYS,
    ) -> None:
        self._store = store
        self._capacity = capacity
        self._overdue_after_days = overdue_after_days
        self._repository = OrderRepository(capacity=capacity)
        self.unsaved = False

    def load(self) -> None:
        """Load orders from the store, creating an empty store on first run."""
        orders = self._store.load_orders()
        if orders is None:
            logger.info("No saved orders found — creating an empty order store")
            self._repository = OrderRepository(capacity=self._capacity)
            self._persist()
            return
        self._repository = OrderRepository(orders, capacity=self._capacity)
        logger.info(f"Loaded {len(orders)} order(s)")

    @property
    def orders(self) -> list[Order]:
        return self._repository.all()

    @property
    def repository(self) -> OrderRepository:
        return self._repository

    def create_order(self, **fields: Any) -> Order:
        """Validate ``fields`` into a new ``Order`` and append it.

        Raises:
            CapacityExceeded: the repository is full; nothing is validated.
            ValidationError: a field breaks its constraint.
        """
        if self._repository.is_full:
            raise CapacityExceeded(
                f"Maximum number of orders reached ({self._repository.capacity})"
            )
        try:
            order = Order(**fields)
        except pydantic.ValidationError as exc:
            raise to_validation_error(exc) from exc
        self._repository.add(order)
        logger.info(f"Order {order.id} ({order.name}) added")
        self._persist()
        return order

    def update_order(self, order_id: UUID, field: OrderField | str, value: Any) -> Order:
        """Replace a single field; the other fields are not re-checked against it."""
        order = self._repository.get_by_id(order_id)
        field = OrderField(field)
        try:
            setattr(order, field.value, value)
        except pydantic.ValidationError as exc:
            raise to_validation_error(exc) from exc
        logger.info(f"Order {order.id}: {field} updated")
        self._persist()
        return order

    def delete_order(self, order_id: UUID) -> Order:
        order = self._repository.remove(order_id)
        logger.info(f"Order {order.id} ({order.name}) deleted")
        self._persist()
        return order

    def sort(self, field: SortField | str) -> None:
        sort_orders(field, self._repository.all())
        self._persist()

    def search(self, field: SearchField | str, query: str) -> list[Order]:
        return search_orders(field, query, self._repository.all())

    def unfinished(self) -> tuple[list[tuple[int, Order]], list[tuple[int, Order]]]:
        """(overdue, pending) orders with their current positions."""
        return partition(self._repository.all(), self._overdue_after_days)

    def income(self, start: str, end: str) -> float:
        return total_income(start, end, self._repository.all())

    def save(self) -> None:
        self._persist()

    def _persist(self) -> None:
        try:
            self._store.save_orders(list(self._repository.all()))
        except PersistenceFailure:
            self.unsaved = True
            logger.warning("Orders changed in memory but could not be saved")
            raise
        self.unsaved = False

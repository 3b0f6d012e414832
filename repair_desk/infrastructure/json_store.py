import os
from pathlib import Path
from typing import TypeVar

from loguru import logger
from pydantic import TypeAdapter

from repair_desk.domain.order import Order
from repair_desk.domain.user import User
from repair_desk.shared.decorators import as_persistence_failure, log_errors

T = TypeVar("T")

_ORDERS = TypeAdapter(list[Order])
_USERS = TypeAdapter(list[User])


class JsonFileStore:
    """Keeps orders and users as JSON arrays in two files.

    A missing file loads as ``None`` so the caller can bootstrap it; an
    unreadable or corrupt file raises ``PersistenceFailure`` instead of being
    silently replaced.
    """

    def __init__(self, orders_path: str | Path, users_path: str | Path) -> None:
        self._orders_path = Path(orders_path)
        self._users_path = Path(users_path)

    def load_orders(self) -> list[Order] | None:
        return self._read(self._orders_path, _ORDERS)

    def save_orders(self, orders: list[Order]) -> None:
        self._write(self._orders_path, _ORDERS, orders)

    def load_users(self) -> list[User] | None:
        return self._read(self._users_path, _USERS)

    def save_users(self, users: list[User]) -> None:
        self._write(self._users_path, _USERS, users)

    @log_errors
    @as_persistence_failure
    def _read(self, path: Path, adapter: TypeAdapter[list[T]]) -> list[T] | None:
        if not path.exists():
            logger.info(f"{path} does not exist yet")
            return None
        items = adapter.validate_json(path.read_bytes())
        logger.debug(f"Loaded {len(items)} record(s) from {path}")
        return items

    @log_errors
    @as_persistence_failure
    def _write(self, path: Path, adapter: TypeAdapter[list[T]], items: list[T]) -> None:
        # Write next to the target then swap, so a failed write never truncates it
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(adapter.dump_json(items, indent=2))
        os.replace(tmp_path, path)
        logger.debug(f"Saved {len(items)} record(s) to {path}")

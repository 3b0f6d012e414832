from typing import Protocol

from .order import Order
from .user import User


class IOrderStore(Protocol):
    def load_orders(self) -> list[Order] | None:
        """Return the saved orders, or ``None`` when nothing was saved yet."""
        ...

    def save_orders(self, orders: list[Order]) -> None: ...


class IUserStore(Protocol):
    def load_users(self) -> list[User] | None:
        """Return the saved users, or ``None`` when nothing was saved yet."""
        ...

    def save_users(self, users: list[User]) -> None: ...


class IPasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, password_hash: str) -> bool: ...

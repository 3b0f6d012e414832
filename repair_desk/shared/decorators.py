from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from loguru import logger

from repair_desk.domain.errors import PersistenceFailure

P = ParamSpec("P")
R = TypeVar("R")


def log_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Catch, log, and re-raise any exception raised by the decorated method.

    The log line includes the fully-qualified function name, exception type,
    and message so the source is immediately identifiable without a traceback.

    Usage::

        @log_errors
        def save_orders(self, orders: list[Order]) -> None: ...
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            logger.error(f"[{func.__qualname__}] {type(exc).__name__}: {exc}")
            raise

    return wrapper


def as_persistence_failure(func: Callable[P, R]) -> Callable[P, R]:
    """Re-raise I/O and decoding errors from a store method as ``PersistenceFailure``.

    The original exception is chained so the log keeps the real cause.
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except PersistenceFailure:
            raise
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(f"{func.__name__} failed: {exc}") from exc

    return wrapper

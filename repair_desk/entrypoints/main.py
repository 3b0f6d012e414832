import sys

from loguru import logger

from repair_desk.application.order_service import OrderService
from repair_desk.application.user_service import UserService
from repair_desk.domain.errors import PersistenceFailure
from repair_desk.entrypoints.menu import Menu, Session
from repair_desk.entrypoints.settings import Config, config
from repair_desk.infrastructure.json_store import JsonFileStore
from repair_desk.infrastructure.password_hasher import PasslibHasher


def configure_logging(settings: Config) -> None:
    """Full log to the log file; only warnings reach the terminal the menu uses."""
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
    logger.add(settings.LOG_FILE, level=settings.LOG_LEVEL, encoding="utf-8")


def build_session(settings: Config) -> Session:
    """Wire the store and services and load saved data.

    Raises:
        PersistenceFailure: a data file exists but cannot be read.
    """
    store = JsonFileStore(settings.ORDERS_FILE, settings.USERS_FILE)

    user_service = UserService(store, PasslibHasher(), max_users=settings.MAX_USERS)
    if user_service.bootstrap(settings.DEFAULT_ADMIN_LOGIN, settings.DEFAULT_ADMIN_PASSWORD):
        print(
            f"Default admin created. Login: {settings.DEFAULT_ADMIN_LOGIN} "
            f"Password: {settings.DEFAULT_ADMIN_PASSWORD}"
        )

    order_service = OrderService(
        store,
        capacity=settings.MAX_ORDERS,
        overdue_after_days=settings.OVERDUE_AFTER_DAYS,
    )
    order_service.load()
    return Session(orders=order_service, users=user_service)


def main() -> int:
    configure_logging(config)
    try:
        session = build_session(config)
    except PersistenceFailure as exc:
        logger.error(f"Could not initialise data: {exc}")
        print("Could not initialise data")
        return 1

    Menu(session).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

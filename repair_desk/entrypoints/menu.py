"""Interactive text menu over the order and user services."""

from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from repair_desk.application.formatter import (
    format_income,
    format_order_details,
    format_order_list,
    format_overdue,
    format_pending,
)
from repair_desk.application.order_service import OrderService
from repair_desk.application.search import SearchField
from repair_desk.application.sorter import SortField
from repair_desk.application.user_service import UserService
from repair_desk.domain.dates import is_valid_date
from repair_desk.domain.errors import PersistenceFailure, RepairDeskError
from repair_desk.domain.order import IN_PROGRESS, TEXT_LIMITS, Order, OrderField
from repair_desk.domain.user import MAX_LOGIN_LENGTH, MAX_PASSWORD_LENGTH, User, UserRole

DATE_HINT = "DD-MM-YYYY"

SORT_CHOICES: dict[int, tuple[str, SortField]] = {
    1: ("Device name", SortField.name),
    2: ("Brand", SortField.brand),
    3: ("Customer name", SortField.customer_name),
    4: ("Customer phone", SortField.phone),
    5: ("Order status", SortField.status),
    6: ("Price", SortField.price),
}

SEARCH_CHOICES: dict[int, tuple[str, SearchField]] = {
    1: ("Device name", SearchField.name),
    2: ("Brand", SearchField.brand),
    3: ("Customer name", SearchField.customer_name),
    4: ("Order status", SearchField.status),
}

EDIT_CHOICES: dict[int, tuple[str, OrderField]] = {
    1: ("Device name", OrderField.name),
    2: ("Brand", OrderField.brand),
    3: ("Customer name", OrderField.customer_name),
    4: ("Price", OrderField.price),
    5: ("Status", OrderField.status),
    6: ("Customer phone", OrderField.phone),
    7: ("Date received", OrderField.date_appointment),
    8: ("Date issued", OrderField.date_issue),
}

ROLE_CHOICES: dict[int, UserRole] = {1: UserRole.admin, 2: UserRole.user}

MenuItems = list[tuple[str, Callable[[], None]]]


@dataclass
class Session:
    """Everything one run of the menu works on, passed around explicitly."""

    orders: OrderService
    users: UserService
    current_user: User | None = None


class Menu:
    """Admin and user menus. ``read`` and ``write`` default to the console."""

    def __init__(
        self,
        session: Session,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._session = session
        self._read = read
        self._write = write

    # ------------------------------------------------------------------
    # Top level
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Alternate between the login screen and the role's menu until quit."""
        try:
            while self._login_screen():
                user = self._session.current_user
                assert user is not None
                if user.is_admin:
                    self._admin_menu()
                else:
                    self._user_menu()
                logger.info(f"User {user.login!r} logged out")
                self._session.current_user = None
        except EOFError:
            self._write("")
        self._write("Goodbye!")

    def _login_screen(self) -> bool:
        """Prompt until someone logs in; an empty login quits."""
        while self._session.current_user is None:
            self._write("\n=== Service centre order management ===")
            self._write("Log in to continue (leave login empty to quit)\n")
            login = self._read("Login: ").strip()
            if not login:
                return False
            password = self._read("Password: ").strip()
            if len(login) > MAX_LOGIN_LENGTH:
                self._write(f"Invalid login format (max {MAX_LOGIN_LENGTH} characters)")
                continue
            if not password or len(password) > MAX_PASSWORD_LENGTH:
                self._write(f"Invalid password format (max {MAX_PASSWORD_LENGTH} characters)")
                continue
            user = self._session.users.login(login, password)
            if user is None:
                self._write("\nWrong login or password")
                continue
            self._session.current_user = user
            self._write(f"\nWelcome, {login}.")
        return True

    def _admin_menu(self) -> None:
        self._menu(
            "Administrator menu",
            [
                ("Manage orders", self._order_menu),
                ("Manage users", self._user_management_menu),
            ],
            exit_label="Log out",
        )

    def _user_menu(self) -> None:
        self._menu(
            "User menu",
            [
                ("Show orders", self.show_orders),
                ("Sort orders", self.sort_orders),
                ("Show unfinished orders", self.show_unfinished),
                ("Show total income", self.show_income),
            ],
            exit_label="Log out",
        )

    def _order_menu(self) -> None:
        self._menu(
            "Order management",
            [
                ("Add order", self.add_order),
                ("Edit order", self.edit_order),
                ("Delete order", self.delete_order),
                ("Show orders", self.show_orders),
                ("Sort orders", self.sort_orders),
                ("Search orders", self.search_orders),
                ("Show unfinished orders", self.show_unfinished),
                ("Show total income", self.show_income),
            ],
            exit_label="Back to main menu",
        )

    def _user_management_menu(self) -> None:
        self._menu(
            "User management",
            [
                ("Add user", self.add_user),
                ("Edit user", self.edit_user),
                ("Delete user", self.delete_user),
                ("Show users", self.show_users),
            ],
            exit_label="Back to main menu",
        )

    def _menu(self, title: str, items: MenuItems, exit_label: str) -> None:
        while True:
            self._write(f"\n=== {title} ===")
            for number, (label, _) in enumerate(items, start=1):
                self._write(f"{number}. {label}")
            self._write(f"0. {exit_label}")
            choice = self._ask_int("\nChoice: ")
            if choice == 0:
                return
            if not 1 <= choice <= len(items):
                self._write("Invalid choice")
                continue
            self._guarded(items[choice - 1][1])

    def _guarded(self, action: Callable[[], None]) -> None:
        """Run one menu action; its errors are reported and the session goes on."""
        try:
            action()
        except PersistenceFailure as exc:
            self._write(f"Changes are kept in memory but could not be saved: {exc}")
        except RepairDeskError as exc:
            self._write(f"Error: {exc}")

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def add_order(self) -> None:
        service = self._session.orders
        if service.repository.is_full:
            self._write(f"Maximum number of orders reached ({service.repository.capacity})")
            return
        fields = {
            "name": self._ask_limited("Device name", TEXT_LIMITS[OrderField.name]),
            "brand": self._ask_limited("Brand", TEXT_LIMITS[OrderField.brand]),
            "customer_name": self._ask_limited(
                "Customer name", TEXT_LIMITS[OrderField.customer_name]
            ),
            "price": self._ask_price("Price: "),
            "phone": self._ask_limited("Customer phone", TEXT_LIMITS[OrderField.phone]),
            "status": self._ask_limited("Order status", TEXT_LIMITS[OrderField.status]),
            "date_appointment": self._ask_date(f"Date received ({DATE_HINT}): "),
            "date_issue": self._ask_issue_date(),
        }
        service.create_order(**fields)
        self._write("Order added")

    def edit_order(self) -> None:
        order = self._choose_order("Choose an order to edit")
        if order is None:
            return
        while True:
            position = self._session.orders.repository.index_of(order.id) + 1
            self._write(f"\nEditing order:\n{format_order_details(order, position)}\n")
            for number, (label, _) in EDIT_CHOICES.items():
                self._write(f"{number}. Edit {label.lower()}")
            self._write("0. Finish editing")
            choice = self._ask_int("Choice: ")
            if choice == 0:
                return
            if choice not in EDIT_CHOICES:
                self._write("Invalid choice")
                continue
            label, field = EDIT_CHOICES[choice]
            if field is OrderField.price:
                value: object = self._ask_price(f"New {label.lower()}: ")
            elif field is OrderField.date_appointment:
                value = self._ask_date(f"New {label.lower()} ({DATE_HINT}): ")
            elif field is OrderField.date_issue:
                value = self._ask_issue_date()
            else:
                value = self._read(f"New {label.lower()}: ")
            self._guarded(lambda: self._apply_edit(order, field, value))

    def _apply_edit(self, order: Order, field: OrderField, value: object) -> None:
        self._session.orders.update_order(order.id, field, value)
        self._write("Order updated")

    def delete_order(self) -> None:
        order = self._choose_order("Choose an order to delete")
        if order is None:
            return
        if self._ask_int(f"Delete order {order.name}? (1 - Yes, 0 - No): ") != 1:
            return
        self._session.orders.delete_order(order.id)
        self._write("Order deleted")

    def show_orders(self) -> None:
        orders = self._session.orders.orders
        if orders:
            self._write("=== Orders ===\n")
        self._write(format_order_list(orders))

    def sort_orders(self) -> None:
        if not self._session.orders.orders:
            self._write("No orders to sort")
            return
        self._write("Sort by:")
        for number, (label, _) in SORT_CHOICES.items():
            self._write(f"{number}. {label}")
        choice = self._ask_int("Choice: ")
        if choice not in SORT_CHOICES:
            self._write("Invalid choice")
            return
        label, field = SORT_CHOICES[choice]
        self._session.orders.sort(field)
        self._write(f"Orders sorted by {label.lower()}")

    def search_orders(self) -> None:
        if not self._session.orders.orders:
            self._write("No orders to search")
            return
        while True:
            self._write("\n=== Search orders ===")
            for number, (label, _) in SEARCH_CHOICES.items():
                self._write(f"{number}. Search by {label.lower()}")
            self._write("0. Leave search")
            choice = self._ask_int("Choice: ")
            if choice == 0:
                return
            if choice not in SEARCH_CHOICES:
                self._write("Invalid choice")
                continue
            label, field = SEARCH_CHOICES[choice]
            query = self._read(f"{label} to search for: ")
            results = self._session.orders.search(field, query)
            if not results:
                self._write("No orders found")
                continue
            self._write(f"\n=== Search results ===\nFound {len(results)} order(s)\n")
            self._write(format_order_list(results))

    def show_unfinished(self) -> None:
        if not self._session.orders.orders:
            self._write("No orders to check")
            return
        overdue, pending = self._session.orders.unfinished()
        self._write("=== Overdue orders ===\n")
        for index, order in overdue:
            self._write(format_overdue(order, index + 1))
        if not overdue:
            self._write("No overdue orders")
        self._write("\n=== Orders in progress ===\n")
        for index, order in pending:
            self._write(format_pending(order, index + 1))
        if not pending:
            self._write("No orders in progress")

    def show_income(self) -> None:
        if not self._session.orders.orders:
            self._write("No orders to calculate income from")
            return
        start = self._read(f"Start date ({DATE_HINT}): ").strip()
        end = self._read(f"End date ({DATE_HINT}): ").strip()
        total = self._session.orders.income(start, end)
        self._write("\n=== Total income ===")
        self._write(format_income(start, end, total))

    def _choose_order(self, prompt: str) -> Order | None:
        service = self._session.orders
        if not service.orders:
            self._write("No orders found")
            return None
        self._write("Orders:")
        for number, order in enumerate(service.orders, start=1):
            self._write(f"{number}. {order.name} (Brand: {order.brand})")
        choice = self._ask_int(f"\n{prompt} (0 to go back): ")
        if choice == 0:
            return None
        return service.repository.get(choice - 1)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def add_user(self) -> None:
        login = self._read(f"Login (max {MAX_LOGIN_LENGTH} characters): ").strip()
        password = self._read(f"Password (max {MAX_PASSWORD_LENGTH} characters): ").strip()
        role = self._ask_role()
        if role is None:
            return
        self._session.users.add_user(login, password, role)
        self._write("User added")

    def edit_user(self) -> None:
        user = self._choose_user("Choose a user to edit")
        if user is None:
            return
        self._write(f"\nEditing user {user.login}")
        self._write("1. Change password")
        self._write("2. Change role")
        self._write("0. Finish editing")
        choice = self._ask_int("Choice: ")
        actor = self._actor()
        if choice == 1:
            password = self._read("New password: ").strip()
            self._session.users.change_password(actor, user.login, password)
            self._write("Password changed")
        elif choice == 2:
            role = self._ask_role()
            if role is not None:
                self._session.users.change_role(actor, user.login, role)
                self._write("Role changed")
        elif choice != 0:
            self._write("Invalid choice")

    def delete_user(self) -> None:
        user = self._choose_user("Choose a user to delete")
        if user is None:
            return
        if self._ask_int(f"Delete user {user.login}? (1 - Yes, 0 - No): ") != 1:
            return
        self._session.users.delete_user(self._actor(), user.login)
        self._write("User deleted")

    def show_users(self) -> None:
        users = self._session.users.users()
        if not users:
            self._write("No users found")
            return
        self._write("=== Users ===\n")
        for number, user in enumerate(users, start=1):
            self._write(f"{number}. {user.login} ({user.role})")

    def _choose_user(self, prompt: str) -> User | None:
        users = self._session.users.users()
        self.show_users()
        if not users:
            return None
        choice = self._ask_int(f"\n{prompt} (0 to go back): ")
        if choice == 0:
            return None
        if not 1 <= choice <= len(users):
            self._write("Invalid choice")
            return None
        return users[choice - 1]

    def _ask_role(self) -> UserRole | None:
        role = ROLE_CHOICES.get(self._ask_int("Role (1 - admin, 2 - user): "))
        if role is None:
            self._write("Invalid role")
        return role

    def _actor(self) -> User:
        user = self._session.current_user
        assert user is not None, "user management requires a logged-in admin"
        return user

    # ------------------------------------------------------------------
    # Input helpers
    # ------------------------------------------------------------------

    def _ask_int(self, prompt: str) -> int:
        while True:
            raw = self._read(prompt).strip()
            try:
                return int(raw)
            except ValueError:
                self._write("Please enter a number")

    def _ask_price(self, prompt: str) -> float:
        while True:
            raw = self._read(prompt).strip().replace(",", ".")
            try:
                return float(raw)
            except ValueError:
                self._write("Please enter a price such as 1500 or 99.90")

    def _ask_limited(self, label: str, limit: int) -> str:
        value = self._read(f"{label} (max {limit} characters): ")
        if len(value) > limit:
            self._write(f"Warning: {len(value)} characters entered, truncated to {limit}")
            return value[:limit]
        return value

    def _ask_date(self, prompt: str) -> str:
        while True:
            value = self._read(prompt).strip()
            if is_valid_date(value):
                return value
            self._write(f"Invalid date, use {DATE_HINT}")

    def _ask_issue_date(self) -> str:
        while True:
            self._write("\nChoose an option:")
            self._write(f"1. Enter the issue date ({DATE_HINT})")
            self._write(f"2. Mark as '{IN_PROGRESS}'")
            choice = self._ask_int("Your choice: ")
            if choice == 1:
                value = self._read(f"Date issued ({DATE_HINT}): ").strip()
                if is_valid_date(value):
                    return value
                self._write(f"Invalid date, use {DATE_HINT}")
            elif choice == 2:
                self._write(IN_PROGRESS)
                return IN_PROGRESS
            else:
                self._write("Invalid choice, try again")

import pydantic
from loguru import logger

from repair_desk.application.order_service import to_validation_error
from repair_desk.domain.errors import (
    CapacityExceeded,
    PersistenceFailure,
    UserError,
    ValidationError,
)
from repair_desk.domain.interfaces import IPasswordHasher, IUserStore
from repair_desk.domain.user import MAX_LOGIN_LENGTH, MAX_PASSWORD_LENGTH, User, UserRole

MAX_USERS = 50


def _valid_login(login: str) -> bool:
    return 0 < len(login) <= MAX_LOGIN_LENGTH


def _valid_password(password: str) -> bool:
    return 0 < len(password) <= MAX_PASSWORD_LENGTH


class UserService:
    """Staff accounts: login, and add/edit/delete for admins.

    Users are addressed by their unique login. Saving follows the same rule
    as ``OrderService``: mutate first, then save, keep the change on failure.
    """

    def __init__(
        self,
        store: IUserStore,
        hasher: IPasswordHasher,
        max_users: int = MAX_USERS,
    ) -> None:
        self._store = store
        self._hasher = hasher
        self._max_users = max_users
        self._users: list[User] = []
        self.unsaved = False

    def bootstrap(self, default_login: str, default_password: str) -> bool:
        """Load users; on first run create the default admin.

        Returns True when the default admin had to be created.
        """
        users = self._store.load_users()
        if users is not None:
            self._users = users
            logger.info(f"Loaded {len(users)} user(s)")
            return False
        self._users = [
            User(
                login=default_login,
                password_hash=self._hasher.hash(default_password),
                role=UserRole.admin,
            )
        ]
        logger.info(f"No saved users found — default admin {default_login!r} created")
        self._persist()
        return True

    def users(self) -> list[User]:
        return list(self._users)

    def login(self, login: str, password: str) -> User | None:
        if not _valid_login(login) or not _valid_password(password):
            logger.info("Rejected login with malformed credentials")
            return None
        for user in self._users:
            if user.login == login and self._hasher.verify(password, user.password_hash):
                logger.info(f"User {login!r} logged in")
                return user
        logger.info(f"Failed login for {login!r}")
        return None

    def get(self, login: str) -> User:
        for user in self._users:
            if user.login == login:
                return user
        raise UserError(f"No user {login!r}")

    def add_user(self, login: str, password: str, role: UserRole | str) -> User:
        if len(self._users) >= self._max_users:
            raise CapacityExceeded(f"Maximum number of users reached ({self._max_users})")
        if any(user.login == login for user in self._users):
            raise UserError(f"Login {login!r} already exists")
        self._check_password(password)
        try:
            user = User(login=login, password_hash=self._hasher.hash(password), role=role)
        except pydantic.ValidationError as exc:
            raise to_validation_error(exc) from exc
        self._users.append(user)
        logger.info(f"User {login!r} added as {user.role}")
        self._persist()
        return user

    def change_password(self, actor: User, login: str, password: str) -> None:
        user = self._editable(actor, login)
        self._check_password(password)
        user.password_hash = self._hasher.hash(password)
        logger.info(f"Password of {login!r} changed by {actor.login!r}")
        self._persist()

    def change_role(self, actor: User, login: str, role: UserRole | str) -> None:
        user = self._editable(actor, login)
        try:
            user.role = role
        except pydantic.ValidationError as exc:
            raise to_validation_error(exc) from exc
        logger.info(f"Role of {login!r} set to {user.role} by {actor.login!r}")
        self._persist()

    def delete_user(self, actor: User, login: str) -> User:
        user = self._editable(actor, login)
        self._users.remove(user)
        logger.info(f"User {login!r} deleted by {actor.login!r}")
        self._persist()
        return user

    def _editable(self, actor: User, login: str) -> User:
        if actor.login == login:
            raise UserError("You cannot modify your own account")
        return self.get(login)

    @staticmethod
    def _check_password(password: str) -> None:
        if not _valid_password(password):
            raise ValidationError(
                f"Password must be 1 to {MAX_PASSWORD_LENGTH} characters long"
            )

    def _persist(self) -> None:
        try:
            self._store.save_users(list(self._users))
        except PersistenceFailure:
            self.unsaved = True
            logger.warning("Users changed in memory but could not be saved")
            raise
        self.unsaved = False

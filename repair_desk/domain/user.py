from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

MAX_LOGIN_LENGTH = 15
MAX_PASSWORD_LENGTH = 15


class UserRole(StrEnum):
    admin = "admin"
    user = "user"


class User(BaseModel):
    """A staff account. Admins manage orders and users, users only read."""

    model_config = ConfigDict(validate_assignment=True)

    login: str = Field(min_length=1, max_length=MAX_LOGIN_LENGTH)
    password_hash: str
    role: UserRole = UserRole.user

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

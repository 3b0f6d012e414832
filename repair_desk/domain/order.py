from datetime import date
from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .dates import is_valid_date, parse_date

# Written exactly like this, matched case-insensitively on read
IN_PROGRESS = "In progress"

MAX_NAME_LENGTH = 50
MAX_BRAND_LENGTH = 20
MAX_CUSTOMER_NAME_LENGTH = 50
MAX_PHONE_LENGTH = 30
MAX_STATUS_LENGTH = 30


class OrderField(StrEnum):
    """Editable order fields, in the order the menu lists them."""

    name = "name"
    brand = "brand"
    customer_name = "customer_name"
    price = "price"
    status = "status"
    phone = "phone"
    date_appointment = "date_appointment"
    date_issue = "date_issue"


TEXT_LIMITS: dict[OrderField, int] = {
    OrderField.name: MAX_NAME_LENGTH,
    OrderField.brand: MAX_BRAND_LENGTH,
    OrderField.customer_name: MAX_CUSTOMER_NAME_LENGTH,
    OrderField.phone: MAX_PHONE_LENGTH,
    OrderField.status: MAX_STATUS_LENGTH,
}


def is_in_progress(value: str | None) -> bool:
    return value is not None and value.lower() == IN_PROGRESS.lower()


class Order(BaseModel):
    """A device handed in for repair.

    ``id`` is assigned once and never changes; the position of an order in
    the repository is only a display number.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, frozen=True)
    name: str = Field(max_length=MAX_NAME_LENGTH)
    brand: str = Field(max_length=MAX_BRAND_LENGTH)
    customer_name: str = Field(max_length=MAX_CUSTOMER_NAME_LENGTH)
    phone: str = Field(max_length=MAX_PHONE_LENGTH)
    status: str = Field(max_length=MAX_STATUS_LENGTH)
    price: float
    date_appointment: str  # DD-MM-YYYY
    date_issue: str  # DD-MM-YYYY or IN_PROGRESS

    @field_validator("date_appointment")
    @classmethod
    def _check_appointment(cls, value: str) -> str:
        if not is_valid_date(value):
            raise ValueError(f"invalid date {value!r}, expected DD-MM-YYYY")
        return value

    @field_validator("date_issue")
    @classmethod
    def _check_issue(cls, value: str) -> str:
        if is_in_progress(value) or is_valid_date(value):
            return value
        raise ValueError(
            f"invalid issue date {value!r}, expected DD-MM-YYYY or {IN_PROGRESS!r}"
        )

    @property
    def appointment(self) -> date | None:
        return parse_date(self.date_appointment)

    @property
    def issue(self) -> date | None:
        """Parsed issue date, ``None`` while the order is in progress."""
        return parse_date(self.date_issue)

    @property
    def in_progress(self) -> bool:
        return is_in_progress(self.date_issue)

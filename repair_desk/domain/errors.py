"""Exception taxonomy for the repair desk core.

Every error raised deliberately by the core derives from ``RepairDeskError``
so the menu layer can report it and carry on with the session.
"""


class RepairDeskError(Exception):
    """Base class for all repair desk errors."""


class ValidationError(RepairDeskError):
    """Malformed date, oversize text or otherwise invalid field value."""


class InvalidPhoneFormat(ValidationError):
    """Raised when a phone number must be compared as an integer but is not one."""


class CapacityExceeded(RepairDeskError):
    """Raised when adding to a collection that is already full."""


class IndexOutOfRange(RepairDeskError):
    """Raised when a selection lies outside the current list bounds."""


class OrderNotFound(RepairDeskError):
    """Raised when no order carries the requested id."""


class InvalidRange(RepairDeskError):
    """Raised when a date range bound is unparseable or start is after end."""


class PersistenceFailure(RepairDeskError):
    """Raised when the store cannot read or write its data."""


class UserError(RepairDeskError):
    """Raised for rejected user-management operations."""

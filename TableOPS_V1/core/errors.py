"""
Error types raised by the reservation core and its collaborators.
"""

from enum import Enum


class ErrorReason(Enum):
    # Format errors
    INVALID_PHONE = "invalid_phone"
    INVALID_DATE = "invalid_date"
    INVALID_TIME = "invalid_time"
    INVALID_RESERVATION_ID = "invalid_reservation_id"
    # Range / business errors
    INVALID_PARTY_SIZE = "invalid_party_size"
    INVALID_TABLE = "invalid_table"
    # State conflicts
    TABLE_BOOKED = "table_booked"
    DUPLICATE_RESERVATION_ID = "duplicate_reservation_id"
    RESERVATION_NOT_FOUND = "reservation_not_found"


class ReservationError(Exception):
    """A request the engine refused; no state was changed.

    Attributes:
        reason: Machine-readable tag for the violated rule.
        message: Text meant to be shown to the user as is.
    """

    def __init__(self, reason: ErrorReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


class AuditSinkError(Exception):
    """The audit log could not be written or read; the action was not carried out."""


class AccountError(Exception):
    """Account creation refused (duplicate username, unsupported role)."""

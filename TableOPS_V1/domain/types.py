# tableops/domain/types.py
from enum import Enum
from typing import Dict, Tuple

from pydantic import BaseModel, Field


class TableStatus(Enum):
    AVAILABLE = "AVAILABLE"
    BOOKED = "BOOKED"


class Role(Enum):
    # Values are what the audit log and the menus display
    ADMIN = "Admin"
    RECEPTIONIST = "Receptionist"
    CUSTOMER = "Customer"


class Capability(Enum):
    """Operations a role may reach from its menu."""

    VIEW_OWN_RESERVATIONS = "View My Reservations"
    RESERVE_TABLE = "Reserve Table"
    VIEW_AVAILABILITY = "View Table Availability"
    UPDATE_RESERVATION = "Update Reservation"
    CANCEL_RESERVATION = "Cancel Reservation"
    VIEW_LOGS = "View Logs"
    CREATE_RECEPTIONIST = "Create Receptionist Account"


# Menu order per role; "Exit" is always appended by the menu loop
ROLE_CAPABILITIES: Dict[Role, Tuple[Capability, ...]] = {
    Role.CUSTOMER: (
        Capability.VIEW_OWN_RESERVATIONS,
        Capability.RESERVE_TABLE,
        Capability.VIEW_AVAILABILITY,
        Capability.UPDATE_RESERVATION,
        Capability.CANCEL_RESERVATION,
    ),
    Role.RECEPTIONIST: (
        Capability.VIEW_LOGS,
        Capability.VIEW_AVAILABILITY,
    ),
    Role.ADMIN: (
        Capability.VIEW_LOGS,
        Capability.VIEW_AVAILABILITY,
        Capability.UPDATE_RESERVATION,
        Capability.CANCEL_RESERVATION,
        Capability.CREATE_RECEPTIONIST,
    ),
}


# ---------- ReferenceClock ----------


class ReferenceClock(BaseModel):
    """Configured "now" used by the date/time rules and the audit timestamps.

    The wall clock is never consulted so that every check is reproducible.
    """

    date: str = Field(pattern=r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)

    @property
    def time(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def timestamp(self) -> str:
        """Audit log stamp, e.g. ``[2025-05-19 22:19:00]``."""
        return f"[{self.date} {self.time}:00]"

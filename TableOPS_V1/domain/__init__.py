"""
Domain objects for TableOPS.

The domain layer holds the plain business objects: reservations, table
states, user roles and the reference clock.  They carry no engine state
and have no side effects, which eases unit testing.
"""

from .reservation import Reservation
from .types import Capability, ReferenceClock, Role, ROLE_CAPABILITIES, TableStatus

__all__ = [
    "Reservation",
    "Capability",
    "ReferenceClock",
    "Role",
    "ROLE_CAPABILITIES",
    "TableStatus",
]

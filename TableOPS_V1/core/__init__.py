"""
Core package for TableOPS.

This package holds the reservation engine and the collaborators wired
around it (audit log, accounts, settings).  It exposes only the public
API used by the user interface and the entry point.
"""

from .app import App, build_app
from .engine import ReservationEngine
from .errors import AuditSinkError, ErrorReason, ReservationError
from .results import Outcome, attempt
from .settings import Settings, load_settings

__all__ = [
    "App",
    "build_app",
    "ReservationEngine",
    "AuditSinkError",
    "ErrorReason",
    "ReservationError",
    "Outcome",
    "attempt",
    "Settings",
    "load_settings",
]

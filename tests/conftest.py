"""Shared fixtures: a fixed reference clock and an engine logging to tmp_path."""

from __future__ import annotations

from pathlib import Path

import pytest

from TableOPS_V1.core.app import App, build_app
from TableOPS_V1.core.audit import AuditLog
from TableOPS_V1.core.engine import ReservationEngine
from TableOPS_V1.core.settings import Settings
from TableOPS_V1.domain.types import ReferenceClock

# Later than the reference clock, so every booking below is valid
FUTURE_DATE = "2025-06-01"
FUTURE_TIME = "19:30"


@pytest.fixture
def clock() -> ReferenceClock:
    return ReferenceClock(date="2025-05-19", hour=22, minute=19)


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs.txt"


@pytest.fixture
def audit_log(log_path: Path, clock: ReferenceClock) -> AuditLog:
    return AuditLog(path=log_path, clock=clock)


@pytest.fixture
def engine(clock: ReferenceClock, audit_log: AuditLog) -> ReservationEngine:
    return ReservationEngine(clock=clock, audit_sink=audit_log)


@pytest.fixture
def settings(clock: ReferenceClock, log_path: Path) -> Settings:
    return Settings(reference_clock=clock, log_file=log_path)


@pytest.fixture
def app(settings: Settings) -> App:
    return build_app(settings)


@pytest.fixture
def book(engine: ReservationEngine):
    """Reserve with valid defaults for every field not overridden."""

    def _book(name: str, table: int, **overrides) -> int:
        fields = dict(
            phone_number="555-123-4567",
            party_size=2,
            date=FUTURE_DATE,
            time=FUTURE_TIME,
        )
        fields.update(overrides)
        return engine.reserve_table(name, table_index=table, **fields)

    return _book


@pytest.fixture
def engine_state(engine: ReservationEngine):
    """Tables and reservations of the test customers, for purity checks."""

    def _snapshot():
        names = ("Alice", "Bob", "Carol")
        return (
            engine.view_table_availability(),
            {n: [r.model_dump() for r in engine.view_customer_reservations(n)] for n in names},
        )

    return _snapshot

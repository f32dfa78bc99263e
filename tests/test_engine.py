"""
Tests for core/engine: reserve, cancel, update and the table/reservation
invariants.
"""

from __future__ import annotations

import pytest

from TableOPS_V1.core.accounts import Session
from TableOPS_V1.core.engine import ReservationEngine
from TableOPS_V1.core.errors import AuditSinkError, ErrorReason, ReservationError
from TableOPS_V1.domain.types import Role, TableStatus

from conftest import FUTURE_DATE, FUTURE_TIME


def _booked(engine: ReservationEngine) -> set[int]:
    return {i for i, status in engine.view_table_availability() if status == TableStatus.BOOKED}


def _assert_invariants(engine: ReservationEngine, names=("Alice", "Bob", "Carol")) -> None:
    reservations = [r for n in names for r in engine.view_customer_reservations(n)]
    tables = [r.table_number for r in reservations]
    assert sorted(tables) == sorted(_booked(engine))
    assert len(set(tables)) == len(tables)
    ids = [r.id for r in reservations]
    assert len(set(ids)) == len(ids)


# ——— Queries ———


def test_new_engine_has_ten_available_tables(engine) -> None:
    availability = engine.view_table_availability()
    assert [i for i, _ in availability] == list(range(10))
    assert all(status == TableStatus.AVAILABLE for _, status in availability)


def test_table_count_is_configurable(clock) -> None:
    engine = ReservationEngine(clock=clock, table_count=4)
    assert engine.table_count == 4
    assert len(engine.view_table_availability()) == 4


def test_table_count_must_be_positive(clock) -> None:
    with pytest.raises(ValueError):
        ReservationEngine(clock=clock, table_count=0)


def test_has_reservations_uses_exact_name(engine, book) -> None:
    assert not engine.has_reservations("Alice")
    book("Alice", 0)
    assert engine.has_reservations("Alice")
    assert not engine.has_reservations("alice")


def test_view_customer_reservations_returns_copies(engine, book) -> None:
    book("Alice", 0)
    [copy] = engine.view_customer_reservations("Alice")
    copy.table_number = 5
    copy.id = "ID 99A"
    [fresh] = engine.view_customer_reservations("Alice")
    assert fresh.table_number == 0
    assert fresh.id == "ID 1A"


def test_view_customer_reservations_empty_is_not_an_error(engine) -> None:
    assert engine.view_customer_reservations("Nobody") == []


def test_reservation_id_exists_with_exclusion(engine, book) -> None:
    book("Alice", 0)
    assert engine.reservation_id_exists("ID 1A")
    assert not engine.reservation_id_exists("ID 1A", exclude_id="ID 1A")
    assert not engine.reservation_id_exists("ID 2A")


# ——— Reserve ———


def test_reserve_books_table_and_mints_first_id(engine) -> None:
    """Scenario A."""
    table = engine.reserve_table("Alice", "555-123-4567", 2, FUTURE_DATE, FUTURE_TIME, 0)
    assert table == 0
    assert _booked(engine) == {0}
    [reservation] = engine.view_customer_reservations("Alice")
    assert reservation.id == "ID 1A"
    assert reservation.customer_name == "Alice"
    assert reservation.phone_number == "555-123-4567"
    assert reservation.party_size == 2
    assert reservation.date == FUTURE_DATE
    assert reservation.time == FUTURE_TIME
    assert reservation.table_number == 0


def test_reserve_ids_increase(engine, book) -> None:
    book("Alice", 0)
    book("Bob", 1)
    book("Alice", 2)
    ids = [r.id for r in engine.view_customer_reservations("Alice")]
    assert ids == ["ID 1A", "ID 3A"]
    assert engine.view_customer_reservations("Bob")[0].id == "ID 2A"


def test_reserve_booked_table_fails_without_change(engine, book, engine_state) -> None:
    """Scenario B."""
    book("Alice", 0)
    before = engine_state()
    with pytest.raises(ReservationError) as exc:
        book("Bob", 0)
    assert exc.value.reason == ErrorReason.TABLE_BOOKED
    assert exc.value.message == "Selected table is already booked."
    assert engine_state() == before


def test_reserve_when_all_tables_booked(engine, book) -> None:
    """Scenario E: no fallback to another table."""
    for i in range(10):
        book("Alice", i)
    for i in range(10):
        with pytest.raises(ReservationError) as exc:
            book("Bob", i)
        assert exc.value.reason == ErrorReason.TABLE_BOOKED
    assert not engine.has_reservations("Bob")


@pytest.mark.parametrize(
    "overrides, reason",
    [
        ({"phone_number": "5551234567"}, ErrorReason.INVALID_PHONE),
        ({"party_size": 0}, ErrorReason.INVALID_PARTY_SIZE),
        ({"date": "2025-05-18"}, ErrorReason.INVALID_DATE),
        ({"date": "2025-05-19", "time": "22:19"}, ErrorReason.INVALID_TIME),
        ({"time": "7pm"}, ErrorReason.INVALID_TIME),
    ],
)
def test_reserve_rejects_invalid_fields(engine, book, engine_state, overrides, reason) -> None:
    before = engine_state()
    with pytest.raises(ReservationError) as exc:
        book("Alice", 3, **overrides)
    assert exc.value.reason == reason
    assert engine_state() == before


@pytest.mark.parametrize("table", [-1, 10, 42, True, 1.0, "1"])
def test_reserve_rejects_bad_table_index(engine, book, table) -> None:
    with pytest.raises(ReservationError) as exc:
        book("Alice", table)
    assert exc.value.reason == ErrorReason.INVALID_TABLE


def test_reserve_reports_first_violation_only(engine, book) -> None:
    """Phone is checked before the party size and the table."""
    book("Alice", 0)
    with pytest.raises(ReservationError) as exc:
        book("Bob", 0, phone_number="bad", party_size=0)
    assert exc.value.reason == ErrorReason.INVALID_PHONE


def test_reserve_later_today_is_allowed(engine, book) -> None:
    book("Alice", 0, date="2025-05-19", time="22:20")
    assert engine.has_reservations("Alice")


def test_minted_id_skips_ids_taken_by_update(engine, book) -> None:
    book("Alice", 0)
    engine.update_reservation("ID 1A", "Alice", new_id="ID 2A")
    book("Bob", 1)
    assert engine.view_customer_reservations("Bob")[0].id == "ID 3A"
    _assert_invariants(engine)


# ——— Cancel ———


def test_cancel_frees_table(engine, book) -> None:
    book("Alice", 4)
    engine.cancel_reservation("ID 1A", "Alice")
    assert _booked(engine) == set()
    assert not engine.has_reservations("Alice")


def test_cancel_requires_ownership(engine, book, engine_state) -> None:
    """Scenario C."""
    book("Alice", 0)
    book("Bob", 1)
    before = engine_state()
    with pytest.raises(ReservationError) as exc:
        engine.cancel_reservation("ID 1A", "Bob")
    assert exc.value.reason == ErrorReason.RESERVATION_NOT_FOUND
    assert engine_state() == before
    assert _booked(engine) == {0, 1}


def test_cancel_rejects_bad_id_format(engine, book) -> None:
    book("Alice", 0)
    with pytest.raises(ReservationError) as exc:
        engine.cancel_reservation("1", "Alice")
    assert exc.value.reason == ErrorReason.INVALID_RESERVATION_ID


def test_cancel_unknown_id(engine, book) -> None:
    book("Alice", 0)
    with pytest.raises(ReservationError, match="No reservation to cancel."):
        engine.cancel_reservation("ID 9A", "Alice")


# ——— Update ———


def test_update_only_party_size(engine, book) -> None:
    """Scenario D."""
    book("Alice", 0)
    updated = engine.update_reservation("ID 1A", "Alice", new_party_size=4)
    assert updated.party_size == 4
    [reservation] = engine.view_customer_reservations("Alice")
    assert reservation.party_size == 4
    assert reservation.id == "ID 1A"
    assert reservation.date == FUTURE_DATE
    assert reservation.time == FUTURE_TIME
    assert reservation.table_number == 0


def test_update_with_nothing_changes_nothing(engine, book) -> None:
    book("Alice", 0)
    [before] = engine.view_customer_reservations("Alice")
    engine.update_reservation("ID 1A", "Alice")
    [after] = engine.view_customer_reservations("Alice")
    assert after == before
    assert _booked(engine) == {0}


def test_update_party_size_zero_is_a_value_not_a_keep(engine, book) -> None:
    book("Alice", 0)
    with pytest.raises(ReservationError) as exc:
        engine.update_reservation("ID 1A", "Alice", new_party_size=0)
    assert exc.value.reason == ErrorReason.INVALID_PARTY_SIZE


def test_update_onto_booked_table_keeps_current_table(engine, book, engine_state) -> None:
    """Scenario F."""
    book("Alice", 0)
    book("Bob", 1)
    before = engine_state()
    with pytest.raises(ReservationError) as exc:
        engine.update_reservation("ID 1A", "Alice", new_table_index=1)
    assert exc.value.reason == ErrorReason.TABLE_BOOKED
    assert engine_state() == before
    assert _booked(engine) == {0, 1}


def test_update_moves_table(engine, book) -> None:
    book("Alice", 0)
    engine.update_reservation("ID 1A", "Alice", new_table_index=7)
    assert _booked(engine) == {7}
    assert engine.view_customer_reservations("Alice")[0].table_number == 7
    _assert_invariants(engine)


def test_update_to_own_table_is_allowed(engine, book) -> None:
    book("Alice", 2)
    engine.update_reservation("ID 1A", "Alice", new_table_index=2)
    assert _booked(engine) == {2}


def test_update_table_out_of_range(engine, book, engine_state) -> None:
    book("Alice", 0)
    before = engine_state()
    with pytest.raises(ReservationError) as exc:
        engine.update_reservation("ID 1A", "Alice", new_table_index=10)
    assert exc.value.reason == ErrorReason.INVALID_TABLE
    assert engine_state() == before


@pytest.mark.parametrize("table", [2.0, True, "3"])
def test_update_rejects_non_integer_table(engine, book, engine_state, table) -> None:
    book("Alice", 0)
    before = engine_state()
    with pytest.raises(ReservationError) as exc:
        engine.update_reservation("ID 1A", "Alice", new_table_index=table)
    assert exc.value.reason == ErrorReason.INVALID_TABLE
    assert exc.value.message == "Invalid new table index."
    assert engine_state() == before


def test_update_requires_ownership(engine, book) -> None:
    book("Alice", 0)
    with pytest.raises(ReservationError, match="No reservation to update."):
        engine.update_reservation("ID 1A", "Bob", new_party_size=3)


def test_update_id_collision(engine, book, engine_state) -> None:
    book("Alice", 0)
    book("Bob", 1)
    before = engine_state()
    with pytest.raises(ReservationError) as exc:
        engine.update_reservation("ID 1A", "Alice", new_id="ID 2A")
    assert exc.value.reason == ErrorReason.DUPLICATE_RESERVATION_ID
    assert engine_state() == before


def test_update_id_to_itself_is_allowed(engine, book) -> None:
    book("Alice", 0)
    engine.update_reservation("ID 1A", "Alice", new_id="ID 1A")
    assert engine.view_customer_reservations("Alice")[0].id == "ID 1A"


def test_update_rejects_bad_new_id(engine, book) -> None:
    book("Alice", 0)
    with pytest.raises(ReservationError) as exc:
        engine.update_reservation("ID 1A", "Alice", new_id="ID X")
    assert exc.value.reason == ErrorReason.INVALID_RESERVATION_ID


def test_update_is_all_or_nothing(engine, book, engine_state) -> None:
    """A bad time after valid phone/date leaves every field untouched."""
    book("Alice", 0)
    before = engine_state()
    with pytest.raises(ReservationError):
        engine.update_reservation(
            "ID 1A",
            "Alice",
            new_phone="555-000-1111",
            new_date="2025-07-01",
            new_time="25:00",
            new_table_index=5,
        )
    assert engine_state() == before


def test_update_time_checked_against_new_date(engine, book) -> None:
    book("Alice", 0)
    # 10:00 is past on the reference day, fine on any later day
    with pytest.raises(ReservationError) as exc:
        engine.update_reservation("ID 1A", "Alice", new_date="2025-05-19", new_time="10:00")
    assert exc.value.reason == ErrorReason.INVALID_TIME
    engine.update_reservation("ID 1A", "Alice", new_date="2025-05-20", new_time="10:00")


def test_update_date_alone_keeps_current_time_unchecked(engine, book) -> None:
    book("Alice", 0, date="2025-05-20", time="10:00")
    engine.update_reservation("ID 1A", "Alice", new_date="2025-05-19")
    [alice] = engine.view_customer_reservations("Alice")
    assert (alice.date, alice.time) == ("2025-05-19", "10:00")


def test_update_time_alone_checked_against_current_date(engine, book) -> None:
    book("Alice", 0, date="2025-05-19", time="23:00")
    with pytest.raises(ReservationError):
        engine.update_reservation("ID 1A", "Alice", new_time="12:00")
    book("Bob", 1)  # booked on a later day
    engine.update_reservation("ID 2A", "Bob", new_time="12:00")
    assert engine.view_customer_reservations("Bob")[0].time == "12:00"


def test_update_name_transfers_ownership(engine, book) -> None:
    book("Alice", 0)
    engine.update_reservation("ID 1A", "Alice", new_name="Carol")
    assert not engine.has_reservations("Alice")
    assert engine.has_reservations("Carol")
    with pytest.raises(ReservationError):
        engine.cancel_reservation("ID 1A", "Alice")
    engine.cancel_reservation("ID 1A", "Carol")
    assert _booked(engine) == set()


def test_mixed_sequence_keeps_invariants(engine, book) -> None:
    book("Alice", 0)
    book("Bob", 1)
    book("Carol", 2)
    _assert_invariants(engine)
    engine.update_reservation("ID 2A", "Bob", new_table_index=5)
    _assert_invariants(engine)
    engine.cancel_reservation("ID 1A", "Alice")
    _assert_invariants(engine)
    book("Alice", 1)
    _assert_invariants(engine)
    with pytest.raises(ReservationError):
        engine.update_reservation("ID 3A", "Carol", new_table_index=5)
    _assert_invariants(engine)
    assert _booked(engine) == {1, 2, 5}


# ——— Audit ———


def test_successful_calls_are_audited(engine, book, log_path) -> None:
    book("Alice", 0)
    engine.update_reservation("ID 1A", "Alice", new_party_size=3)
    engine.cancel_reservation("ID 1A", "Alice")
    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "[2025-05-19 22:19:00] [Customer: Alice] Reserved table #1 for 2 on 2025-06-01 at 19:30",
        "[2025-05-19 22:19:00] [Customer: Alice] Updated reservation ID 1A",
        "[2025-05-19 22:19:00] [Customer: Alice] Cancelled reservation ID 1A",
    ]


def test_failed_calls_are_not_audited(engine, book, log_path) -> None:
    book("Alice", 0)
    with pytest.raises(ReservationError):
        book("Bob", 0)
    assert len(log_path.read_text(encoding="utf-8").splitlines()) == 1


def test_actor_overrides_audited_role(engine, book, log_path) -> None:
    book("Alice", 0)
    engine.cancel_reservation("ID 1A", "Alice", actor=Session(role=Role.ADMIN, username="admin"))
    assert log_path.read_text(encoding="utf-8").splitlines()[-1] == (
        "[2025-05-19 22:19:00] [Admin: admin] Cancelled reservation ID 1A"
    )


class _BrokenSink:
    def record(self, record) -> None:
        raise AuditSinkError("Unable to open log file.")


def test_audit_failure_aborts_operation(clock) -> None:
    engine = ReservationEngine(clock=clock, audit_sink=_BrokenSink())
    with pytest.raises(AuditSinkError):
        engine.reserve_table("Alice", "555-123-4567", 2, FUTURE_DATE, FUTURE_TIME, 0)
    assert _booked(engine) == set()
    assert not engine.has_reservations("Alice")


def test_audit_failure_does_not_consume_an_id(clock) -> None:
    sink = _BrokenSink()
    engine = ReservationEngine(clock=clock, audit_sink=sink)
    with pytest.raises(AuditSinkError):
        engine.reserve_table("Alice", "555-123-4567", 2, FUTURE_DATE, FUTURE_TIME, 0)
    engine.audit_sink = None
    engine.reserve_table("Alice", "555-123-4567", 2, FUTURE_DATE, FUTURE_TIME, 0)
    assert engine.view_customer_reservations("Alice")[0].id == "ID 1A"

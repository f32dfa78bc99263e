"""
Moteur de réservation: table occupancy and the live reservation collection.

The engine is the only owner of both.  After every call, whether it
succeeds or raises, the following holds:

- table ``i`` is BOOKED iff exactly one live reservation has
  ``table_number == i``;
- reservation ids are unique;
- every live reservation passed the validators when it was created or last
  updated.

Each mutating operation checks everything first, then sends its audit
record, then commits.  A ReservationError or an AuditSinkError therefore
leaves the state untouched.
"""

from typing import List, Optional, Tuple

from TableOPS_V1.core.accounts import Session
from TableOPS_V1.core.audit import AuditRecord, AuditSink
from TableOPS_V1.core.errors import ErrorReason, ReservationError
from TableOPS_V1.domain.reservation import Reservation
from TableOPS_V1.domain.types import ReferenceClock, Role, TableStatus
from TableOPS_V1.logger import get_logger
from TableOPS_V1.rules.validators import (
    validate_date,
    validate_party_size,
    validate_phone_number,
    validate_reservation_id,
    validate_time,
)

logger = get_logger(__name__)

DEFAULT_TABLE_COUNT = 10

MSG_PHONE = "Invalid phone number format. Use XXX-XXX-XXXX."
MSG_PARTY_SIZE = "Party size must be at least 1."
MSG_DATE = "Invalid date format (use YYYY-MM-DD) or date is in the past."
MSG_TIME = "Invalid time format (use HH:MM) or time is in the past for today."
MSG_TABLE_BOOKED = "Selected table is already booked."
MSG_RESERVATION_ID = "Invalid reservation ID format. Use 'ID <number>A', e.g., ID 1A."
MSG_NEW_RESERVATION_ID = (
    "Invalid new reservation ID format. Use 'ID <number>A', e.g., ID 1A."
)
MSG_DUPLICATE_ID = "New reservation ID already exists. Choose a different ID."


class ReservationEngine:
    """Single authoritative owner of tables and reservations.

    Build one per application run and pass it to whoever needs it.

    Args:
        clock: Reference "now" for the date and time rules.
        audit_sink: Receives one AuditRecord per successful mutation; None
            disables auditing.
        table_count: Size of the table pool.
    """

    def __init__(
        self,
        clock: ReferenceClock,
        audit_sink: Optional[AuditSink] = None,
        table_count: int = DEFAULT_TABLE_COUNT,
    ):
        if table_count < 1:
            raise ValueError(f"table_count must be >= 1, got {table_count}")
        self.clock = clock
        self.audit_sink = audit_sink
        self._tables: List[bool] = [True] * table_count  # True = AVAILABLE
        self._reservations: List[Reservation] = []
        self._next_reservation_id = 1

    @property
    def table_count(self) -> int:
        return len(self._tables)

    # ——— Queries ———

    def view_table_availability(self) -> List[Tuple[int, TableStatus]]:
        return [
            (index, TableStatus.AVAILABLE if free else TableStatus.BOOKED)
            for index, free in enumerate(self._tables)
        ]

    def has_reservations(self, customer_name: str) -> bool:
        return any(r.customer_name == customer_name for r in self._reservations)

    def view_customer_reservations(self, customer_name: str) -> List[Reservation]:
        """All live reservations of a customer, as copies, in booking order."""
        return [
            r.model_copy()
            for r in self._reservations
            if r.customer_name == customer_name
        ]

    def reservation_id_exists(self, reservation_id: str, exclude_id: str = "") -> bool:
        """True if a live reservation other than ``exclude_id`` uses the id."""
        return any(
            r.id == reservation_id and r.id != exclude_id for r in self._reservations
        )

    # ——— Mutations ———

    def reserve_table(
        self,
        customer_name: str,
        phone_number: str,
        party_size: int,
        date: str,
        time: str,
        table_index: int,
        actor: Optional[Session] = None,
    ) -> int:
        """Book ``table_index`` for a customer.

        Checks run in this order and the first failure is raised: phone,
        party size, date, time, table range, table availability.  There is no
        fallback to another free table.

        Returns:
            The booked table index.

        Raises:
            ReservationError: On the first violated rule.
            AuditSinkError: If the audit record cannot be stored.
        """
        self._check_phone(phone_number)
        self._check_party_size(party_size)
        self._check_date(date)
        self._check_time(time, date)
        self._check_table_index(table_index)
        if not self._tables[table_index]:
            self._reject(ErrorReason.TABLE_BOOKED, MSG_TABLE_BOOKED)

        reservation_id, next_counter = self._mint_reservation_id()
        self._emit(
            actor,
            customer_name,
            "Reserved table",
            f"#{table_index + 1} for {party_size} on {date} at {time}",
        )

        self._next_reservation_id = next_counter
        self._tables[table_index] = False
        self._reservations.append(
            Reservation(
                id=reservation_id,
                customer_name=customer_name,
                phone_number=phone_number,
                party_size=party_size,
                date=date,
                time=time,
                table_number=table_index,
            )
        )
        logger.info(
            "Reserved table %d as %s for %s", table_index + 1, reservation_id, customer_name
        )
        return table_index

    def cancel_reservation(
        self,
        reservation_id: str,
        customer_name: str,
        actor: Optional[Session] = None,
    ) -> None:
        """Cancel a reservation owned by ``customer_name`` and free its table.

        Raises:
            ReservationError: Bad id format, or no reservation with that id
                belongs to that customer.
        """
        self._check_reservation_id(reservation_id)
        reservation = self._find_owned(reservation_id, customer_name)
        if reservation is None:
            self._reject(ErrorReason.RESERVATION_NOT_FOUND, "No reservation to cancel.")

        self._emit(actor, customer_name, "Cancelled reservation", reservation_id)

        self._tables[reservation.table_number] = True
        self._reservations = [
            r
            for r in self._reservations
            if not (r.id == reservation_id and r.customer_name == customer_name)
        ]
        logger.info("Cancelled %s for %s", reservation_id, customer_name)

    def update_reservation(
        self,
        reservation_id: str,
        customer_name: str,
        new_id: Optional[str] = None,
        new_name: Optional[str] = None,
        new_phone: Optional[str] = None,
        new_party_size: Optional[int] = None,
        new_date: Optional[str] = None,
        new_time: Optional[str] = None,
        new_table_index: Optional[int] = None,
        actor: Optional[Session] = None,
    ) -> Reservation:
        """Overwrite selected fields of a reservation owned by ``customer_name``.

        Every ``new_*`` argument left to None keeps the current value; any
        other value, including ``0``, is validated like in ``reserve_table``.
        ``new_time`` is checked against ``new_date`` when one is given,
        otherwise against the reservation's current date.  A ``new_date`` given
        alone does not re-check the stored time, so the result may lie before
        the reference time.  Moving to the table the reservation already
        holds is accepted.

        All checks run before anything changes, so a failure leaves the
        reservation and the tables exactly as they were.

        Returns:
            A copy of the updated reservation.

        Raises:
            ReservationError: On the first violated rule.
            AuditSinkError: If the audit record cannot be stored.
        """
        self._check_reservation_id(reservation_id)
        reservation = self._find_owned(reservation_id, customer_name)
        if reservation is None:
            self._reject(ErrorReason.RESERVATION_NOT_FOUND, "No reservation to update.")

        if new_id is not None:
            if not validate_reservation_id(new_id):
                self._reject(ErrorReason.INVALID_RESERVATION_ID, MSG_NEW_RESERVATION_ID)
            if self.reservation_id_exists(new_id, exclude_id=reservation_id):
                self._reject(ErrorReason.DUPLICATE_RESERVATION_ID, MSG_DUPLICATE_ID)
        if new_phone is not None:
            self._check_phone(new_phone)
        if new_party_size is not None:
            self._check_party_size(new_party_size)
        if new_date is not None:
            self._check_date(new_date)
        if new_time is not None:
            self._check_time(new_time, new_date if new_date is not None else reservation.date)

        old_table = reservation.table_number
        if new_table_index is not None:
            self._check_table_index(new_table_index, "Invalid new table index.")
            # The old table counts as free for this reservation only
            if new_table_index != old_table and not self._tables[new_table_index]:
                self._reject(ErrorReason.TABLE_BOOKED, MSG_TABLE_BOOKED)

        self._emit(actor, customer_name, "Updated reservation", reservation_id)

        if new_table_index is not None:
            self._tables[old_table] = True
            self._tables[new_table_index] = False
            reservation.table_number = new_table_index
        if new_id is not None:
            reservation.id = new_id
        if new_name is not None:
            reservation.customer_name = new_name
        if new_phone is not None:
            reservation.phone_number = new_phone
        if new_party_size is not None:
            reservation.party_size = new_party_size
        if new_date is not None:
            reservation.date = new_date
        if new_time is not None:
            reservation.time = new_time

        logger.info("Updated %s for %s", reservation_id, customer_name)
        return reservation.model_copy()

    # ——— Helpers ———

    def _reject(self, reason: ErrorReason, message: str):
        logger.debug("Rejected (%s): %s", reason.value, message)
        raise ReservationError(reason, message)

    def _check_phone(self, phone_number: str) -> None:
        if not validate_phone_number(phone_number):
            self._reject(ErrorReason.INVALID_PHONE, MSG_PHONE)

    def _check_party_size(self, party_size: int) -> None:
        if not validate_party_size(party_size):
            self._reject(ErrorReason.INVALID_PARTY_SIZE, MSG_PARTY_SIZE)

    def _check_date(self, date: str) -> None:
        if not validate_date(date, self.clock):
            self._reject(ErrorReason.INVALID_DATE, MSG_DATE)

    def _check_time(self, time: str, date: str) -> None:
        if not validate_time(time, date, self.clock):
            self._reject(ErrorReason.INVALID_TIME, MSG_TIME)

    def _check_reservation_id(self, reservation_id: str) -> None:
        if not validate_reservation_id(reservation_id):
            self._reject(ErrorReason.INVALID_RESERVATION_ID, MSG_RESERVATION_ID)

    def _check_table_index(self, table_index: int, message: Optional[str] = None) -> None:
        # bool is an int subclass; True is not table 1
        if (
            not isinstance(table_index, int)
            or isinstance(table_index, bool)
            or not 0 <= table_index < len(self._tables)
        ):
            self._reject(
                ErrorReason.INVALID_TABLE,
                message or f"Invalid table number. Must be between 1 and {len(self._tables)}.",
            )

    def _find_owned(self, reservation_id: str, customer_name: str) -> Optional[Reservation]:
        for r in self._reservations:
            if r.id == reservation_id and r.customer_name == customer_name:
                return r
        return None

    def _mint_reservation_id(self) -> Tuple[str, int]:
        """Next free id and the counter value to keep once it is used.

        Skips ids already taken through ``update_reservation(new_id=...)``.
        """
        counter = self._next_reservation_id
        while True:
            candidate = f"ID {counter}A"
            counter += 1
            if not self.reservation_id_exists(candidate):
                return candidate, counter

    def _emit(
        self, actor: Optional[Session], customer_name: str, action: str, details: str
    ) -> None:
        if self.audit_sink is None:
            return
        if actor is None:
            actor = Session(role=Role.CUSTOMER, username=customer_name)
        self.audit_sink.record(
            AuditRecord(
                timestamp=self.clock.timestamp(),
                actor_role=actor.role,
                actor_name=actor.username,
                action=action,
                details=details,
            )
        )

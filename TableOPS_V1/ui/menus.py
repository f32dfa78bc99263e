# tableops/ui/menus.py
"""
Role menus.

Each role sees the capabilities listed for it in ``ROLE_CAPABILITIES``,
numbered in that order, followed by Exit.  Every capability maps to one
``_action_*`` function below.
"""

import sys
from typing import Callable, Dict, Optional

from TableOPS_V1.core.accounts import Session
from TableOPS_V1.core.app import App
from TableOPS_V1.core.errors import AccountError, AuditSinkError
from TableOPS_V1.core.results import attempt
from TableOPS_V1.domain.types import ROLE_CAPABILITIES, Capability, Role
from TableOPS_V1.rules.validators import (
    validate_date,
    validate_numeric_input,
    validate_phone_number,
    validate_reservation_id,
    validate_time,
)
from TableOPS_V1.ui.affichage import (
    print_error,
    print_fatal,
    print_logs,
    print_reservations,
    print_table_availability,
)
from TableOPS_V1.utils import ask_yes_no, get_input, get_text

KEEP = "0"  # typed at an update prompt to keep the current value

ERR_PHONE = "Error: Invalid phone number format. Use XXX-XXX-XXXX."
ERR_PARTY_SIZE = (
    "Error: Invalid party size. Must be a single number >= 1 (e.g., 2, not 2a, 2.1, or 2 2)."
)
ERR_DATE = "Error: Invalid date format (use YYYY-MM-DD) or date is in the past."
ERR_TIME = "Error: Invalid time format (use HH:MM) or time is in the past for today."
ERR_RESERVATION_ID = "Error: Invalid reservation ID format. Use 'ID <number>A', e.g., ID 1A."


def _audit_failure(app: App, session: Session, action: str, message: str) -> Callable[[], None]:
    """Callback recording a rejected entry as a failed action."""

    def _log() -> None:
        app.audit_log.log_error(session.role, session.username, action, message)

    return _log


def _target_customer(app: App, session: Session) -> Optional[str]:
    """Whose reservations an update/cancel acts on, or None if they have none.

    Customers act on their own reservations, the admin names the customer.
    """
    if session.role == Role.CUSTOMER:
        if not app.engine.has_reservations(session.username):
            print("No reservations.")
            return None
        return session.username

    customer_name = input("Enter customer name: ")
    if not app.engine.has_reservations(customer_name):
        print("No reservations found for this customer.")
        return None
    return customer_name


# ——— Actions ———


def _action_view_own_reservations(app: App, session: Session) -> None:
    print_reservations(app.engine.view_customer_reservations(session.username))


def _action_view_availability(app: App, session: Session) -> None:
    print_table_availability(app.engine)


def _action_view_logs(app: App, session: Session) -> None:
    try:
        lines = app.audit_log.read_lines()
    except AuditSinkError as e:
        print(str(e))
        return
    print_logs(lines)


def _action_reserve_table(app: App, session: Session) -> None:
    """Collect the booking details field by field, then book the table."""
    action = "Failed to reserve table"
    clock = app.clock
    table_count = app.engine.table_count

    phone_number = get_text(
        "Enter your phone number (e.g., 123-456-7890): ",
        validate_phone_number,
        ERR_PHONE,
        on_error=_audit_failure(app, session, action, "Invalid phone number format."),
    )
    party_size = get_input(
        "Enter party size (must be at least 1): ",
        1,
        sys.maxsize,
        ERR_PARTY_SIZE,
        on_error=_audit_failure(app, session, action, "Invalid party size."),
    )
    date = get_text(
        f"Enter reservation date (e.g., YYYY-MM-DD, must be on or after {clock.date}): ",
        lambda d: validate_date(d, clock),
        ERR_DATE,
        on_error=_audit_failure(
            app, session, action, "Invalid date format or date is in the past."
        ),
    )
    time = get_text(
        f"Enter reservation time (e.g., HH:MM in 24-hour format, must be after {clock.time} if today): ",
        lambda t: validate_time(t, date, clock),
        ERR_TIME,
        on_error=_audit_failure(
            app, session, action, "Invalid time format or time is in the past."
        ),
    )
    print("Available tables:")
    print_table_availability(app.engine)
    table_number = get_input(
        f"Enter table number to reserve (1-{table_count}): ",
        1,
        table_count,
        f"Error: Invalid table number. Must be a single number between 1 and {table_count} "
        "(e.g., 1, not 1a, 1.1, or 1 1).",
        on_error=_audit_failure(app, session, action, "Invalid table number."),
    )

    outcome = attempt(
        app.engine.reserve_table,
        session.username,
        phone_number,
        party_size,
        date,
        time,
        table_number - 1,
        actor=session,
    )
    if outcome.ok:
        print(f"Reserved Table #{outcome.value + 1} successfully!")
        return
    print_error(outcome.message)
    app.audit_log.log_error(session.role, session.username, action, outcome.message)
    print("Reservation failed. Returning to menu.")


def _prompt_new_id(app: App, reservation_id: str, log_error) -> Optional[str]:
    while True:
        new_id = input("Enter new ID (e.g., ID 2A, or 0 to keep current): ")
        if new_id == KEEP:
            return None
        if not validate_reservation_id(new_id):
            message = "Invalid new reservation ID format. Use 'ID <number>A', e.g., ID 1A."
        elif app.engine.reservation_id_exists(new_id, reservation_id):
            message = "New reservation ID already exists. Choose a different ID."
        else:
            return new_id
        print_error(message)
        log_error(message)


def _prompt_new_party_size(log_error) -> Optional[int]:
    while True:
        text = input("Enter new party size (must be at least 1, or 0 to keep current): ")
        if text == KEEP:
            return None
        value = validate_numeric_input(text, 1, sys.maxsize)
        if value is not None:
            return value
        print(ERR_PARTY_SIZE)
        log_error("Invalid party size.")


def _action_update_reservation(app: App, session: Session) -> None:
    """Ask for every field, "0" keeping the current value, then apply."""
    action = "Failed to update reservation"
    clock = app.clock
    table_count = app.engine.table_count

    def log_error(message: str) -> None:
        app.audit_log.log_error(session.role, session.username, action, message)

    customer_name = _target_customer(app, session)
    if customer_name is None:
        return

    reservation_id = get_text(
        "Enter reservation ID to update (e.g., ID 1A): ",
        validate_reservation_id,
        ERR_RESERVATION_ID,
        on_error=lambda: log_error("Invalid reservation ID format."),
    )
    current = {r.id: r for r in app.engine.view_customer_reservations(customer_name)}
    print_reservations(list(current.values()))

    new_id = _prompt_new_id(app, reservation_id, log_error)
    new_name = input("Enter new name (or 0 to keep current): ")
    new_name = None if new_name == KEEP else new_name
    new_phone = get_text(
        "Enter new phone number (e.g., 123-456-7890, or 0 to keep current): ",
        validate_phone_number,
        ERR_PHONE,
        keep_sentinel=KEEP,
        on_error=lambda: log_error("Invalid phone number format."),
    )
    new_party_size = _prompt_new_party_size(log_error)
    new_date = get_text(
        f"Enter new date (e.g., YYYY-MM-DD, must be on or after {clock.date}, or 0 to keep current): ",
        lambda d: validate_date(d, clock),
        ERR_DATE,
        keep_sentinel=KEEP,
        on_error=lambda: log_error("Invalid date format or date is in the past."),
    )
    if new_date is not None:
        time_date = new_date
    elif reservation_id in current:
        time_date = current[reservation_id].date
    else:
        time_date = clock.date
    new_time = get_text(
        f"Enter new time (e.g., HH:MM in 24-hour format, must be after {clock.time} if today, "
        "or 0 to keep current): ",
        lambda t: validate_time(t, time_date, clock),
        ERR_TIME,
        keep_sentinel=KEEP,
        on_error=lambda: log_error("Invalid time format or time is in the past."),
    )
    print(f"Table options: 0 to keep current, or enter a specific table number (1-{table_count}):")
    print_table_availability(app.engine)
    table_choice = get_input(
        "Choice: ",
        0,
        table_count,
        f"Error: Invalid table choice. Must be a single number between 0 and {table_count} "
        "(e.g., 1, not 1a, 1.1, or 1 1).",
        on_error=lambda: log_error("Invalid table choice."),
    )

    if session.role == Role.CUSTOMER and not ask_yes_no("Confirm update? Yes or No: "):
        print("Update cancelled.")
        return

    outcome = attempt(
        app.engine.update_reservation,
        reservation_id,
        customer_name,
        new_id=new_id,
        new_name=new_name,
        new_phone=new_phone,
        new_party_size=new_party_size,
        new_date=new_date,
        new_time=new_time,
        new_table_index=table_choice - 1 if table_choice else None,
        actor=session,
    )
    if outcome.ok:
        print("Reservation updated successfully.")
        return
    print_error(outcome.message)
    log_error(outcome.message)
    print("Update failed. Returning to menu.")


def _action_cancel_reservation(app: App, session: Session) -> None:
    action = "Failed to cancel reservation"
    customer_name = _target_customer(app, session)
    if customer_name is None:
        return

    while True:
        reservation_id = input("Enter reservation ID to cancel (e.g., ID 1A): ")
        if session.role == Role.CUSTOMER:
            print_reservations(app.engine.view_customer_reservations(customer_name))
            if not ask_yes_no("Confirm cancellation? Yes or No: "):
                print("Cancellation aborted.")
                return

        outcome = attempt(
            app.engine.cancel_reservation, reservation_id, customer_name, actor=session
        )
        if outcome.ok:
            print("Reservation cancelled successfully.")
            return
        print_error(outcome.message)
        app.audit_log.log_error(session.role, session.username, action, outcome.message)
        if session.role != Role.CUSTOMER:
            return
        print("Please try again.")


def _action_create_receptionist(app: App, session: Session) -> None:
    while True:
        username = input("Enter new receptionist username: ")
        if not app.accounts.exists(Role.RECEPTIONIST, username):
            break
        print("Username already exists. Please choose a different username.")
    password = input("Enter password: ")
    try:
        app.accounts.create_account(Role.RECEPTIONIST, username, password)
    except AccountError as e:
        print_error(str(e))
        return
    app.audit_log.log_action(
        session.role, session.username, "Created receptionist account", username
    )
    print("Receptionist account created.")


_ACTIONS: Dict[Capability, Callable[[App, Session], None]] = {
    Capability.VIEW_OWN_RESERVATIONS: _action_view_own_reservations,
    Capability.RESERVE_TABLE: _action_reserve_table,
    Capability.VIEW_AVAILABILITY: _action_view_availability,
    Capability.UPDATE_RESERVATION: _action_update_reservation,
    Capability.CANCEL_RESERVATION: _action_cancel_reservation,
    Capability.VIEW_LOGS: _action_view_logs,
    Capability.CREATE_RECEPTIONIST: _action_create_receptionist,
}


# ——— Entrée principale ———


def run_role_menu(app: App, session: Session) -> None:
    """Show the session's menu until the user confirms logout."""
    capabilities = ROLE_CAPABILITIES[session.role]
    exit_choice = len(capabilities) + 1

    while True:
        print(f"\n[{session.role.value} Menu - {session.username}]")
        for i, capability in enumerate(capabilities, 1):
            print(f"{i}. {capability.value}")
        print(f"{exit_choice}. Exit")
        choice = get_input(
            "Choice: ",
            1,
            exit_choice,
            f"Invalid choice. Please enter a single number between 1 and {exit_choice} "
            "(e.g., 1, not 1a, 1.1, or 1 1).",
        )

        if choice == exit_choice:
            # Admin also accepts Y/N
            if ask_yes_no(
                "Logout? Yes or No: ", accept_short=session.role == Role.ADMIN
            ):
                return
            continue

        try:
            _ACTIONS[capabilities[choice - 1]](app, session)
        except AuditSinkError as e:
            print_fatal(str(e))

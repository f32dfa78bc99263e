from typing import List

from TableOPS_V1.console_style import bold, red, status_label
from TableOPS_V1.core.engine import ReservationEngine
from TableOPS_V1.domain.reservation import Reservation


def print_table_availability(engine: ReservationEngine) -> None:
    """Print one line per table, numbered from 1."""
    for index, status in engine.view_table_availability():
        print(f"Table {index + 1} is {status_label(status)}")


def print_reservations(reservations: List[Reservation], title: str = "Your Reservations") -> None:
    print(f"\n--- {title} ---")
    if not reservations:
        print("No reservation to view.")
        return
    for reservation in reservations:
        print(reservation.describe())


def print_logs(lines: List[str]) -> None:
    print(bold("--- System Logs ---") + "\n")
    for line in lines:
        print(line)


def print_error(message: str) -> None:
    print(f"Error: {message}")


def print_fatal(message: str) -> None:
    """Audit log failures: the action was not carried out."""
    print(red(f"Error: {message} The action was not carried out."))

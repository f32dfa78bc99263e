"""
Format and business rules for reservation fields.

Every function here is a pure predicate: it never raises on bad input and
never touches engine state, so the engine can run all of them before it
mutates anything.
"""

import re
from typing import Optional

from TableOPS_V1.domain.types import ReferenceClock

# ASCII digits only: str.isdigit() and \d would also accept other scripts
_PHONE_RE = re.compile(r"[0-9]{3}-[0-9]{3}-[0-9]{4}")
_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})")
_RESERVATION_ID_RE = re.compile(r"ID [0-9]+A")
_DIGITS_RE = re.compile(r"[0-9]+")


def validate_phone_number(phone: str) -> bool:
    """``DDD-DDD-DDDD``, nothing before or after."""
    return isinstance(phone, str) and _PHONE_RE.fullmatch(phone) is not None


def validate_date(date: str, clock: ReferenceClock) -> bool:
    """Check a ``YYYY-MM-DD`` date that is not before the reference date.

    Month must be 1-12 and day 1-31.  Day counts per month and leap years are
    not checked, so ``2025-02-30`` is accepted.

    The zero-padded format makes string order and calendar order coincide,
    hence the plain string comparison against ``clock.date``.
    """
    if not isinstance(date, str):
        return False
    match = _DATE_RE.fullmatch(date)
    if match is None:
        return False
    month, day = int(match.group(2)), int(match.group(3))
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return False
    return date >= clock.date


def validate_time(time: str, date: str, clock: ReferenceClock) -> bool:
    """Check a 24-hour ``HH:MM`` time.

    When ``date`` is the reference date the time must be strictly later than
    the reference time.
    """
    if not isinstance(time, str):
        return False
    match = _TIME_RE.fullmatch(time)
    if match is None:
        return False
    hour, minute = int(match.group(1)), int(match.group(2))
    if not 0 <= hour <= 23 or not 0 <= minute <= 59:
        return False
    if date == clock.date:
        return (hour, minute) > (clock.hour, clock.minute)
    return True


def validate_party_size(size: int) -> bool:
    # bool is an int subclass; True is not a party of one
    return isinstance(size, int) and not isinstance(size, bool) and size >= 1


def validate_reservation_id(reservation_id: str) -> bool:
    """``ID <digits>A``, e.g. ``ID 12A``."""
    return (
        isinstance(reservation_id, str)
        and _RESERVATION_ID_RE.fullmatch(reservation_id) is not None
    )


def validate_numeric_input(text: str, min_value: int, max_value: int) -> Optional[int]:
    """Parse a menu entry such as ``"3"``.

    Rejects empty strings, signs, spaces, decimals and trailing characters
    (``"1a"``, ``"1.1"``, ``"1 1"``).

    Returns:
        The parsed integer when it lies in ``[min_value, max_value]``,
        otherwise None.
    """
    if not isinstance(text, str) or _DIGITS_RE.fullmatch(text) is None:
        return None
    value = int(text)
    if value < min_value or value > max_value:
        return None
    return value

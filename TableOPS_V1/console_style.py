# tableops/console_style.py
from TableOPS_V1.domain.types import TableStatus


def bold(text: str) -> str:
    return f"\033[1m{text}\033[0m"


def green(text: str) -> str:
    return f"\033[92m{text}\033[0m"


def red(text: str) -> str:
    return f"\033[91m{text}\033[0m"


def status_label(status: TableStatus) -> str:
    """AVAILABLE in green, BOOKED in red."""
    return green(status.value) if status == TableStatus.AVAILABLE else red(status.value)

from typing import Any, Callable, Optional

from pydantic import BaseModel

from TableOPS_V1.core.errors import ErrorReason, ReservationError


class Outcome(BaseModel):
    """Result of an engine call: either a value or a tagged domain error."""

    ok: bool
    value: Any = None
    reason: Optional[ErrorReason] = None
    message: str = ""

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ReservationError) -> "Outcome":
        return cls(ok=False, reason=error.reason, message=error.message)


def attempt(operation: Callable[..., Any], *args, **kwargs) -> Outcome:
    """Run an engine operation and capture its domain error, if any.

    Only ReservationError is converted; AuditSinkError and programming
    errors still propagate.

    Example:
        >>> outcome = attempt(engine.cancel_reservation, "ID 1A", "Alice")
        >>> if not outcome.ok:
        ...     print(outcome.message)
    """
    try:
        return Outcome.success(operation(*args, **kwargs))
    except ReservationError as error:
        return Outcome.failure(error)

"""
Journal des actions (audit log): one line per action, append-only.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol

from TableOPS_V1.core.errors import AuditSinkError
from TableOPS_V1.domain.types import ReferenceClock, Role
from TableOPS_V1.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuditRecord:
    """An entry of the audit log.

    Attributes:
        timestamp: Stamp taken from the reference clock, e.g.
            ``[2025-05-19 22:19:00]``.
        actor_role: Role of the user who triggered the action.
        actor_name: Username (or customer name) of that user.
        action: Short verb phrase such as ``Reserved table``.
        details: Free text completing the action.
    """

    timestamp: str
    actor_role: Role
    actor_name: str
    action: str
    details: str = ""

    def format(self) -> str:
        line = f"{self.timestamp} [{self.actor_role.value}: {self.actor_name}] {self.action}"
        return f"{line} {self.details}" if self.details else line


class AuditSink(Protocol):
    """Where the engine sends one record per successful mutation."""

    def record(self, record: AuditRecord) -> None: ...


@dataclass
class AuditLog:
    """Flat text file sink, read back in emission order."""

    path: Path
    clock: ReferenceClock

    def __post_init__(self):
        self.path = Path(self.path)

    def record(self, record: AuditRecord) -> None:
        """Append a record as one line.

        Raises:
            AuditSinkError: If the file cannot be opened or written.
        """
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(record.format() + "\n")
        except OSError as e:
            logger.error("Audit log write failed for %s: %s", self.path, e)
            raise AuditSinkError("Unable to open log file.") from e

    def make_record(
        self, role: Role, username: str, action: str, details: str = ""
    ) -> AuditRecord:
        return AuditRecord(
            timestamp=self.clock.timestamp(),
            actor_role=role,
            actor_name=username,
            action=action,
            details=details,
        )

    def log_login(self, role: Role, username: str) -> None:
        self.record(self.make_record(role, username, "Logged in"))

    def log_action(self, role: Role, username: str, action: str, details: str) -> None:
        self.record(self.make_record(role, username, action, details))

    def log_error(self, role: Role, username: str, action: str, message: str) -> None:
        """Record a refused action, e.g. ``Failed to reserve table Error: ...``."""
        self.record(self.make_record(role, username, action, f"Error: {message}"))

    def read_lines(self) -> List[str]:
        """Return every logged line, oldest first.

        Raises:
            AuditSinkError: If the file does not exist or cannot be read.
        """
        try:
            with self.path.open("r", encoding="utf-8") as f:
                return [line.rstrip("\n") for line in f]
        except OSError as e:
            raise AuditSinkError("Unable to open log file.") from e

from dataclasses import dataclass

from TableOPS_V1.core.accounts import AccountStore
from TableOPS_V1.core.audit import AuditLog
from TableOPS_V1.core.engine import ReservationEngine
from TableOPS_V1.core.settings import Settings
from TableOPS_V1.domain.types import ReferenceClock


@dataclass
class App:
    """Everything one interactive run shares, built once and passed around."""

    settings: Settings
    engine: ReservationEngine
    audit_log: AuditLog
    accounts: AccountStore

    @property
    def clock(self) -> ReferenceClock:
        return self.settings.reference_clock


def build_app(settings: Settings) -> App:
    """Wire the engine, the audit log and the account store from settings."""
    audit_log = AuditLog(path=settings.log_file, clock=settings.reference_clock)
    engine = ReservationEngine(
        clock=settings.reference_clock,
        audit_sink=audit_log,
        table_count=settings.table_count,
    )
    accounts = AccountStore(
        admin_username=settings.admin_username,
        admin_password=settings.admin_password,
    )
    return App(settings=settings, engine=engine, audit_log=audit_log, accounts=accounts)

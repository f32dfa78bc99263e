"""
Comptes utilisateurs: plaintext credential maps checked before a session opens.

There is no real security here; the engine never reads this store.
"""

from dataclasses import dataclass, field
from typing import Dict

from pydantic import BaseModel

from TableOPS_V1.core.audit import AuditLog
from TableOPS_V1.core.errors import AccountError
from TableOPS_V1.domain.types import Role


class Session(BaseModel):
    """The user currently driving the menus."""

    role: Role
    username: str


@dataclass
class AccountStore:
    admin_username: str = "admin"
    admin_password: str = "admin123"
    receptionists: Dict[str, str] = field(default_factory=dict)
    customers: Dict[str, str] = field(default_factory=dict)

    def _accounts_for(self, role: Role) -> Dict[str, str]:
        if role == Role.RECEPTIONIST:
            return self.receptionists
        if role == Role.CUSTOMER:
            return self.customers
        raise AccountError(f"Accounts cannot be created for role {role.value}.")

    def exists(self, role: Role, username: str) -> bool:
        if role == Role.ADMIN:
            return username == self.admin_username
        return username in self._accounts_for(role)

    def create_account(self, role: Role, username: str, password: str) -> None:
        """Register a Receptionist or Customer account.

        Raises:
            AccountError: If the username is taken for that role or the role
                is Admin.
        """
        accounts = self._accounts_for(role)
        if username in accounts:
            raise AccountError("Username already exists. Please choose a different username.")
        accounts[username] = password

    def authenticate(self, role: Role, username: str, password: str) -> bool:
        if role == Role.ADMIN:
            return username == self.admin_username and password == self.admin_password
        accounts = self._accounts_for(role)
        return username in accounts and accounts[username] == password


def open_session(role: Role, username: str, audit_log: AuditLog) -> Session:
    """Build the session of a user who just authenticated and log the login."""
    audit_log.log_login(role, username)
    return Session(role=role, username=username)

# tableops/ui/login.py
from typing import Optional

from TableOPS_V1.core.accounts import Session, open_session
from TableOPS_V1.core.app import App
from TableOPS_V1.core.errors import AuditSinkError
from TableOPS_V1.domain.types import Role
from TableOPS_V1.ui.affichage import print_fatal
from TableOPS_V1.ui.menus import run_role_menu
from TableOPS_V1.utils import get_input


def _login(app: App, role: Role) -> str:
    """Prompt for credentials until they match; returns the username."""
    label = role.value
    while True:
        username = input(f"Enter {label} username: ")
        password = input(f"Enter {label} password: ")
        if app.accounts.authenticate(role, username, password):
            return username
        print(f"Invalid {label.lower()} credentials. Please try again.")


def _create_customer(app: App) -> str:
    while True:
        username = input("Enter username: ")
        if not app.accounts.exists(Role.CUSTOMER, username):
            break
        print("Account already exists. Please choose a different username.")
    password = input("Enter password: ")
    app.accounts.create_account(Role.CUSTOMER, username, password)
    print("Customer account created.")
    return username


def _customer_entry(app: App) -> str:
    option = get_input(
        "\n1. Create Customer Account\n2. Login to Customer Account\nChoice: ",
        1,
        2,
        "Invalid choice. Please enter a single number between 1 and 2 (e.g., 1, not 1a, 1.1, or 1 1).",
    )
    if option == 1:
        return _create_customer(app)
    return _login(app, Role.CUSTOMER)


def select_role(app: App) -> Optional[Session]:
    """Role selection screen; returns None when the user picks Exit."""
    role_choice = get_input(
        "\n[Role Selection]\n1. Admin\n2. Receptionist\n3. Customer\n4. Exit\nChoose role: ",
        1,
        4,
        "Invalid choice. Please enter a single number between 1 and 4 (e.g., 1, not 1a, 1.1, or 1 1).",
    )
    if role_choice == 4:
        return None
    if role_choice == 1:
        role, username = Role.ADMIN, _login(app, Role.ADMIN)
    elif role_choice == 2:
        role, username = Role.RECEPTIONIST, _login(app, Role.RECEPTIONIST)
    else:
        role, username = Role.CUSTOMER, _customer_entry(app)
    return open_session(role, username, app.audit_log)


def run(app: App) -> None:
    """Role selection loop; each logout comes back here."""
    while True:
        try:
            session = select_role(app)
        except AuditSinkError as e:
            print_fatal(str(e))
            continue
        if session is None:
            return
        run_role_menu(app, session)

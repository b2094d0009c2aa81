"""
BizDesk — Password hashing and role permissions.

Passwords are stored as salted bcrypt hashes only. Roles are read from the
stored user record; the permission table below is the single place that
decides what a role may do.
"""

import bcrypt

from bizdesk.config import settings

SUPER_ADMIN = "Super Admin"
ADMIN = "Admin"
EMPLOYEE = "Employee"
ROLES = (SUPER_ADMIN, ADMIN, EMPLOYEE)

# Nobody but a Super Admin
RESTRICTED_ACTIONS = frozenset({"manage_payments", "delete_records"})
# Admins (and Super Admins)
ADMIN_ACTIONS = frozenset({"manage_invoices", "manage_employees", "manage_settings"})
# Everyone except plain employees
STAFF_VIEW_ACTIONS = frozenset({"view_finance", "view_quotations", "view_employees"})

KNOWN_ACTIONS = tuple(sorted(RESTRICTED_ACTIONS | ADMIN_ACTIONS | STAFF_VIEW_ACTIONS))


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in the store
        return False


def avatar_for(name: str) -> str:
    return name[:2].upper()


def can(role: str | None, action: str) -> bool:
    """Whether ``role`` may perform ``action``. Unknown actions are allowed."""
    if not role:
        return False
    if role == SUPER_ADMIN:
        return True
    if action in RESTRICTED_ACTIONS:
        return False
    if action in ADMIN_ACTIONS:
        return role == ADMIN
    if action in STAFF_VIEW_ACTIONS:
        return role != EMPLOYEE
    return True


def permissions_for(role: str | None) -> list[str]:
    """Known actions granted to ``role``."""
    return [action for action in KNOWN_ACTIONS if can(role, action)]

"""Back-office users, permission flags and view access.

Admin users are gated by explicit capability flags. Employees signing in
to the member portal are gated by their role: every member sees the
member views, and a role may additionally be granted operational views
(inventory, cash register) through ``RoleAccess``.

Example:
    >>> user = User("u1", "ana", "ana@example.com", "Ana", UserRole.MANAGER,
    ...             Permissions(view_ops=True))
    >>> can_access(user, View.OVERTIME)
    True
    >>> can_access(user, View.WALLET)
    False
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"


class View(str, Enum):
    DASHBOARD = "DASHBOARD"
    EMPLOYEES = "EMPLOYEES"
    OVERTIME = "OVERTIME"
    SANCTIONS = "SANCTIONS"
    FILES = "FILES"
    CASH_REGISTER = "CASH_REGISTER"
    ADMIN_HUB = "ADMIN_HUB"
    PAYROLL = "PAYROLL"
    USERS = "USERS"
    PRODUCTS = "PRODUCTS"
    SETTINGS = "SETTINGS"
    FINANCE = "FINANCE"
    WALLET = "WALLET"
    ROYALTIES = "ROYALTIES"
    STATISTICS = "STATISTICS"
    INVENTORY = "INVENTORY"
    MEMBER_HOME = "MEMBER_HOME"
    MEMBER_CALENDAR = "MEMBER_CALENDAR"
    MEMBER_TASKS = "MEMBER_TASKS"
    MEMBER_FILE = "MEMBER_FILE"


@dataclass(frozen=True)
class Permissions:
    """Capability flags, one view/manage pair per module plus super admin."""

    view_hr: bool = False
    manage_hr: bool = False
    view_ops: bool = False
    manage_ops: bool = False
    view_finance: bool = False
    manage_finance: bool = False
    view_inventory: bool = False
    manage_inventory: bool = False
    super_admin: bool = False

    @classmethod
    def full(cls) -> Permissions:
        return cls(**{f.name: True for f in fields(cls)})


# Capability required by each admin view; None means any signed-in user.
VIEW_CAPABILITY: dict[View, str | None] = {
    View.DASHBOARD: None,
    View.ADMIN_HUB: None,
    View.CASH_REGISTER: None,
    View.EMPLOYEES: "view_hr",
    View.FILES: "view_hr",
    View.OVERTIME: "view_ops",
    View.SANCTIONS: "view_ops",
    View.PAYROLL: "view_finance",
    View.PRODUCTS: "view_finance",
    View.FINANCE: "view_finance",
    View.WALLET: "view_finance",
    View.ROYALTIES: "view_finance",
    View.STATISTICS: "view_finance",
    View.INVENTORY: "view_inventory",
    View.USERS: "super_admin",
    View.SETTINGS: "super_admin",
}

MEMBER_BASE_VIEWS = frozenset(
    {View.MEMBER_HOME, View.MEMBER_CALENDAR, View.MEMBER_TASKS, View.MEMBER_FILE}
)

# Views a role can be granted on top of the member views
GRANTABLE_VIEWS = frozenset({View.INVENTORY, View.CASH_REGISTER})

DEFAULT_MEMBER_ROLE = "COCINA"


@dataclass(frozen=True)
class User:
    id: str
    username: str
    email: str
    name: str
    role: UserRole
    permissions: Permissions = field(default_factory=Permissions)
    last_login: datetime | None = None


def can_access(user: User, view: View) -> bool:
    """Whether an admin user may open a view. Member views are never admin views."""
    view = View(view)
    if view in MEMBER_BASE_VIEWS:
        return False
    capability = VIEW_CAPABILITY.get(view)
    if capability is None:
        return True
    return bool(getattr(user.permissions, capability))


@dataclass
class RoleAccess:
    """Operational views granted to each employee role.

    Roles missing from ``roles`` get no extra view.
    """

    roles: dict[str, frozenset[View]] = field(default_factory=dict)

    @classmethod
    def default(cls) -> RoleAccess:
        inventory = frozenset({View.INVENTORY})
        cash = frozenset({View.CASH_REGISTER})
        both = inventory | cash
        return cls(
            roles={
                "JEFE_COCINA": inventory,
                "COORDINADOR": both,
                "MOSTRADOR": cash,
                "ADMINISTRATIVO": cash,
                "GERENTE": both,
                "EMPRESA": both,
            }
        )

    def views_for(self, role: str) -> frozenset[View]:
        return self.roles.get(role, frozenset())

    def toggle(self, role: str, view: View) -> bool:
        """Grant or revoke a view for a role; returns True if now granted.

        Raises:
            ValueError: If the view cannot be granted to members.

        """
        view = View(view)
        if view not in GRANTABLE_VIEWS:
            raise ValueError(f"{view.value} cannot be granted to a member role")
        current = self.views_for(role)
        if view in current:
            self.roles[role] = current - {view}
            return False
        self.roles[role] = current | {view}
        return True


def member_views(role: str | None, role_access: RoleAccess) -> frozenset[View]:
    """Views visible to an employee in the member portal."""
    return MEMBER_BASE_VIEWS | role_access.views_for(role or DEFAULT_MEMBER_ROLE)


def upgrade_admin_permissions(users: Iterable[User]) -> tuple[list[User], bool]:
    """Grant full permissions to ADMIN users saved before finance flags existed.

    When any ADMIN lacks ``view_finance``, every ADMIN is upgraded to full
    permissions. Returns the (possibly updated) users and whether anything
    changed.
    """
    users = list(users)
    needs_fix = any(u.role == UserRole.ADMIN and not u.permissions.view_finance for u in users)
    if not needs_fix:
        return users, False

    logger.info("Upgrading ADMIN users to full permissions")
    full = Permissions.full()
    return [replace(u, permissions=full) if u.role == UserRole.ADMIN else u for u in users], True

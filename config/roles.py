"""
config/roles.py
───────────────
Role-based navigation.

Every role sees Dashboard, Equipment, Schedule, Alerts and Logs.
Inventory is limited to supervisors and managers; Reports to managers.
Record edits are limited to supervisors and managers.
"""
from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    TECHNICIAN = "Technician"
    SUPERVISOR = "Supervisor"
    MANAGER = "Manager"


ALL_ROLES = frozenset(UserRole)


@dataclass(frozen=True)
class NavItem:
    name: str
    path: str
    icon: str
    roles: frozenset[UserRole]


NAV_ITEMS: list[NavItem] = [
    NavItem("Dashboard", "/", "▦", ALL_ROLES),
    NavItem("Equipment", "/equipment", "⚙", ALL_ROLES),
    NavItem("Schedule", "/schedule", "▤", ALL_ROLES),
    NavItem("Alerts", "/alerts", "⚠", ALL_ROLES),
    NavItem("Logs", "/logs", "✎", ALL_ROLES),
    NavItem("Inventory", "/inventory", "▣", frozenset({UserRole.SUPERVISOR, UserRole.MANAGER})),
    NavItem("Reports", "/reports", "▥", frozenset({UserRole.MANAGER})),
]

_BY_PATH = {item.path: item for item in NAV_ITEMS}


def nav_items_for(role: UserRole | str) -> list[NavItem]:
    """Navigation entries visible to `role`, in menu order."""
    role = UserRole(role)
    return [item for item in NAV_ITEMS if role in item.roles]


def can_access(role: UserRole | str, path: str) -> bool:
    """
    True if `role` may open `path`.

    Unknown paths are never accessible; `/equipment/<id>` inherits the
    permissions of `/equipment`.
    """
    role = UserRole(role)
    if path not in _BY_PATH and path.startswith("/equipment/"):
        path = "/equipment"
    item = _BY_PATH.get(path)
    return item is not None and role in item.roles


def can_manage(role: UserRole | str) -> bool:
    """Create, edit and delete equipment, tasks and parts."""
    return UserRole(role) in (UserRole.SUPERVISOR, UserRole.MANAGER)


def can_log_work(role: UserRole | str) -> bool:
    """Managers review the maintenance log but do not write to it."""
    return UserRole(role) != UserRole.MANAGER

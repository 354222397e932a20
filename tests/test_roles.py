"""
tests/test_roles.py
────────────────────
Tests for role-based navigation and permissions.
"""
import pytest

from config.roles import UserRole, can_access, can_log_work, can_manage, nav_items_for


class TestNavigation:
    def test_technician_menu(self):
        names = [item.name for item in nav_items_for(UserRole.TECHNICIAN)]
        assert names == ["Dashboard", "Equipment", "Schedule", "Alerts", "Logs"]

    def test_supervisor_sees_inventory(self):
        names = [item.name for item in nav_items_for("Supervisor")]
        assert "Inventory" in names
        assert "Reports" not in names

    def test_manager_sees_everything(self):
        assert len(nav_items_for(UserRole.MANAGER)) == 7


class TestCanAccess:
    @pytest.mark.parametrize(
        ("role", "path", "allowed"),
        [
            (UserRole.TECHNICIAN, "/", True),
            (UserRole.TECHNICIAN, "/inventory", False),
            (UserRole.TECHNICIAN, "/reports", False),
            (UserRole.SUPERVISOR, "/inventory", True),
            (UserRole.SUPERVISOR, "/reports", False),
            (UserRole.MANAGER, "/reports", True),
        ],
    )
    def test_route_gating(self, role, path, allowed):
        assert can_access(role, path) is allowed

    def test_equipment_detail_inherits_list(self):
        assert can_access(UserRole.TECHNICIAN, "/equipment/eq-1")

    def test_unknown_path(self):
        assert not can_access(UserRole.MANAGER, "/settings")

    def test_unknown_role(self):
        with pytest.raises(ValueError):
            can_access("Intern", "/")


class TestPermissions:
    def test_manage(self):
        assert not can_manage(UserRole.TECHNICIAN)
        assert can_manage(UserRole.SUPERVISOR)
        assert can_manage(UserRole.MANAGER)

    def test_log_work(self):
        assert can_log_work(UserRole.TECHNICIAN)
        assert can_log_work(UserRole.SUPERVISOR)
        assert not can_log_work(UserRole.MANAGER)

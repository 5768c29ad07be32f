"""
Dashboard selection tests.

Verifies:
- The dashboard is a pure function of role
- Unauthenticated sessions get no dashboard
- Views are filtered by the session's permissions
"""

import pytest

from shopmaster.dashboards import (
    DASHBOARD_ADMIN,
    DASHBOARD_CASHIER,
    DASHBOARD_USER,
    available_views,
    dashboard_for_role,
    select_dashboard,
)
from shopmaster.services.auth_service import StaticCredentialVerifier
from shopmaster.services.session_service import SessionManager


@pytest.mark.parametrize(
    "role,expected",
    [
        ("admin", DASHBOARD_ADMIN),
        ("cashier", DASHBOARD_CASHIER),
        ("user", DASHBOARD_USER),
        ("anything-else", DASHBOARD_USER),
    ],
)
def test_dashboard_for_role(role, expected):
    assert dashboard_for_role(role) == expected


class TestSelectDashboard:

    def test_logged_out(self, verifier):
        manager = SessionManager(verifier=verifier)
        assert select_dashboard(manager) is None
        assert available_views(manager) == []

    def test_admin(self, verifier):
        manager = SessionManager(verifier=verifier)
        manager.login("admin", "admin123")
        assert select_dashboard(manager) == DASHBOARD_ADMIN
        assert available_views(manager) == [
            "dashboard",
            "customers",
            "suppliers",
            "inventory",
            "recovery",
            "sales-reports",
        ]

    def test_cashier(self, verifier):
        manager = SessionManager(verifier=verifier)
        manager.login("cashier1", "cash123")
        assert select_dashboard(manager) == DASHBOARD_CASHIER
        assert available_views(manager) == ["dashboard", "recovery"]

    def test_user(self):
        verifier = StaticCredentialVerifier([("clerk", "pw12345", "user", "Clerk")], rounds=4)
        manager = SessionManager(verifier=verifier)
        manager.login("clerk", "pw12345")
        assert select_dashboard(manager) == DASHBOARD_USER
        assert available_views(manager) == ["dashboard"]

    def test_admin_without_view_all_sees_only_home(self):
        verifier = StaticCredentialVerifier(
            [("boss", "pw12345", "admin", "Boss", ["add_customer"])],
            rounds=4,
        )
        manager = SessionManager(verifier=verifier)
        manager.login("boss", "pw12345")
        assert select_dashboard(manager) == DASHBOARD_ADMIN
        assert available_views(manager) == ["dashboard"]

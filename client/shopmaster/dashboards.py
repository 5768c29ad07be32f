# Overview: Role-based dashboard selection and the views each dashboard exposes.

from __future__ import annotations

from .permissions import ROLE_ADMIN, ROLE_CASHIER
from .services.session_service import SessionManager


DASHBOARD_ADMIN = "admin"
DASHBOARD_CASHIER = "cashier"
DASHBOARD_USER = "user"

# Views per dashboard, in menu order, with the permission each one needs
# (None: always shown)
DASHBOARD_VIEWS = {
    DASHBOARD_ADMIN: [
        ("dashboard", None),
        ("customers", "view_all"),
        ("suppliers", "view_all"),
        ("inventory", "view_all"),
        ("recovery", "view_all"),
        ("sales-reports", "view_all"),
    ],
    DASHBOARD_CASHIER: [
        ("dashboard", None),
        ("recovery", "manage_recovery"),
    ],
    DASHBOARD_USER: [
        ("dashboard", None),
    ],
}


def dashboard_for_role(role: str) -> str:
    """Pure role -> dashboard mapping; any role other than admin/cashier gets the user dashboard."""
    if role == ROLE_ADMIN:
        return DASHBOARD_ADMIN
    if role == ROLE_CASHIER:
        return DASHBOARD_CASHIER
    return DASHBOARD_USER


def select_dashboard(manager: SessionManager) -> str | None:
    """Dashboard to mount for the session; None means show the login form."""
    if not manager.is_authenticated:
        return None
    return dashboard_for_role(manager.require_user().role)


def available_views(manager: SessionManager) -> list[str]:
    """Views of the session's dashboard that its permissions unlock."""
    variant = select_dashboard(manager)
    if variant is None:
        return []
    return [
        view
        for view, permission in DASHBOARD_VIEWS[variant]
        if permission is None or manager.has_permission(permission)
    ]

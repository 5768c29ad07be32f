# Overview: Flask API routes for console login/logout; parses input and returns JSON responses.

"""
Authentication API routes

The login form posts here. Errors are shown inline on the form:
- missing username or password -> 400
- unknown user or wrong password -> 401, one message for both
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..dashboards import select_dashboard
from ..decorators import require_auth
from ..permissions import describe_permissions
from ..services.session_service import AuthError, MissingFieldsError


auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


def _session_payload(manager) -> dict:
    user = manager.require_user()
    return {
        "user": user.to_dict(),
        "permissions": list(user.permissions),
        "permission_details": describe_permissions(user.permissions),
        "dashboard": select_dashboard(manager),
    }


@auth_bp.post("/login")
def login_route():
    """
    Authenticate against the credential table and persist the session.

    Request body: {"username": "...", "password": "..."}

    Returns user info and the dashboard to mount on success.
    """
    manager = g.session_manager
    data = request.get_json(silent=True) or {}

    username = data.get("username")
    password = data.get("password")
    if not isinstance(username, str) or not isinstance(password, str):
        username, password = "", ""

    try:
        manager.login(username, password)
    except MissingFieldsError as e:
        return jsonify({"error": str(e)}), 400
    except AuthError as e:
        return jsonify({"error": str(e)}), 401
    except Exception:
        current_app.logger.exception("Failed to login user")
        return jsonify({"error": "Internal server error"}), 500

    payload = _session_payload(manager)
    payload["message"] = "Login successful"
    return jsonify(payload), 200


@auth_bp.post("/logout")
def logout_route():
    """
    Clear the console session. Idempotent: logging out twice is fine.
    """
    g.session_manager.logout()
    return jsonify({"message": "Logout successful"}), 200


@auth_bp.get("/me")
@require_auth
def me_route():
    """Current session user, permissions, and dashboard."""
    return jsonify(_session_payload(g.session_manager)), 200

# Overview: Request and permission decorators for console routes.

from functools import wraps
from flask import current_app, jsonify, g


def _session_manager():
    return getattr(g, "session_manager", None)


def _is_authenticated() -> bool:
    manager = _session_manager()
    return manager is not None and manager.is_authenticated


def require_auth(f):
    """
    Require a logged-in console user.

    The session manager is restored from the session cookie before every
    request (see create_app); this only checks its state.

    Works for both plain and async views: the wrapped view is run through
    current_app.ensure_sync.

    SECURITY: Returns 401 if nobody is logged in.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not _is_authenticated():
            return jsonify({"error": "Authentication required"}), 401

        return current_app.ensure_sync(f)(*args, **kwargs)

    return decorated_function


def require_permission(permission_code: str):
    """
    Require a specific permission in the session user's permission set.

    SECURITY: Returns 401 without a session and 403 without the permission.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            # Ensure @require_auth semantics even if it was not applied first
            if not _is_authenticated():
                return jsonify({"error": "Authentication required"}), 401

            manager = _session_manager()
            if not manager.has_permission(permission_code):
                current_app.logger.info(
                    "Permission %s denied for '%s'", permission_code, manager.require_user().username
                )
                return jsonify({
                    "error": "Permission denied",
                    "required_permission": permission_code,
                }), 403

            return current_app.ensure_sync(f)(*args, **kwargs)

        return decorated_function
    return decorator

# Overview: Flask API routes for the customer and supplier rosters; parses input and returns JSON responses.

"""
Roster Routes

Customers and suppliers share one set of routes, built per entity kind by
create_roster_blueprint(). Each request drives a RosterController (and a
FormEditor for create/update) against the POS API, so the console applies
exactly the same rules as the roster screens.

SECURITY: All routes require authentication.
- /api/customers/* requires add_customer
- /api/suppliers/* requires add_supplier

Every response carries the notifications raised while serving it.
"""

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth, require_permission
from ..extensions import entity_service
from ..models import DRAFT_FIELDS, EntityKind
from ..notifications import Notifier
from ..services.form_service import FormEditor, SubmitOutcome
from ..services.roster_service import RosterController


def _roster(service) -> RosterController:
    return RosterController(
        service,
        Notifier(),
        debounce_seconds=current_app.config["SEARCH_DEBOUNCE_SECONDS"],
    )


def _notifications(roster: RosterController) -> list[dict]:
    return [n.to_dict() for n in roster.notifier.history]


def _last_message(roster: RosterController, default: str) -> str:
    last = roster.notifier.last
    return last.description if last else default


def _apply_fields(editor: FormEditor, data) -> str | None:
    """
    Copy request fields into the editor as if typed into the form.

    Returns an error message for a malformed payload, None otherwise.
    """
    if not isinstance(data, dict):
        return "Invalid JSON payload"

    for key in data:
        if key not in DRAFT_FIELDS:
            return f"Field not allowed: {key}"

    for name in DRAFT_FIELDS:
        if name not in data:
            continue
        value = data[name]
        if value is None:
            value = ""
        if not isinstance(value, str):
            return f"{name} must be a string"
        editor.on_field_change(name, value)

    return None


def _last_success(roster: RosterController) -> str | None:
    for notification in roster.notifier.history:
        if notification.status == "success":
            return notification.description
    return None


def _submit_response(roster: RosterController, editor: FormEditor, outcome: SubmitOutcome, success_status: int):
    notifications = _notifications(roster)

    if outcome is SubmitOutcome.SUCCEEDED:
        return jsonify({
            "message": _last_success(roster),
            "items": [r.to_dict() for r in roster.all_records],
            "notifications": notifications,
        }), success_status

    if outcome is SubmitOutcome.INVALID:
        return jsonify({
            "error": "Validation failed",
            "errors": dict(editor.errors),
            "notifications": notifications,
        }), 400

    if outcome is SubmitOutcome.UNCHANGED:
        return jsonify({
            "message": "No changes were made to update",
            "updated": False,
            "notifications": notifications,
        }), 200

    if outcome is SubmitOutcome.BUSY:
        return jsonify({"error": "A submission is already in progress"}), 409

    return jsonify({
        "error": _last_message(roster, "Request failed"),
        "notifications": notifications,
    }), 400


def create_roster_blueprint(kind: EntityKind, permission: str) -> Blueprint:
    """Routes for one roster kind under /api/<kind>."""
    bp = Blueprint(kind.value, __name__, url_prefix=f"/api/{kind.value}")
    label = kind.label

    @bp.get("")
    @require_auth
    @require_permission(permission)
    async def list_route():
        """
        Fetch the roster and filter it by name.

        Query parameters:
        - q: case-insensitive name filter (default: none)

        Returns:
            {items, count, total, query, notifications}; 502 when the POS API
            cannot be read
        """
        query = request.args.get("q", "")

        async with entity_service(kind) as service:
            roster = _roster(service)
            if not await roster.refresh():
                return jsonify({
                    "error": _last_message(roster, f"Failed to fetch {kind.plural}"),
                    "notifications": _notifications(roster),
                }), 502

            roster.set_query(query)
            roster.apply_filter()

        return jsonify({
            "items": [r.to_dict() for r in roster.filtered],
            "count": len(roster.filtered),
            "total": len(roster.all_records),
            "query": query,
            "notifications": _notifications(roster),
        }), 200

    @bp.get("/active")
    @require_auth
    @require_permission(permission)
    async def list_active_route():
        async with entity_service(kind) as service:
            response = await service.list_active()

        if not response.success:
            return jsonify({"error": response.message}), 502

        return jsonify({
            "items": [r.to_dict() for r in response.data],
            "count": len(response.data),
        }), 200

    @bp.get("/statistics")
    @require_auth
    @require_permission(permission)
    async def statistics_route():
        async with entity_service(kind) as service:
            response = await service.statistics()

        if not response.success:
            return jsonify({"error": response.message}), 502
        return jsonify(response.data or {}), 200

    @bp.post("")
    @require_auth
    @require_permission(permission)
    async def create_route():
        """
        Create a record through the add form.

        Request body:
        {
            "name": "...",     // required, at least 2 characters
            "phone": "...",    // required, digits/space/+/-/()
            "email": "...",    // optional
            "address": "..."   // required, at least 5 characters
        }

        Returns:
            201 with the refreshed roster; 400 with field errors or the
            POS API's message
        """
        try:
            data = request.get_json(silent=True)

            async with entity_service(kind) as service:
                roster = _roster(service)
                editor = roster.open_editor()
                error = _apply_fields(editor, data)
                if error:
                    return jsonify({"error": error}), 400
                outcome = await editor.submit()

            return _submit_response(roster, editor, outcome, 201)

        except Exception:
            current_app.logger.exception("Failed to create %s", label.lower())
            return jsonify({"error": "Internal server error"}), 500

    @bp.put("/<record_id>")
    @require_auth
    @require_permission(permission)
    async def update_route(record_id: str):
        """
        Update a record through the edit form, seeded from the POS API.

        Fields left out of the body keep their current values. Nothing is
        sent when the result equals the current record.
        """
        try:
            data = request.get_json(silent=True)

            async with entity_service(kind) as service:
                response = await service.get(record_id)
                if not response.success:
                    status = 404 if response.status_code == 404 else 502
                    return jsonify({"error": response.message}), status
                if response.data is None:
                    return jsonify({"error": f"{label} not found"}), 404

                roster = _roster(service)
                editor = roster.open_editor(response.data)
                error = _apply_fields(editor, data)
                if error:
                    return jsonify({"error": error}), 400
                outcome = await editor.submit()

            return _submit_response(roster, editor, outcome, 200)

        except Exception:
            current_app.logger.exception("Failed to update %s %s", label.lower(), record_id)
            return jsonify({"error": "Internal server error"}), 500

    @bp.patch("/<record_id>/toggle-status")
    @require_auth
    @require_permission(permission)
    async def toggle_status_route(record_id: str):
        """
        Activate/deactivate a record. Records are never deleted.

        Returns the status as read back from the POS API after the flip.
        """
        try:
            async with entity_service(kind) as service:
                roster = _roster(service)
                toggled = await roster.toggle_status(record_id)
        except Exception:
            current_app.logger.exception("Failed to toggle %s %s", label.lower(), record_id)
            return jsonify({"error": "Internal server error"}), 500

        if not toggled:
            return jsonify({
                "error": _last_message(roster, f"Failed to update {label.lower()} status"),
                "notifications": _notifications(roster),
            }), 400

        record = next((r for r in roster.all_records if r.id == record_id), None)
        return jsonify({
            "message": _last_success(roster),
            "status": record.status if record else None,
            "notifications": _notifications(roster),
        }), 200

    return bp


customers_bp = create_roster_blueprint(EntityKind.CUSTOMER, "add_customer")
suppliers_bp = create_roster_blueprint(EntityKind.SUPPLIER, "add_supplier")

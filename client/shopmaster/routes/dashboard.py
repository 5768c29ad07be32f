# Overview: Flask API route that picks the dashboard for the logged-in role.

"""
Dashboard routes

The dashboard is a pure function of the session user's role:
admin -> admin dashboard, cashier -> cashier dashboard, anything else ->
user dashboard. The admin dashboard also carries customer and supplier
statistics, fetched concurrently.
"""

import asyncio

from flask import Blueprint, jsonify, g

from ..dashboards import DASHBOARD_ADMIN, available_views, select_dashboard
from ..decorators import require_auth
from ..extensions import entity_service
from ..models import EntityKind


dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")

EMPTY_STATISTICS = {
    EntityKind.CUSTOMER: {"totalCustomers": 0, "newCustomersToday": 0},
    EntityKind.SUPPLIER: {"totalSuppliers": 0, "newSuppliersToday": 0},
}


async def _statistics(kind: EntityKind) -> dict:
    async with entity_service(kind) as service:
        response = await service.statistics()
    if response.success and isinstance(response.data, dict):
        return response.data
    return dict(EMPTY_STATISTICS[kind])


@dashboard_bp.get("")
@require_auth
async def dashboard_route():
    """
    Dashboard variant, the views it unlocks, and (admin only) statistics.

    Statistics failures fall back to zero counts; the dashboard still loads.
    """
    manager = g.session_manager
    variant = select_dashboard(manager)

    payload = {
        "variant": variant,
        "views": available_views(manager),
        "user": manager.require_user().to_dict(),
    }

    if variant == DASHBOARD_ADMIN:
        customers, suppliers = await asyncio.gather(
            _statistics(EntityKind.CUSTOMER),
            _statistics(EntityKind.SUPPLIER),
        )
        payload["statistics"] = {"customers": customers, "suppliers": suppliers}

    return jsonify(payload), 200

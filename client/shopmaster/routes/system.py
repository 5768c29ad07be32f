# client/shopmaster/routes/system.py
"""
System health endpoint.
"""

from flask import Blueprint, current_app, jsonify

system_bp = Blueprint("system", __name__)


@system_bp.get("/health")
def health():
    return jsonify({
        "status": "ok",
        "api_base_url": current_app.config["API_BASE_URL"],
    })

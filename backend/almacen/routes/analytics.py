# Overview: Flask API routes for dashboard analytics.

from flask import Blueprint, current_app

from ..services.record_store import get_record_store
from ..services import analytics_service


analytics_bp = Blueprint("analytics", __name__, url_prefix="/api/analytics")


@analytics_bp.get("/dashboard")
def dashboard_route():
    try:
        return analytics_service.dashboard_summary(get_record_store()), 200
    except Exception:
        current_app.logger.exception("Failed to build dashboard analytics")
        return {"error": "Internal server error"}, 500

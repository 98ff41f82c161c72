# backend/almacen/routes/system.py
"""
System health endpoint.
"""

import time
from flask import Blueprint, current_app

from ..models import Product, Inventory, Movement, Report
from ..services.record_store import get_record_store
from ..services.stock_service import check_consistency
from ..time_utils import utcnow

system_bp = Blueprint("system", __name__, url_prefix="/api")


def check_record_store_health() -> dict:
    """
    Check that every collection is queryable.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        store = get_record_store()
        details = {
            "products": store.query(Product).count(),
            "inventory": store.query(Inventory).count(),
            "movements": store.query(Movement).count(),
            "reports": store.query(Report).count(),
        }
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": details,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Record store health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Record store error",
        }


def check_stock_consistency_health() -> dict:
    """
    Degraded (still operational) when any product/inventory pair disagrees.
    """
    start_time = time.time()
    try:
        problems = check_consistency(get_record_store())
        elapsed_ms = (time.time() - start_time) * 1000
        if problems:
            return {
                "status": "degraded",
                "latency_ms": round(elapsed_ms, 2),
                "warning": f"{len(problems)} stock inconsistencies",
                "details": {"kinds": sorted({p.kind for p in problems})},
            }
        return {"status": "healthy", "latency_ms": round(elapsed_ms, 2)}
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Stock consistency check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Stock consistency check error",
        }


@system_bp.get("/health")
def health():
    """
    Returns:
    - 200: healthy or degraded
    - 503: one or more checks unhealthy
    """
    start_time = time.time()

    store_health = check_record_store_health()
    stock_health = check_stock_consistency_health()

    all_checks = [store_health, stock_health]
    if any(check["status"] == "unhealthy" for check in all_checks):
        overall_status, http_status = "unhealthy", 503
    elif any(check["status"] == "degraded" for check in all_checks):
        overall_status, http_status = "degraded", 200
    else:
        overall_status, http_status = "healthy", 200

    response = {
        "status": overall_status,
        "timestamp": utcnow().isoformat() + "Z",
        "total_latency_ms": round((time.time() - start_time) * 1000, 2),
        "checks": {
            "record_store": store_health,
            "stock_consistency": stock_health,
        },
    }
    return response, http_status

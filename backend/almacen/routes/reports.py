# Overview: Flask API routes for saved reports; parses input and returns JSON responses.

from flask import Blueprint, Response, request, current_app

from ..models import Report
from ..services.record_store import get_record_store
from ..services import reports_service
from ..time_utils import utcnow
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_report,
    ValidationError,
)

REPORT_POLICY = ModelValidationPolicy(
    writable_fields={"type", "description", "dateFrom", "dateTo", "data"},
    required_on_create={"type"},
    aliases={"dateFrom": "date_from", "dateTo": "date_to"},
)

reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("")
def list_reports():
    try:
        return reports_service.list_reports(get_record_store()), 200
    except Exception:
        current_app.logger.exception("Failed to list reports")
        return {"error": "Internal server error"}, 500


@reports_bp.get("/export.csv")
def export_reports():
    try:
        body = reports_service.export_reports_csv(get_record_store())
    except Exception:
        current_app.logger.exception("Failed to export reports")
        return {"error": "Internal server error"}, 500

    filename = f"reportes_{utcnow().date().isoformat()}.csv"
    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename=\"{filename}\""},
    )


@reports_bp.post("")
def create_report_route():
    """dateFrom/dateTo arrive as ISO-8601 strings and are stored as timestamps."""
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(
            model=Report,
            payload=payload,
            policy=REPORT_POLICY,
            partial=False,
            rules=[enforce_rules_report],
        )
    except ValidationError as e:
        return e.to_dict(), 400

    store = get_record_store()
    try:
        created = reports_service.create_report(store, patch=patch)
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to create report")
        return {"error": "Internal server error"}, 500

    return created, 201


@reports_bp.delete("/<report_id>")
def delete_report_route(report_id: str):
    store = get_record_store()
    try:
        deleted = reports_service.delete_report(store, report_id=report_id)
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to delete report")
        return {"error": "Internal server error"}, 500

    if not deleted:
        return {"error": "Report not found"}, 404
    return "", 204

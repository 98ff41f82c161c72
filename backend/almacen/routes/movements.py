# Overview: Flask API routes for the stock movement ledger; parses input and returns JSON responses.

# backend/almacen/routes/movements.py
"""
Movement ledger routes.

Time semantics:
- API accepts ISO-8601 datetimes with Z/offsets; backend normalizes to UTC-naive internally.
- date-range filtering is inclusive on both bounds: from <= createdAt <= to.
"""
from flask import Blueprint, request, current_app

from ..models import Movement
from ..services.record_store import get_record_store
from ..services import movements_service
from ..time_utils import parse_iso_datetime
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_movement,
    ValidationError,
)

MOVEMENT_POLICY = ModelValidationPolicy(
    writable_fields={"ref", "productId", "type", "quantity", "description", "userId"},
    required_on_create={"ref", "productId", "type", "quantity", "userId"},
    aliases={"productId": "product_id", "userId": "user_id"},
)

movements_bp = Blueprint("movements", __name__, url_prefix="/api/movements")


@movements_bp.get("")
def list_movements():
    try:
        return movements_service.list_movements(get_record_store()), 200
    except Exception:
        current_app.logger.exception("Failed to list movements")
        return {"error": "Internal server error"}, 500


@movements_bp.get("/date-range")
def movements_by_date_range():
    from_raw = request.args.get("from")
    to_raw = request.args.get("to")
    if not from_raw or not to_raw:
        return {"error": "from and to dates are required"}, 400

    try:
        date_from = parse_iso_datetime(from_raw)
        date_to = parse_iso_datetime(to_raw)
    except ValueError:
        return {"error": "from and to must be ISO-8601 datetimes"}, 400

    try:
        rows = movements_service.list_movements_by_date_range(
            get_record_store(), date_from=date_from, date_to=date_to
        )
    except Exception:
        current_app.logger.exception("Failed to list movements by date range")
        return {"error": "Internal server error"}, 500
    return rows, 200


@movements_bp.get("/<movement_id>")
def get_movement(movement_id: str):
    try:
        movement = movements_service.get_movement(get_record_store(), movement_id)
    except Exception:
        current_app.logger.exception("Failed to load movement")
        return {"error": "Internal server error"}, 500

    if movement is None:
        return {"error": "Movement not found"}, 404
    return movement, 200


@movements_bp.post("")
def create_movement_route():
    """
    Record a movement. Its quantity is applied as-is (the client chooses the
    sign) to the product's inventory row and mirrored onto the product.
    """
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(
            model=Movement,
            payload=payload,
            policy=MOVEMENT_POLICY,
            partial=False,
            rules=[enforce_rules_movement],
        )
    except ValidationError as e:
        return e.to_dict(), 400

    store = get_record_store()
    try:
        created = movements_service.create_movement(store, patch=patch)
    except ValidationError as e:
        store.rollback()
        return e.to_dict(), 400
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to create movement")
        return {"error": "Internal server error"}, 500

    return created, 201

# Overview: Flask API routes for inventory records; parses input and returns JSON responses.

# backend/almacen/routes/inventory.py
"""
Inventory routes.

status is never accepted from clients: it is derived from stock on every
write. A stock change here is mirrored onto the owning product.
"""
from flask import Blueprint, request, current_app

from ..models import Inventory
from ..services.record_store import get_record_store
from ..services import inventory_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    ValidationError,
    ConflictError,
)

INVENTORY_CREATE_POLICY = ModelValidationPolicy(
    writable_fields={"productId", "unit", "stock"},
    required_on_create={"productId", "unit", "stock"},
    aliases={"productId": "product_id"},
    derived_fields={"status"},
)

# The owning product is fixed once the row exists
INVENTORY_UPDATE_POLICY = ModelValidationPolicy(
    writable_fields={"unit", "stock"},
    derived_fields={"status"},
)

inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")


@inventory_bp.get("")
def list_inventory():
    try:
        return inventory_service.list_inventory(get_record_store()), 200
    except Exception:
        current_app.logger.exception("Failed to list inventory")
        return {"error": "Internal server error"}, 500


@inventory_bp.get("/<inventory_id>")
def get_inventory_item(inventory_id: str):
    try:
        item = inventory_service.get_inventory_item(get_record_store(), inventory_id)
    except Exception:
        current_app.logger.exception("Failed to load inventory item")
        return {"error": "Internal server error"}, 500

    if item is None:
        return {"error": "Inventory item not found"}, 404
    return item, 200


@inventory_bp.get("/by-product/<product_id>")
def get_inventory_for_product(product_id: str):
    try:
        item = inventory_service.get_inventory_for_product(get_record_store(), product_id)
    except Exception:
        current_app.logger.exception("Failed to load inventory for product")
        return {"error": "Internal server error"}, 500

    if item is None:
        return {"error": "Inventory item not found"}, 404
    return item, 200


@inventory_bp.post("")
def create_inventory_item_route():
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(
            model=Inventory,
            payload=payload,
            policy=INVENTORY_CREATE_POLICY,
            partial=False,
        )
    except ValidationError as e:
        return e.to_dict(), 400

    store = get_record_store()
    try:
        created = inventory_service.create_inventory_item(store, patch=patch)
    except ValidationError as e:
        store.rollback()
        return e.to_dict(), 400
    except ConflictError as e:
        store.rollback()
        return {"error": str(e)}, 409
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to create inventory item")
        return {"error": "Internal server error"}, 500

    return created, 201


@inventory_bp.put("/<inventory_id>")
def update_inventory_item_route(inventory_id: str):
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(
            model=Inventory,
            payload=payload,
            policy=INVENTORY_UPDATE_POLICY,
            partial=True,
        )
    except ValidationError as e:
        return e.to_dict(), 400

    store = get_record_store()
    try:
        updated = inventory_service.update_inventory_item(store, inventory_id=inventory_id, patch=patch)
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to update inventory item")
        return {"error": "Internal server error"}, 500

    if not updated:
        return {"error": "Inventory item not found"}, 404
    return updated, 200


@inventory_bp.delete("/<inventory_id>")
def delete_inventory_item_route(inventory_id: str):
    store = get_record_store()
    try:
        deleted = inventory_service.delete_inventory_item(store, inventory_id=inventory_id)
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to delete inventory item")
        return {"error": "Internal server error"}, 500

    if not deleted:
        return {"error": "Inventory item not found"}, 404
    return "", 204

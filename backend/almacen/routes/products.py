# Overview: Flask API routes for the product catalog; parses input and returns JSON responses.

# backend/almacen/routes/products.py
"""
Product catalog routes.

Creating a product also creates its inventory row; deleting it removes that
row. A "stock" field in a PUT is mirrored onto the inventory row with its
status recomputed.
"""
from flask import Blueprint, request, current_app

from ..models import Product
from ..services.record_store import get_record_store
from ..services import products_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_product,
    ValidationError,
)

PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields={"ref", "name", "category", "price", "stock"},
    required_on_create={"ref", "name", "category", "price"},
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products():
    try:
        return products_service.list_products(get_record_store()), 200
    except Exception:
        current_app.logger.exception("Failed to list products")
        return {"error": "Internal server error"}, 500


@products_bp.get("/<product_id>")
def get_product(product_id: str):
    try:
        product = products_service.get_product(get_record_store(), product_id)
    except Exception:
        current_app.logger.exception("Failed to load product")
        return {"error": "Internal server error"}, 500

    if product is None:
        return {"error": "Product not found"}, 404
    return product, 200


@products_bp.post("")
def create_product_route():
    """Create a product (and its inventory row)."""
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(
            model=Product,
            payload=payload,
            policy=PRODUCT_POLICY,
            partial=False,
            rules=[enforce_rules_product],
        )
    except ValidationError as e:
        return e.to_dict(), 400

    store = get_record_store()
    try:
        created = products_service.create_product(store, patch=patch)
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to create product")
        return {"error": "Internal server error"}, 500

    return created, 201


@products_bp.put("/<product_id>")
def update_product_route(product_id: str):
    """Partial update; only supplied fields change."""
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(
            model=Product,
            payload=payload,
            policy=PRODUCT_POLICY,
            partial=True,
            rules=[enforce_rules_product],
        )
    except ValidationError as e:
        return e.to_dict(), 400

    store = get_record_store()
    try:
        updated = products_service.update_product(store, product_id=product_id, patch=patch)
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to update product")
        return {"error": "Internal server error"}, 500

    if not updated:
        return {"error": "Product not found"}, 404
    return updated, 200


@products_bp.delete("/<product_id>")
def delete_product_route(product_id: str):
    store = get_record_store()
    try:
        deleted = products_service.delete_product(store, product_id=product_id)
    except Exception:
        store.rollback()
        current_app.logger.exception("Failed to delete product")
        return {"error": "Internal server error"}, 500

    if not deleted:
        return {"error": "Product not found"}, 404
    return "", 204

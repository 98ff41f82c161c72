# Overview: Service-layer operations for inventory records.

from __future__ import annotations

from ..models import Inventory, Product
from ..time_utils import utcnow
from ..validation import ConflictError, FieldError, ValidationError
from .record_store import RecordStore
from .stock_service import apply_inventory_stock_edit, derive_status


def list_inventory(store: RecordStore) -> list[dict]:
    return [item.to_dict() for item in store.list_records(Inventory)]


def get_inventory_item(store: RecordStore, inventory_id: str) -> dict | None:
    item = store.get(Inventory, inventory_id)
    return item.to_dict() if item else None


def get_inventory_for_product(store: RecordStore, product_id: str) -> dict | None:
    item = store.inventory_for_product(product_id)
    return item.to_dict() if item else None


def create_inventory_item(store: RecordStore, *, patch: dict) -> dict:
    """
    Create the inventory row for a product that has none.

    Status is derived from the submitted stock; the product's cached stock is
    aligned with it.

    Raises:
        ValidationError: product does not exist
        ConflictError: product already owns an inventory row
    """
    product_id = patch["product_id"]
    if store.get(Product, product_id) is None:
        raise ValidationError([FieldError("productId", "product not found")])
    if store.inventory_for_product(product_id) is not None:
        raise ConflictError("Product already has an inventory record.")

    stock = patch["stock"]
    item = Inventory(
        product_id=product_id,
        unit=patch["unit"],
        stock=stock,
        status=derive_status(stock),
        updated_at=utcnow(),
    )
    store.add(item)
    store.flush()

    apply_inventory_stock_edit(store, item, stock)

    store.commit()
    return item.to_dict()


def update_inventory_item(store: RecordStore, *, inventory_id: str, patch: dict) -> dict | None:
    """
    Merge the supplied fields onto the inventory row.

    Returns the updated dict, or None if not found. A stock change recomputes
    status and is mirrored onto the product; updatedAt is always refreshed.
    """
    item = store.get(Inventory, inventory_id)
    if not item:
        return None

    if "unit" in patch:
        item.unit = patch["unit"]
    if "stock" in patch:
        apply_inventory_stock_edit(store, item, patch["stock"])
    item.updated_at = utcnow()

    store.commit()
    return item.to_dict()


def delete_inventory_item(store: RecordStore, *, inventory_id: str) -> bool:
    item = store.get(Inventory, inventory_id)
    if not item:
        return False
    store.delete(item)
    store.commit()
    return True

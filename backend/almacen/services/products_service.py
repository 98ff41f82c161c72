# Overview: Service-layer operations for the product catalog.

from __future__ import annotations

from ..models import Product
from .record_store import RecordStore
from .stock_service import (
    apply_direct_stock_edit,
    create_companion_inventory,
    remove_companion_inventory,
)

# Stock is excluded: it only changes through stock_service
PRODUCT_MUTABLE_FIELDS = {"ref", "name", "category", "price"}


def apply_product_patch(p: Product, patch: dict) -> None:
    for k, v in patch.items():
        if k not in PRODUCT_MUTABLE_FIELDS:
            continue
        setattr(p, k, v)


def list_products(store: RecordStore) -> list[dict]:
    products = store.list_records(Product, Product.created_at.asc(), Product.name.asc())
    return [p.to_dict() for p in products]


def get_product(store: RecordStore, product_id: str) -> dict | None:
    p = store.get(Product, product_id)
    return p.to_dict() if p else None


def create_product(store: RecordStore, *, patch: dict) -> dict:
    """
    Create a product and its companion inventory row.

    Stock defaults to 0; the inventory row starts with the same stock, the
    placeholder unit and the status derived from that stock.
    """
    p = Product(stock=patch.get("stock") or 0)
    apply_product_patch(p, patch)

    store.add(p)
    store.flush()  # ensure p.id exists before the inventory row references it

    create_companion_inventory(store, p)

    store.commit()
    return p.to_dict()


def update_product(store: RecordStore, *, product_id: str, patch: dict) -> dict | None:
    """
    Merge the supplied fields onto the product.

    Returns the updated product dict, or None if not found. Stock is mirrored
    onto the inventory row only when the patch carries it.
    """
    p = store.get(Product, product_id)
    if not p:
        return None

    apply_product_patch(p, patch)
    if "stock" in patch:
        apply_direct_stock_edit(store, p.id, patch["stock"])

    store.commit()
    return p.to_dict()


def delete_product(store: RecordStore, *, product_id: str) -> bool:
    """
    Delete a product together with the inventory row it owns.

    Returns True if deleted, False if not found (nothing else is touched).
    """
    p = store.get(Product, product_id)
    if not p:
        return False

    remove_companion_inventory(store, p.id)
    store.delete(p)
    store.commit()
    return True

# Overview: Stock consistency rules; keeps Inventory.status, Inventory.stock and
# Product.stock in agreement whenever stock changes.

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from flask import current_app

from ..models import Product, Inventory, DEFAULT_UNIT
from ..time_utils import utcnow
from ..validation import FieldError, ValidationError, int_in_range
from .record_store import RecordStore

"""
Stock invariants (authoritative)

Status bands:
- status is a pure function of stock: stock <= 0 -> agotado,
  1..LOW_STOCK_THRESHOLD -> bajo_stock, above -> disponible.
- Every write path that touches Inventory.stock recomputes status here.

Propagation:
- A movement applies its signed delta to the product's inventory row, then
  mirrors the resulting stock onto Product.stock.
- A direct Product.stock edit mirrors onto the inventory row.
- A direct Inventory.stock edit mirrors onto the product.
- Stock is never clamped: a large enough "salida" or "ajuste" drives it negative,
  which classifies as agotado.
- A product without an inventory row is not an error. Propagation is skipped and a
  MissingInventory event is returned and logged.

Ownership:
- A product owns at most one inventory row (unique product_id), created with the
  product and deleted with it.

Nothing here commits; callers commit once per request.
"""

LOW_STOCK_THRESHOLD = 10


@dataclass(frozen=True)
class StockPropagated:
    product_id: str
    inventory_id: str
    previous_stock: int
    new_stock: int
    status: str


@dataclass(frozen=True)
class MissingInventory:
    """Non-fatal: stock change had no inventory row to land on."""
    product_id: str
    source: str


PropagationResult = Union[StockPropagated, MissingInventory]


@dataclass(frozen=True)
class Inconsistency:
    product_id: str
    inventory_id: str | None
    kind: str
    detail: str


def derive_status(stock: int) -> str:
    if stock <= 0:
        return "agotado"
    if stock <= LOW_STOCK_THRESHOLD:
        return "bajo_stock"
    return "disponible"


def _set_inventory_stock(inventory: Inventory, new_stock: int) -> None:
    inventory.stock = new_stock
    inventory.status = derive_status(new_stock)
    inventory.updated_at = utcnow()


def _missing(product_id: str, source: str) -> MissingInventory:
    current_app.logger.warning(
        "No inventory record for product %s; %s stock change not propagated",
        product_id,
        source,
    )
    return MissingInventory(product_id=product_id, source=source)


def create_companion_inventory(store: RecordStore, product: Product) -> Inventory:
    """Inventory row created together with a new product."""
    inventory = Inventory(
        product_id=product.id,
        unit=DEFAULT_UNIT,
        stock=product.stock,
        status=derive_status(product.stock),
        updated_at=utcnow(),
    )
    store.add(inventory)
    return inventory


def remove_companion_inventory(store: RecordStore, product_id: str) -> bool:
    inventory = store.inventory_for_product(product_id)
    if inventory is None:
        return False
    store.delete(inventory)
    return True


def apply_movement(store: RecordStore, product_id: str, delta: int) -> PropagationResult:
    """
    Apply a movement's signed quantity to the product's inventory row and mirror
    the result onto the product. The movement itself is persisted by the caller.

    Raises ValidationError, before touching any record, when the resulting
    stock would not fit a 64-bit integer.
    """
    inventory = store.inventory_for_product(product_id)
    if inventory is None:
        return _missing(product_id, "movement")

    previous = inventory.stock
    new_stock = previous + delta
    if not int_in_range(new_stock):
        raise ValidationError([FieldError("quantity", "quantity would take stock out of range")])
    _set_inventory_stock(inventory, new_stock)

    product = store.get(Product, product_id)
    if product is not None:
        product.stock = new_stock

    current_app.logger.debug(
        "Movement applied to product %s: %s -> %s (%s)",
        product_id, previous, new_stock, inventory.status,
    )
    return StockPropagated(
        product_id=product_id,
        inventory_id=inventory.id,
        previous_stock=previous,
        new_stock=new_stock,
        status=inventory.status,
    )


def apply_direct_stock_edit(store: RecordStore, product_id: str, new_stock: int) -> PropagationResult:
    """Product is the source: set its stock and mirror onto the inventory row."""
    product = store.get(Product, product_id)
    if product is not None:
        product.stock = new_stock

    inventory = store.inventory_for_product(product_id)
    if inventory is None:
        return _missing(product_id, "product edit")

    previous = inventory.stock
    _set_inventory_stock(inventory, new_stock)
    return StockPropagated(
        product_id=product_id,
        inventory_id=inventory.id,
        previous_stock=previous,
        new_stock=new_stock,
        status=inventory.status,
    )


def apply_inventory_stock_edit(store: RecordStore, inventory: Inventory, new_stock: int) -> StockPropagated:
    """Inventory is the source: recompute its status and mirror onto the product."""
    previous = inventory.stock
    _set_inventory_stock(inventory, new_stock)

    product = store.get(Product, inventory.product_id)
    if product is not None:
        product.stock = new_stock

    return StockPropagated(
        product_id=inventory.product_id,
        inventory_id=inventory.id,
        previous_stock=previous,
        new_stock=new_stock,
        status=inventory.status,
    )


def check_consistency(store: RecordStore) -> list[Inconsistency]:
    """
    Audit every product/inventory pair against the invariants above.

    Reports status drift, product/inventory stock mismatch, products with no
    inventory row, and inventory rows whose product is gone.
    """
    problems: list[Inconsistency] = []
    inventories = {inv.product_id: inv for inv in store.list_records(Inventory)}

    for product in store.list_records(Product, Product.created_at.asc()):
        inventory = inventories.pop(product.id, None)
        if inventory is None:
            problems.append(Inconsistency(
                product_id=product.id,
                inventory_id=None,
                kind="missing_inventory",
                detail=f"product {product.ref} has no inventory record",
            ))
            continue

        expected = derive_status(inventory.stock)
        if inventory.status != expected:
            problems.append(Inconsistency(
                product_id=product.id,
                inventory_id=inventory.id,
                kind="status_drift",
                detail=f"status {inventory.status} but stock {inventory.stock} implies {expected}",
            ))
        if product.stock != inventory.stock:
            problems.append(Inconsistency(
                product_id=product.id,
                inventory_id=inventory.id,
                kind="stock_mismatch",
                detail=f"product stock {product.stock} != inventory stock {inventory.stock}",
            ))

    for product_id, inventory in inventories.items():
        problems.append(Inconsistency(
            product_id=product_id,
            inventory_id=inventory.id,
            kind="orphan_inventory",
            detail="inventory record references a missing product",
        ))

    return problems

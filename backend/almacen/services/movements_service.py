# Overview: Service-layer operations for the stock movement ledger.

from __future__ import annotations

from datetime import datetime

from ..models import Movement
from .record_store import RecordStore
from .stock_service import apply_movement


def list_movements(store: RecordStore) -> list[dict]:
    """Newest first."""
    rows = store.list_records(Movement, Movement.created_at.desc())
    return [m.to_dict() for m in rows]


def get_movement(store: RecordStore, movement_id: str) -> dict | None:
    m = store.get(Movement, movement_id)
    return m.to_dict() if m else None


def create_movement(store: RecordStore, *, patch: dict) -> dict:
    """
    Record a movement and propagate its quantity into inventory and product stock.

    The movement is persisted even when the product has no inventory row; in
    that case propagation is skipped (see stock_service.MissingInventory).
    """
    m = Movement(
        ref=patch["ref"],
        product_id=patch["product_id"],
        type=patch["type"],
        quantity=patch["quantity"],
        description=patch.get("description") or None,
        user_id=patch["user_id"],
    )
    store.add(m)

    apply_movement(store, m.product_id, m.quantity)

    store.commit()
    return m.to_dict()


def list_movements_by_date_range(store: RecordStore, *, date_from: datetime, date_to: datetime) -> list[dict]:
    """
    Movements created within [date_from, date_to], both bounds inclusive, newest first.
    """
    rows = (
        store.query(Movement)
        .filter(Movement.created_at >= date_from, Movement.created_at <= date_to)
        .order_by(Movement.created_at.desc())
        .all()
    )
    return [m.to_dict() for m in rows]

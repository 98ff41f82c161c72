# Overview: Explicit handle on the application's record collections (products,
# inventory, movements, reports). Pure data access; no business rules.

from __future__ import annotations

from typing import Any, TypeVar

from flask import current_app
from sqlalchemy.orm import Query, scoped_session

from ..extensions import db
from ..models import Inventory

T = TypeVar("T")

EXTENSION_KEY = "record_store"


class RecordStore:
    """
    Keyed record collections backed by the app's SQLAlchemy session.

    One instance is built per application in create_app and registered on
    app.extensions; request handlers reach it through get_record_store().
    Services receive it as an argument rather than importing a global.

    The store never commits on its own: the calling service decides when a
    request's mutations form a complete unit.
    """

    def __init__(self, session: scoped_session):
        self._session = session

    @property
    def session(self) -> scoped_session:
        return self._session

    def query(self, model: type[T]) -> Query:
        return self._session.query(model)

    def add(self, record: T) -> T:
        self._session.add(record)
        return record

    def get(self, model: type[T], record_id: Any) -> T | None:
        if record_id is None:
            return None
        return self._session.get(model, record_id)

    def list_records(self, model: type[T], *order_by) -> list[T]:
        query = self._session.query(model)
        if order_by:
            query = query.order_by(*order_by)
        return query.all()

    def delete(self, record: Any) -> None:
        self._session.delete(record)

    def inventory_for_product(self, product_id: str) -> Inventory | None:
        """Owning-index lookup: product_id is unique on inventories."""
        return (
            self._session.query(Inventory)
            .filter(Inventory.product_id == product_id)
            .one_or_none()
        )

    def flush(self) -> None:
        self._session.flush()

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()

    def reset(self) -> None:
        """Empty every collection (schema is kept)."""
        for table in reversed(db.metadata.sorted_tables):
            self._session.execute(table.delete())
        self._session.commit()


def init_record_store(app) -> RecordStore:
    store = RecordStore(db.session)
    app.extensions[EXTENSION_KEY] = store
    return store


def get_record_store() -> RecordStore:
    return current_app.extensions[EXTENSION_KEY]

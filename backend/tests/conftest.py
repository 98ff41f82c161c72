"""
Pytest fixtures for the almacen backend tests.

Every test gets its own application and therefore its own in-memory store.
"""

from datetime import datetime

import pytest

from almacen import create_app
from almacen.config import TestConfig
from almacen.models import Movement
from almacen.services import products_service
from almacen.services.record_store import get_record_store


@pytest.fixture(scope='function')
def app():
    """Create application for testing (empty store, no sample data)."""
    app = create_app(TestConfig)
    yield app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def store(app):
    """Record store inside a pushed app context, for service-level tests."""
    with app.app_context():
        yield get_record_store()


def make_product(store, **overrides) -> dict:
    """Create a product (and its inventory row) through the service layer."""
    patch = {
        "ref": "P100",
        "name": "Cemento Portland",
        "category": "Categoria A",
        "price": "25.50",
        "stock": 0,
    }
    patch.update(overrides)
    return products_service.create_product(store, patch=patch)


def add_movement_at(store, created_at: datetime, *, product_id="p-none", quantity=1, ref=None) -> Movement:
    """Insert a ledger row with a fixed timestamp (no propagation)."""
    m = Movement(
        ref=ref or f"MOV-{created_at:%H%M%S}",
        product_id=product_id,
        type="ajuste",
        quantity=quantity,
        user_id="admin",
        created_at=created_at,
    )
    store.add(m)
    store.commit()
    return m


def product_payload(**overrides) -> dict:
    payload = {
        "ref": "P200",
        "name": "Adhesivos Industriales",
        "category": "Categoria B",
        "price": "45.00",
    }
    payload.update(overrides)
    return payload

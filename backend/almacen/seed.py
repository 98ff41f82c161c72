# Overview: Demo catalog loaded on startup when SEED_SAMPLE_DATA is enabled.

from __future__ import annotations

from .models import Product, Inventory, Movement
from .services.record_store import RecordStore
from .services.stock_service import derive_status
from .time_utils import utcnow

SAMPLE_PRODUCTS = (
    # ref, name, category, price, stock, unit
    ("P001", "Cemento Portland", "Categoria A", "25.50", 150, "Sacos"),
    ("P002", "Adhesivos Industriales", "Categoria B", "45.00", 75, "Litros"),
    ("P003", "Bolsas de Empaque", "Categoria C", "12.99", 200, "Unidades"),
)

SAMPLE_MOVEMENTS = (
    # ref, product ref, type, quantity, description, user
    ("MOV001", "P001", "entrada", 50, "Entrada de cemento", "admin"),
    ("MOV002", "P002", "salida", -25, "Salida de adhesivos", "vendedor"),
)


def load_sample_data(store: RecordStore) -> dict:
    """
    Insert the demo products, their inventory rows and two historical movements.

    The sample movements are ledger history only: the seeded stock already
    reflects them, so they are not propagated again. Skipped when the catalog
    is not empty.
    """
    if store.query(Product).count():
        return {"products": 0, "movements": 0}

    now = utcnow()
    by_ref: dict[str, Product] = {}
    for ref, name, category, price, stock, unit in SAMPLE_PRODUCTS:
        product = Product(ref=ref, name=name, category=category, price=price, stock=stock, created_at=now)
        store.add(product)
        by_ref[ref] = product
    store.flush()

    for ref, _name, _category, _price, stock, unit in SAMPLE_PRODUCTS:
        store.add(Inventory(
            product_id=by_ref[ref].id,
            unit=unit,
            stock=stock,
            status=derive_status(stock),
            updated_at=now,
        ))

    for ref, product_ref, type_, quantity, description, user_id in SAMPLE_MOVEMENTS:
        store.add(Movement(
            ref=ref,
            product_id=by_ref[product_ref].id,
            type=type_,
            quantity=quantity,
            description=description,
            user_id=user_id,
            created_at=now,
        ))

    store.commit()
    return {"products": len(SAMPLE_PRODUCTS), "movements": len(SAMPLE_MOVEMENTS)}

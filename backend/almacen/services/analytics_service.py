# Overview: Dashboard aggregates. Only product count and total stock are computed;
# the financial and chart figures are fixed placeholders.

from __future__ import annotations

from sqlalchemy import func

from ..models import Product
from .record_store import RecordStore

MONTHLY_INCOME = 54000.00
MONTHLY_EXPENSES = 32000.00

SHIPPING_DATA = (
    ("Ene", 30),
    ("Feb", 45),
    ("Mar", 35),
    ("Abr", 50),
    ("May", 40),
    ("Jun", 60),
)

MATERIAL_DATA = (
    ("CEMENTO", 35, "#FB923C"),
    ("STICKERS", 25, "#10B981"),
    ("BAGS", 20, "#60A5FA"),
    ("BOX", 20, "#1F2937"),
)


def dashboard_summary(store: RecordStore) -> dict:
    total_products, total_stock = store.session.query(
        func.count(Product.id),
        func.coalesce(func.sum(Product.stock), 0),
    ).one()

    return {
        "totalProducts": int(total_products),
        "totalStock": int(total_stock),
        "monthlyIncome": MONTHLY_INCOME,
        "monthlyExpenses": MONTHLY_EXPENSES,
        "shippingData": [{"month": m, "value": v} for m, v in SHIPPING_DATA],
        "materialData": [{"name": n, "value": v, "color": c} for n, v, c in MATERIAL_DATA],
    }

from __future__ import annotations

import uuid

from ..extensions import db
from ..time_utils import utcnow, to_utc_z

# Fixed label set offered by the product form
PRODUCT_CATEGORIES = ("Categoria A", "Categoria B", "Categoria C")


def new_id() -> str:
    return str(uuid.uuid4())


class Product(db.Model):
    """
    Catalog entry.

    STOCK DESIGN DECISION:
    Product.stock is a cached mirror of the owning Inventory row's stock.
    It is written only through stock_service (movement propagation or a direct
    stock edit), never independently of the Inventory record.

    Price is kept as an exact decimal string ("25.50"); no float round-trips.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_ref", "ref"),
        db.Index("ix_products_category", "category"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    # Catalog reference code; unique by convention only
    ref = db.Column(db.String(64), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(64), nullable=False)
    price = db.Column(db.String(32), nullable=False)

    stock = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Product id={self.id} ref={self.ref!r} name={self.name!r} stock={self.stock}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ref": self.ref,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "stock": self.stock,
            "createdAt": to_utc_z(self.created_at),
        }

from __future__ import annotations

from ..extensions import db
from ..time_utils import utcnow, to_utc_z
from .catalog import new_id

# Status bands, healthiest first
INVENTORY_STATUSES = ("disponible", "bajo_stock", "agotado")

# Unit label given to the inventory row created alongside a new product
DEFAULT_UNIT = "Unidades"


class Inventory(db.Model):
    """
    Stock-and-status record for one product.

    OWNERSHIP:
    - product_id is UNIQUE: a product owns at most one inventory row, so the
      product -> inventory lookup is an index hit rather than a first-match scan.
    - status is always derived from stock by stock_service.derive_status and is
      never accepted from a client payload.
    """
    __tablename__ = "inventories"
    __table_args__ = (
        db.UniqueConstraint("product_id", name="uq_inventories_product"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    product_id = db.Column(db.String(36), db.ForeignKey("products.id"), nullable=False)

    unit = db.Column(db.String(64), nullable=False)
    stock = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(db.String(16), nullable=False, index=True)

    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Inventory id={self.id} product_id={self.product_id} stock={self.stock} status={self.status}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "unit": self.unit,
            "stock": self.stock,
            "status": self.status,
            "updatedAt": to_utc_z(self.updated_at),
        }

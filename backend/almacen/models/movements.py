from __future__ import annotations

from ..extensions import db
from ..time_utils import utcnow, to_utc_z
from .catalog import new_id

MOVEMENT_TYPES = ("entrada", "salida", "ajuste")


class Movement(db.Model):
    """
    Append-only stock ledger entry.

    quantity is signed and its sign is chosen by the caller (the client sends
    negative quantities for "salida"). Rows are never updated or deleted.

    product_id is a plain reference, not a foreign key: ledger entries outlive
    the products they mention.
    """
    __tablename__ = "movements"
    __table_args__ = (
        db.Index("ix_movements_product_created", "product_id", "created_at"),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    ref = db.Column(db.String(64), nullable=False)
    product_id = db.Column(db.String(36), nullable=False)
    type = db.Column(db.String(16), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    description = db.Column(db.Text, nullable=True)
    user_id = db.Column(db.String(64), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self) -> str:
        return f"<Movement id={self.id} ref={self.ref!r} type={self.type} quantity={self.quantity}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ref": self.ref,
            "productId": self.product_id,
            "type": self.type,
            "quantity": self.quantity,
            "description": self.description,
            "userId": self.user_id,
            "createdAt": to_utc_z(self.created_at),
        }

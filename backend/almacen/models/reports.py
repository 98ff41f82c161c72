from __future__ import annotations

from ..extensions import db
from ..time_utils import utcnow, to_utc_z
from .catalog import new_id


class Report(db.Model):
    """Generated report record. Inert: no derived fields, no update path."""
    __tablename__ = "reports"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    type = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=True)

    date_from = db.Column(db.DateTime, nullable=True)
    date_to = db.Column(db.DateTime, nullable=True)

    # Opaque payload produced by the client (chart series, totals, ...)
    data = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self) -> str:
        return f"<Report id={self.id} type={self.type!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "description": self.description,
            "dateFrom": to_utc_z(self.date_from),
            "dateTo": to_utc_z(self.date_to),
            "data": self.data,
            "createdAt": to_utc_z(self.created_at),
        }

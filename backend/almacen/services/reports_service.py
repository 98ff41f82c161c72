# Overview: Service-layer operations for saved reports, including CSV export.

from __future__ import annotations

import csv
import io

from ..models import Report
from .record_store import RecordStore

CSV_HEADER = ("Fecha de generación", "Tipo de reporte", "Descripción")


def list_reports(store: RecordStore) -> list[dict]:
    """Newest first."""
    rows = store.list_records(Report, Report.created_at.desc())
    return [r.to_dict() for r in rows]


def create_report(store: RecordStore, *, patch: dict) -> dict:
    r = Report(
        type=patch["type"],
        description=patch.get("description") or None,
        date_from=patch.get("date_from"),
        date_to=patch.get("date_to"),
        data=patch.get("data"),
    )
    store.add(r)
    store.commit()
    return r.to_dict()


def delete_report(store: RecordStore, *, report_id: str) -> bool:
    r = store.get(Report, report_id)
    if not r:
        return False
    store.delete(r)
    store.commit()
    return True


def export_reports_csv(store: RecordStore) -> str:
    """
    CSV listing of all reports, newest first: generation date (d/m/yyyy),
    report type, description.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in store.list_records(Report, Report.created_at.desc()):
        created = r.created_at
        writer.writerow([
            f"{created.day}/{created.month}/{created.year}",
            r.type,
            r.description or "",
        ])
    return buf.getvalue()

import csv
import io
from datetime import datetime, time, timedelta

from sqlalchemy.orm import Session, joinedload

from app.db.base import utcnow
from app.db.models import Visit
from app.domain.status import visit_status

CSV_COLUMNS = (
    "visit_id",
    "visitor_name",
    "company",
    "phone",
    "host_name",
    "host_email",
    "purpose",
    "check_in_at",
    "check_out_at",
    "qr_token",
)


def _joined_visits(db: Session) -> list[Visit]:
    return (
        db.query(Visit)
        .options(joinedload(Visit.visitor), joinedload(Visit.host))
        .order_by(Visit.check_in_at.desc(), Visit.id.desc())
        .all()
    )


def list_visit_history(db: Session) -> list[dict]:
    return [
        {
            "id": visit.id,
            "visitor_name": visit.visitor.full_name,
            "company": visit.visitor.company,
            "phone": visit.visitor.phone,
            "host_name": visit.host.full_name,
            "host_email": visit.host.email,
            "purpose": visit.purpose,
            "check_in_at": visit.check_in_at.isoformat(),
            "check_out_at": visit.check_out_at.isoformat() if visit.check_out_at else None,
            "qr_token": visit.qr_token,
            "status": visit_status(visit.check_out_at).value,
        }
        for visit in _joined_visits(db)
    ]


def get_visit_stats(db: Session, now: datetime | None = None) -> dict:
    """Today's visit count and mean duration in minutes.

    The average covers every visit checked in today (UTC); visits still open
    are measured up to ``now``.
    """
    now = now or utcnow()
    day_start = datetime.combine(now.date(), time.min)
    day_end = day_start + timedelta(days=1)

    visits = (
        db.query(Visit)
        .filter(Visit.check_in_at >= day_start, Visit.check_in_at < day_end)
        .all()
    )
    if not visits:
        return {"visitorsToday": 0, "avgVisitDurationMinutes": 0.0}

    minutes = [
        max(((visit.check_out_at or now) - visit.check_in_at).total_seconds(), 0) / 60
        for visit in visits
    ]
    return {
        "visitorsToday": len(visits),
        "avgVisitDurationMinutes": round(sum(minutes) / len(minutes), 1),
    }


def export_visits_csv(db: Session) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for visit in _joined_visits(db):
        writer.writerow(
            [
                visit.id,
                visit.visitor.full_name,
                visit.visitor.company or "",
                visit.visitor.phone or "",
                visit.host.full_name,
                visit.host.email,
                visit.purpose,
                visit.check_in_at.isoformat(),
                visit.check_out_at.isoformat() if visit.check_out_at else "",
                visit.qr_token,
            ]
        )
    return buffer.getvalue()

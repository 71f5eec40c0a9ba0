from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import NotFoundError, ValidationError
from app.db.models import Visit
from app.domain.status import visit_status


def verify_token(db: Session, token: str) -> dict:
    """Resolve a scanned token to the visit it was issued for.

    The token is matched exactly; callers trim scanner noise first. Status is
    derived from the row on every call since a checkout may have happened
    since the last lookup.
    """
    if not token:
        raise ValidationError("qr_token required")

    visit = (
        db.query(Visit)
        .options(joinedload(Visit.visitor), joinedload(Visit.host))
        .filter(Visit.qr_token == token)
        .populate_existing()
        .first()
    )
    if not visit:
        raise NotFoundError("Invalid token (visit not found)")

    return {
        "visit_id": visit.id,
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

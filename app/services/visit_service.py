import logging
import uuid

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import AlreadyCheckedOutError, NotFoundError, ValidationError
from app.db.base import MAX_ROW_ID, utcnow
from app.db.models import Visit
from app.db.transaction import transaction
from app.domain.status import visit_status
from app.services.host_service import get_host
from app.services.visitor_service import create_visitor

logger = logging.getLogger(__name__)


def new_token() -> str:
    return str(uuid.uuid4())


def check_in(
    db: Session,
    full_name: str,
    host_id: int | None,
    purpose: str,
    company: str | None = None,
    phone: str | None = None,
) -> Visit:
    """Create the visitor and its visit in one transaction and issue the token.

    The host only has to exist. Inactive hosts are hidden from the kiosk
    dropdown but a selection made just before a host was disabled still
    checks in.
    """
    purpose = (purpose or "").strip()
    if not (full_name or "").strip() or host_id is None or not purpose:
        raise ValidationError("full_name, host_id and purpose are required")

    with transaction(db, conflict_message="Visit token already issued"):
        host = get_host(db, host_id)
        visitor = create_visitor(db, full_name, company=company, phone=phone)
        visit = Visit(
            visitor=visitor,
            host=host,
            purpose=purpose,
            qr_token=new_token(),
            check_in_at=utcnow(),
            check_out_at=None,
        )
        db.add(visit)
        db.flush()

    logger.info("visit checked in visit_id=%s host_id=%s", visit.id, visit.host_id)
    return visit


def get_visit(db: Session, visit_id: int) -> Visit:
    if not 1 <= visit_id <= MAX_ROW_ID:
        raise NotFoundError("Visit not found")
    visit = db.get(Visit, visit_id)
    if not visit:
        raise NotFoundError("Visit not found")
    return visit


def checkout(db: Session, visit_id: int) -> Visit:
    if not 1 <= visit_id <= MAX_ROW_ID:
        raise NotFoundError("Visit not found")
    with transaction(db):
        # Guarded in the statement itself so concurrent checkouts cannot both stamp it.
        result = db.execute(
            update(Visit)
            .where(Visit.id == visit_id, Visit.check_out_at.is_(None))
            .values(check_out_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            get_visit(db, visit_id)
            logger.warning("checkout rejected, visit already closed visit_id=%s", visit_id)
            raise AlreadyCheckedOutError("Visit already checked out")

    visit = db.get(Visit, visit_id, populate_existing=True)
    logger.info("visit checked out visit_id=%s", visit_id)
    return visit


def list_active_visits(db: Session) -> list[dict]:
    visits = (
        db.query(Visit)
        .options(joinedload(Visit.visitor))
        .filter(Visit.check_out_at.is_(None))
        .order_by(Visit.check_in_at.desc(), Visit.id.desc())
        .all()
    )
    return [visit_summary(visit) for visit in visits]


def visit_summary(visit: Visit) -> dict:
    return {
        "id": visit.id,
        "full_name": visit.visitor.full_name,
        "company": visit.visitor.company,
        "purpose": visit.purpose,
        "check_in_at": visit.check_in_at.isoformat(),
        "qr_token": visit.qr_token,
        "status": visit_status(visit.check_out_at).value,
    }

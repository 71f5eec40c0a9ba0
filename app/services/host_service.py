import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.base import MAX_ROW_ID
from app.db.models import Host
from app.db.transaction import transaction

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str:
    return (value or "").strip()


def create_host(db: Session, full_name: str, email: str) -> Host:
    full_name = _clean(full_name)
    email = _clean(email)
    if not full_name or not email:
        raise ValidationError("full_name and email required")

    conflict = f"A host with email {email} already exists"
    with transaction(db, conflict_message=conflict):
        # Fast path only; the unique index settles concurrent inserts.
        if db.query(Host.id).filter(Host.email == email).first():
            raise ConflictError(conflict)
        host = Host(full_name=full_name, email=email, is_active=True)
        db.add(host)
        db.flush()

    logger.info("host created id=%s", host.id)
    return host


def get_host(db: Session, host_id: int) -> Host:
    if not 1 <= host_id <= MAX_ROW_ID:
        raise NotFoundError("Host not found")
    host = db.get(Host, host_id)
    if not host:
        raise NotFoundError("Host not found")
    return host


def list_active_hosts(db: Session) -> list[Host]:
    return (
        db.query(Host)
        .filter(Host.is_active.is_(True))
        .order_by(Host.created_at.desc(), Host.id.desc())
        .all()
    )


def list_all_hosts(db: Session) -> list[Host]:
    return db.query(Host).order_by(Host.created_at.desc(), Host.id.desc()).all()


def set_host_active(db: Session, host_id: int, active: bool) -> Host:
    with transaction(db):
        host = get_host(db, host_id)
        host.is_active = active

    logger.info("host %s id=%s", "enabled" if active else "disabled", host.id)
    return host

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.db.models import Visitor


def _optional(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


def create_visitor(
    db: Session,
    full_name: str,
    company: str | None = None,
    phone: str | None = None,
) -> Visitor:
    """Add a visitor row to the caller's open transaction.

    Nothing is committed here: a visitor only exists together with its visit,
    so the check-in owns the transaction boundary. Repeat visitors get a new
    row every time.
    """
    full_name = (full_name or "").strip()
    if not full_name:
        raise ValidationError("full_name required")

    visitor = Visitor(full_name=full_name, company=_optional(company), phone=_optional(phone))
    db.add(visitor)
    db.flush()
    return visitor

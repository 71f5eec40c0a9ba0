from datetime import datetime
from enum import Enum


class VisitStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CHECKED_OUT = "CHECKED_OUT"


def visit_status(check_out_at: datetime | None) -> VisitStatus:
    """Status is never stored; a visit is active until it has a check-out time."""
    if check_out_at is None:
        return VisitStatus.ACTIVE
    return VisitStatus.CHECKED_OUT

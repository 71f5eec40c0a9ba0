from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.db.base import MAX_ROW_ID
from app.db.session import get_db
from app.schemas.report import VisitHistoryRow
from app.schemas.visit import CheckoutResponse, VisitDetail, VisitSummary
from app.services.realtime_service import publish_security_event
from app.services.report_service import list_visit_history
from app.services.verification_service import verify_token
from app.services.visit_service import checkout, list_active_visits

router = APIRouter()


@router.get("/active", response_model=list[VisitSummary])
def active_visits(db: Session = Depends(get_db)):
    return list_active_visits(db)


@router.get("/history", response_model=list[VisitHistoryRow])
def visit_history(db: Session = Depends(get_db)):
    return list_visit_history(db)


@router.get("/verify/{token}", response_model=VisitDetail)
def verify(token: str, db: Session = Depends(get_db)):
    # Scanners and paste boxes tend to add whitespace around the token.
    return verify_token(db, token.strip())


@router.post("/{visit_id}/checkout", response_model=CheckoutResponse)
async def checkout_visit(visit_id: int = Path(ge=1, le=MAX_ROW_ID), db: Session = Depends(get_db)):
    visit = checkout(db, visit_id)
    check_out_at = visit.check_out_at.isoformat()
    await publish_security_event("visit.checked_out", {"visit_id": visit.id, "check_out_at": check_out_at})
    return {"success": True, "check_out_at": check_out_at}

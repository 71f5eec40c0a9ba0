import logging
from time import perf_counter

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.visit import CheckInCreate, CheckInResponse
from app.services.realtime_service import publish_security_event
from app.services.visit_service import check_in, visit_summary

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/checkin", response_model=CheckInResponse)
async def kiosk_check_in(payload: CheckInCreate, db: Session = Depends(get_db)):
    started = perf_counter()
    try:
        visit = check_in(
            db,
            full_name=payload.full_name,
            host_id=payload.host_id,
            purpose=payload.purpose,
            company=payload.company,
            phone=payload.phone,
        )
    except Exception:
        elapsed_ms = (perf_counter() - started) * 1000
        logger.warning("checkin failed in %.1fms host_id=%s", elapsed_ms, payload.host_id)
        raise

    await publish_security_event("visit.checked_in", visit_summary(visit))

    elapsed_ms = (perf_counter() - started) * 1000
    logger.info("checkin completed in %.1fms visit_id=%s", elapsed_ms, visit.id)
    return {"success": True, "qr_token": visit.qr_token, "visit_id": visit.id}

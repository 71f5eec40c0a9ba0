from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.db.base import MAX_ROW_ID
from app.db.session import get_db
from app.schemas.host import HostCreate, HostCreated, HostOption, HostRecord, HostToggleResponse
from app.services.host_service import create_host, list_active_hosts, list_all_hosts, set_host_active
from app.services.realtime_service import publish_security_event

router = APIRouter()


@router.post("", response_model=HostCreated)
def add_host(payload: HostCreate, db: Session = Depends(get_db)):
    host = create_host(db, payload.full_name, payload.email)
    return {"id": host.id}


@router.get("", response_model=list[HostOption])
def active_hosts(db: Session = Depends(get_db)):
    return list_active_hosts(db)


@router.get("/all", response_model=list[HostRecord])
def all_hosts(db: Session = Depends(get_db)):
    return list_all_hosts(db)


async def _toggle(db: Session, host_id: int, active: bool) -> dict:
    host = set_host_active(db, host_id, active)
    await publish_security_event("host.updated", {"id": host.id, "is_active": host.is_active})
    return {"success": True, "id": host.id}


@router.post("/{host_id}/enable", response_model=HostToggleResponse)
async def enable_host(host_id: int = Path(ge=1, le=MAX_ROW_ID), db: Session = Depends(get_db)):
    return await _toggle(db, host_id, True)


@router.post("/{host_id}/disable", response_model=HostToggleResponse)
async def disable_host(host_id: int = Path(ge=1, le=MAX_ROW_ID), db: Session = Depends(get_db)):
    return await _toggle(db, host_id, False)

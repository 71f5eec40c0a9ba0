import logging

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.services.visit_service import list_active_visits

settings = get_settings()
logger = logging.getLogger(__name__)


def register_socket_events(sio):
    @sio.event(namespace=settings.SECURITY_NAMESPACE)
    async def connect(sid, environ, auth):
        db = SessionLocal()
        try:
            active = list_active_visits(db)
        finally:
            db.close()
        await sio.emit(
            "dashboard.snapshot",
            {"data": {"activeVisits": active}},
            to=sid,
            namespace=settings.SECURITY_NAMESPACE,
        )
        logger.debug("security dashboard connected sid=%s active=%s", sid, len(active))

    @sio.event(namespace=settings.SECURITY_NAMESPACE)
    async def disconnect(sid):
        logger.debug("security dashboard disconnected sid=%s", sid)

    @sio.on("dashboard.refresh", namespace=settings.SECURITY_NAMESPACE)
    async def dashboard_refresh(sid, payload=None):
        db = SessionLocal()
        try:
            active = list_active_visits(db)
        finally:
            db.close()
        await sio.emit(
            "dashboard.snapshot",
            {"data": {"activeVisits": active}},
            to=sid,
            namespace=settings.SECURITY_NAMESPACE,
        )

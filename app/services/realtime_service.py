import logging

from app.core.config import get_settings
from app.socket.server import sio

settings = get_settings()
logger = logging.getLogger(__name__)


async def publish_security_event(event: str, data: dict) -> None:
    """Push a change to connected security dashboards.

    Called after the transaction has committed; a broken socket must not turn
    a recorded check-in or checkout into a failed request.
    """
    try:
        await sio.emit(event, {"data": data}, namespace=settings.SECURITY_NAMESPACE)
    except Exception:
        logger.exception("realtime emit failed event=%s", event)

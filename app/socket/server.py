import logging

import socketio

from app.core.config import get_settings
from app.socket.events import register_socket_events

settings = get_settings()

# The security desk may be served from the same LAN range the kiosks use.
socket_cors_origins: list[str] | str = "*" if settings.DEBUG else list(settings.cors_origins)

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=socket_cors_origins,
    logger=logging.getLogger("socketio") if settings.DEBUG else False,
    engineio_logger=False,
)

register_socket_events(sio)

from app.db.models.host import Host
from app.db.models.visit import Visit
from app.db.models.visitor import Visitor

__all__ = [
    "Host",
    "Visit",
    "Visitor",
]

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Largest value a signed 64-bit INTEGER primary key can hold.
MAX_ROW_ID = 2**63 - 1

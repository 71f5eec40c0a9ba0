from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, utcnow


class Visit(Base):
    __tablename__ = "visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    visitor_id: Mapped[int] = mapped_column(Integer, ForeignKey("visitors.id"), nullable=False, unique=True)
    host_id: Mapped[int] = mapped_column(Integer, ForeignKey("hosts.id"), nullable=False, index=True)
    purpose: Mapped[str] = mapped_column(Text, nullable=False)
    qr_token: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    check_in_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)
    check_out_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, index=True)

    visitor = relationship("Visitor")
    host = relationship("Host")

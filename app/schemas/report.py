from pydantic import BaseModel


class VisitHistoryRow(BaseModel):
    id: int
    visitor_name: str
    company: str | None
    phone: str | None
    host_name: str
    host_email: str
    purpose: str
    check_in_at: str
    check_out_at: str | None
    qr_token: str
    status: str


class VisitStats(BaseModel):
    visitorsToday: int
    avgVisitDurationMinutes: float

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.db.base import MAX_ROW_ID


class CheckInCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str
    company: str | None = None
    phone: str | None = None
    host_id: int = Field(ge=1, le=MAX_ROW_ID)
    purpose: str

    @field_validator("company", "phone")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class CheckInResponse(BaseModel):
    success: bool = True
    qr_token: str
    visit_id: int


class VisitSummary(BaseModel):
    id: int
    full_name: str
    company: str | None
    purpose: str
    check_in_at: str
    qr_token: str
    status: str


class VisitDetail(BaseModel):
    visit_id: int
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


class CheckoutResponse(BaseModel):
    success: bool = True
    check_out_at: str

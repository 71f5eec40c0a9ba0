from datetime import datetime

from pydantic import BaseModel, ConfigDict


class HostCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str
    email: str


class HostCreated(BaseModel):
    id: int


class HostOption(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str


class HostRecord(HostOption):
    is_active: bool
    created_at: datetime


class HostToggleResponse(BaseModel):
    success: bool = True
    id: int

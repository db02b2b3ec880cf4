from datetime import datetime

from pydantic import Field

from app.schemas.base import PHONE_PATTERN, CamelModel, RequestModel


class BranchCreate(RequestModel):
    name: str = Field(..., min_length=3, max_length=50)
    address: str = Field(..., min_length=5)
    phone: str = Field(..., pattern=PHONE_PATTERN)


class BranchUpdate(RequestModel):
    # Absent fields stay unset; an explicit null fails the str check.
    name: str = Field(default=None, min_length=3, max_length=50)
    address: str = Field(default=None, min_length=5)
    phone: str = Field(default=None, pattern=PHONE_PATTERN)


class BranchRead(CamelModel):
    id: str
    name: str
    address: str
    phone: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

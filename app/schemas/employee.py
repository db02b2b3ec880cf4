from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.base import PHONE_PATTERN, CamelModel, RequestModel


class EmployeeCreate(RequestModel):
    name: str = Field(..., min_length=3, max_length=50)
    position: str = Field(..., min_length=2, max_length=50)
    department: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN)
    branch_id: str = Field(..., min_length=1)


class EmployeeUpdate(EmployeeCreate):
    """Employee updates carry the full record."""


class EmployeeRead(CamelModel):
    id: str
    name: str
    position: str
    department: str
    email: str
    phone: str
    branch_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# ASCII digits only; `\d` would also match other Unicode digits.
PHONE_PATTERN = r"^[0-9]{3}-[0-9]{3}-[0-9]{4}$"

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(BaseModel):
    """Incoming bodies: camelCase keys only, anything else is rejected."""

    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")


class ApiResponse(BaseModel, Generic[DataT]):
    status: str = "success"
    data: DataT | None = None
    message: str | None = None


class ErrorResponse(BaseModel):
    status: str = "error"
    message: str
    code: str
    errors: list[str] | None = None

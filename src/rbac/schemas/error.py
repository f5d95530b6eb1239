"""Error response schemas."""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    message: str
    value: str | None = None
    reason: str | None = None


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    errors: list[ErrorDetail]
    request_id: str | None = None

from typing import List, Optional
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    field: Optional[str] = None
    message: str


class ErrorEnvelope(BaseModel):
    """Body of every handled failure; successful calls return their model directly."""

    success: bool = False
    statusCode: int
    message: str
    data: None = None
    errors: List[ErrorDetail]
    traceId: Optional[str] = None


def error_response(
    code: str,
    message: str,
    status_code: int = 400,
    trace_id: Optional[str] = None,
    field: Optional[str] = None,
) -> ErrorEnvelope:
    return ErrorEnvelope(
        statusCode=status_code,
        message=message,
        errors=[ErrorDetail(code=code, field=field, message=message)],
        traceId=trace_id,
    )

"""
Error payloads returned by the bookings API.
"""
from typing import Mapping, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    error: str = Field(..., description="Short error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    code: Optional[str] = Field(None, description="HTTP status code")


def error_response(
    status_code: int,
    error: str,
    detail: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None
) -> JSONResponse:
    """Render an ErrorResponse with the status code echoed in the body."""
    body = ErrorResponse(error=error, detail=detail, code=str(status_code))
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)

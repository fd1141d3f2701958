"""API error response schemas."""

from typing import Literal

from pydantic import BaseModel


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    code: str
    message: str
    errors: list[FieldError] | None = None


class ConnectivityErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    success: Literal[False] = False
    message: str
    error: str

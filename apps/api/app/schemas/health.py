"""Health and connectivity schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel


class HealthStatus(BaseModel):
    status: Literal["success"] = "success"
    message: str
    environment: str
    timestamp: datetime


class ConnectivityStatus(BaseModel):
    status: Literal["success"] = "success"
    success: Literal[True] = True
    message: str
    data: dict[str, Any] | None = None

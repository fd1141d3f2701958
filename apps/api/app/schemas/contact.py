"""Contact message API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

_MAX_EMAIL_LENGTH = 255


class CreateContactMessageRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    subject: str | None = Field(default=None, max_length=255)
    message: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str) -> str:
        if len(value) > _MAX_EMAIL_LENGTH:
            raise ValueError(f"Email must be at most {_MAX_EMAIL_LENGTH} characters")
        return value


class ContactMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    email: str
    subject: str | None = None
    message: str
    is_read: bool
    created_at: datetime


class ContactMessageList(BaseModel):
    status: Literal["success"] = "success"
    count: int
    unread: int
    data: list[ContactMessage]


class ContactStats(BaseModel):
    total: int
    read: int
    unread: int

"""Experience API schemas."""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from app.schemas.common import PartialUpdate


class CreateExperienceRequest(BaseModel):
    role: str = Field(min_length=1, max_length=255)
    company: str = Field(min_length=1, max_length=255)
    period: str = Field(min_length=1, max_length=100)
    description: list[str] = Field(min_length=1)
    company_logo: HttpUrl | None = None
    location: str | None = Field(default=None, max_length=255)
    order_index: int = 0
    is_published: bool = True


class UpdateExperienceRequest(PartialUpdate):
    clearable_fields: ClassVar[frozenset[str]] = frozenset({"company_logo", "location"})

    role: str | None = Field(default=None, min_length=1, max_length=255)
    company: str | None = Field(default=None, min_length=1, max_length=255)
    period: str | None = Field(default=None, min_length=1, max_length=100)
    description: list[str] | None = None
    company_logo: HttpUrl | None = None
    location: str | None = Field(default=None, max_length=255)
    order_index: int | None = None
    is_published: bool | None = None


class Experience(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    role: str
    company: str
    period: str
    description: list[str]
    company_logo: str | None = None
    location: str | None = None
    order_index: int
    is_published: bool
    created_at: datetime
    updated_at: datetime

"""Skill API schemas."""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import PartialUpdate


class CreateSkillRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    level: int = Field(ge=0, le=100)
    category: str = Field(min_length=1, max_length=50)
    # URL or an icon component name such as "FaReact".
    icon: str | None = Field(default=None, max_length=500)
    order_index: int = 0
    is_published: bool = True


class UpdateSkillRequest(PartialUpdate):
    clearable_fields: ClassVar[frozenset[str]] = frozenset({"icon"})

    name: str | None = Field(default=None, min_length=1, max_length=100)
    level: int | None = Field(default=None, ge=0, le=100)
    category: str | None = Field(default=None, min_length=1, max_length=50)
    icon: str | None = Field(default=None, max_length=500)
    order_index: int | None = None
    is_published: bool | None = None


class Skill(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    level: int
    category: str
    icon: str | None = None
    order_index: int
    is_published: bool
    created_at: datetime
    updated_at: datetime

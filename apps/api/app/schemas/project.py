"""Project API schemas."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from app.schemas.common import PartialUpdate


class ProjectStatus(str, Enum):
    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    PLANNED = "planned"


class CreateProjectRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    full_description: str = Field(min_length=1)
    my_role: str = Field(min_length=1)
    image: HttpUrl
    tags: list[str] = Field(min_length=1)
    link: HttpUrl | None = None
    github: HttpUrl | None = None
    demo_video: HttpUrl | None = None
    status: ProjectStatus = ProjectStatus.COMPLETED
    featured: bool = False
    order_index: int = 0
    is_published: bool = True


class UpdateProjectRequest(PartialUpdate):
    clearable_fields: ClassVar[frozenset[str]] = frozenset({"link", "github", "demo_video"})

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    full_description: str | None = Field(default=None, min_length=1)
    my_role: str | None = Field(default=None, min_length=1)
    image: HttpUrl | None = None
    tags: list[str] | None = None
    link: HttpUrl | None = None
    github: HttpUrl | None = None
    demo_video: HttpUrl | None = None
    status: ProjectStatus | None = None
    featured: bool | None = None
    order_index: int | None = None
    is_published: bool | None = None


class Project(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    title: str
    description: str
    full_description: str
    my_role: str
    image: str
    tags: list[str]
    link: str | None = None
    github: str | None = None
    demo_video: str | None = None
    status: ProjectStatus
    featured: bool
    order_index: int
    is_published: bool
    created_at: datetime
    updated_at: datetime

"""Image upload response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UploadedImage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    public_id: str = Field(serialization_alias="publicId")
    filename: str
    mimetype: str | None = None
    size: int
    width: int | None = None
    height: int | None = None
    format: str | None = None

"""Envelopes and base request models shared by every route."""

from typing import Any, ClassVar, Generic, Literal, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class SuccessResponse(BaseModel, Generic[DataT]):
    status: Literal["success"] = "success"
    message: str | None = None
    data: DataT


class ListResponse(BaseModel, Generic[DataT]):
    status: Literal["success"] = "success"
    count: int
    data: list[DataT]


class MessageResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str


class PartialUpdate(BaseModel):
    """Base for update bodies: only submitted fields are changed.

    An explicit ``null`` clears a field listed in ``clearable_fields`` and is
    ignored for every other field.
    """

    clearable_fields: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict[str, Any]:
        submitted = self.model_dump(mode="json", exclude_unset=True)
        return {
            name: value
            for name, value in submitted.items()
            if value is not None or name in self.clearable_fields
        }

"""Validation of multipart form fields against JSON request models."""

from typing import Any, TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_form(model: type[ModelT], fields: dict[str, Any]) -> ModelT:
    """Validate submitted form fields, reporting errors like a JSON body would."""
    submitted = {name: value for name, value in fields.items() if value is not None}
    try:
        return model.model_validate(submitted)
    except ValidationError as exc:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in exc.errors(include_url=False)]
        ) from exc

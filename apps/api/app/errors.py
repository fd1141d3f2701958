"""Application exception types."""

from app.domain.auth_failures import AuthFailure, failure_message, failure_status
from app.schemas.error import ErrorResponse, FieldError


class ApiError(Exception):
    """Structured API error that maps directly to the JSON error body."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        errors: list[FieldError] | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, errors=errors)
        super().__init__(message)


def auth_error(failure: AuthFailure) -> ApiError:
    return ApiError(
        status_code=failure_status(failure),
        code=failure.value,
        message=failure_message(failure),
    )


def not_found(label: str) -> ApiError:
    return ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message=f"{label} not found")


__all__ = ["ApiError", "auth_error", "not_found"]

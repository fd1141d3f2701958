"""Authentication failure kinds and their fixed HTTP mapping."""

from enum import Enum


class AuthFailure(str, Enum):
    NO_TOKEN = "NO_TOKEN"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    EXPIRED_TOKEN = "EXPIRED_TOKEN"
    TOKEN_VERIFICATION_FAILED = "TOKEN_VERIFICATION_FAILED"
    GRACE_EXPIRED = "GRACE_EXPIRED"
    PRINCIPAL_NOT_FOUND = "PRINCIPAL_NOT_FOUND"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


_FAILURE_RESPONSES: dict[AuthFailure, tuple[int, str]] = {
    AuthFailure.NO_TOKEN: (401, "No token provided. Please login to access this resource."),
    AuthFailure.MALFORMED_TOKEN: (401, "Invalid token. Please login again."),
    AuthFailure.EXPIRED_TOKEN: (401, "Token has expired. Please refresh your token or login again."),
    AuthFailure.TOKEN_VERIFICATION_FAILED: (401, "Authentication failed"),
    AuthFailure.GRACE_EXPIRED: (401, "Token expired beyond grace period. Please login again."),
    AuthFailure.PRINCIPAL_NOT_FOUND: (401, "User not found. Please login again."),
    AuthFailure.UNAUTHENTICATED: (401, "Authentication required"),
    AuthFailure.FORBIDDEN: (403, "Admin access required"),
    AuthFailure.USERNAME_TAKEN: (409, "Username already taken"),
    AuthFailure.INVALID_CREDENTIALS: (401, "Invalid username or password"),
}


def failure_status(failure: AuthFailure) -> int:
    return _FAILURE_RESPONSES[failure][0]


def failure_message(failure: AuthFailure) -> str:
    return _FAILURE_RESPONSES[failure][1]

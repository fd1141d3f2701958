"""Authentication routes."""

from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, Security, status
from fastapi.security import HTTPAuthorizationCredentials

from app.domain.auth_failures import AuthFailure
from app.errors import auth_error
from app.routes.dependencies import auth_gate, bearer_scheme, bearer_token, get_auth_service
from app.schemas.auth import AuthSession, LoginRequest, RegisterRequest, TokenClaims
from app.schemas.common import SuccessResponse
from app.schemas.error import ErrorResponse
from app.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"], dependencies=[Depends(auth_gate)])

OutcomeT = TypeVar("OutcomeT")


def _unwrap(outcome: OutcomeT | AuthFailure) -> OutcomeT:
    if isinstance(outcome, AuthFailure):
        raise auth_error(outcome)
    return outcome


def _require_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    token = bearer_token(credentials)
    if token is None:
        raise auth_error(AuthFailure.NO_TOKEN)
    return token


@router.post(
    "/register",
    response_model=SuccessResponse[AuthSession],
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def register(
    payload: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> SuccessResponse[AuthSession]:
    session = _unwrap(await service.register(username=payload.username, password=payload.password))
    return SuccessResponse[AuthSession](message="User registered successfully", data=session)


@router.post(
    "/login",
    response_model=SuccessResponse[AuthSession],
    responses={401: {"model": ErrorResponse}},
)
async def login(
    payload: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> SuccessResponse[AuthSession]:
    session = _unwrap(await service.login(username=payload.username, password=payload.password))
    return SuccessResponse[AuthSession](message="Login successful", data=session)


@router.get(
    "/verify",
    response_model=SuccessResponse[TokenClaims],
    responses={401: {"model": ErrorResponse}},
)
async def verify(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> SuccessResponse[TokenClaims]:
    claims = _unwrap(service.describe(_require_token(credentials)))
    return SuccessResponse[TokenClaims](message="Token is valid", data=claims)


@router.post(
    "/refresh",
    response_model=SuccessResponse[AuthSession],
    responses={401: {"model": ErrorResponse}},
)
async def refresh(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> SuccessResponse[AuthSession]:
    session = _unwrap(await service.refresh(_require_token(credentials)))
    return SuccessResponse[AuthSession](message="Token refreshed successfully", data=session)

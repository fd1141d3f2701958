"""Health and external connectivity routes."""

from datetime import UTC, datetime
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.adapters.mail import MailDeliveryError
from app.adapters.media import MediaStoreError
from app.core.config import Settings
from app.repositories.base import RowStore, RowStoreError
from app.routes.dependencies import get_settings_from_app, get_store, health_gate
from app.schemas.error import ConnectivityErrorResponse
from app.schemas.health import ConnectivityStatus, HealthStatus

router = APIRouter(tags=["Health"], dependencies=[Depends(health_gate)])
logger = logging.getLogger(__name__)


def _connectivity_failure(message: str, exc: Exception) -> JSONResponse:
    payload = ConnectivityErrorResponse(message=message, error=str(exc) or type(exc).__name__)
    return JSONResponse(status_code=500, content=payload.model_dump())


@router.get("/health", response_model=HealthStatus)
async def health(settings: Annotated[Settings, Depends(get_settings_from_app)]) -> HealthStatus:
    return HealthStatus(
        message="Server is running",
        environment=settings.environment,
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/test/supabase",
    response_model=ConnectivityStatus,
    responses={500: {"model": ConnectivityErrorResponse}},
)
async def test_row_store(store: Annotated[RowStore, Depends(get_store)]) -> ConnectivityStatus | JSONResponse:
    try:
        await store.ping()
    except RowStoreError as exc:
        logger.warning("health.row_store_unreachable error=%s", type(exc).__name__)
        return _connectivity_failure("Supabase connection failed", exc)
    return ConnectivityStatus(message="Supabase connected successfully")


@router.get(
    "/test/cloudinary",
    response_model=ConnectivityStatus,
    responses={500: {"model": ConnectivityErrorResponse}},
)
async def test_media_store(request: Request) -> ConnectivityStatus | JSONResponse:
    try:
        details = await request.app.state.media.ping()
    except MediaStoreError as exc:
        logger.warning("health.media_store_unreachable error=%s", type(exc).__name__)
        return _connectivity_failure("Cloudinary connection failed", exc)
    return ConnectivityStatus(message="Cloudinary connected successfully", data=details)


@router.get(
    "/test/email",
    response_model=ConnectivityStatus,
    responses={500: {"model": ConnectivityErrorResponse}},
)
async def test_mailer(request: Request) -> ConnectivityStatus | JSONResponse:
    try:
        await request.app.state.mailer.ping()
    except MailDeliveryError as exc:
        logger.warning("health.mailer_unreachable error=%s", type(exc).__name__)
        return _connectivity_failure("Email connection failed", exc)
    return ConnectivityStatus(message="Email server connected successfully")

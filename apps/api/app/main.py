"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from time import perf_counter

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.adapters.auth import JwtTokenService, PasswordHasher
from app.adapters.auth.jwt_tokens import Clock, utc_now
from app.adapters.mail import InMemoryMailer, Mailer, SmtpMailer
from app.adapters.media import CloudinaryMediaStore, InMemoryMediaStore, MediaStore
from app.core.config import Settings, get_settings
from app.core.logging_safety import safe_log_identifier
from app.errors import ApiError
from app.repositories.base import RowStore
from app.repositories.memory import InMemoryStore
from app.repositories.supabase_store import SupabaseRowStore
from app.routes import (
    auth_router,
    contact_form_router,
    contact_router,
    experiences_router,
    health_router,
    projects_router,
    skills_router,
    uploads_router,
)
from app.routes.dependencies import request_correlation_id
from app.schemas.error import ErrorResponse, FieldError

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
CORRELATION_HEADER = "X-Correlation-Id"
_ONRENDER_ORIGINS = r"https://.*\.onrender\.com"
_LOCATION_SCOPES = {"body", "query", "path", "header", "cookie"}


def _build_store(settings: Settings) -> RowStore:
    if settings.store_backend == "memory":
        return InMemoryStore()
    return SupabaseRowStore.from_credentials(settings.supabase_url, settings.supabase_service_role_key)


def _build_media(settings: Settings) -> MediaStore:
    if settings.media_backend == "memory":
        return InMemoryMediaStore()
    return CloudinaryMediaStore(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
    )


def _build_mailer(settings: Settings) -> Mailer:
    if settings.mail_backend == "memory":
        return InMemoryMailer()
    return SmtpMailer(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_password,
        sender_name=settings.site_name,
    )


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    if settings.environment == "production":
        origins = [settings.frontend_url] if settings.frontend_url else []
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_origin_regex=_ONRENDER_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _field_errors(exc: RequestValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _LOCATION_SCOPES:
            location = location[1:]
        errors.append(FieldError(field=".".join(location) or "body", message=error.get("msg", "Invalid value")))
    return errors


def _error_response(status_code: int, payload: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json", exclude_none=True))


def create_app(
    settings: Settings | None = None,
    *,
    clock: Clock = utc_now,
    store: RowStore | None = None,
    media: MediaStore | None = None,
    mailer: Mailer | None = None,
) -> FastAPI:
    """Build the API. Collaborators default to the backends selected in settings."""
    settings = settings or get_settings()
    auth_config = settings.auth_config()

    app = FastAPI(title="Portfolio API", version="1.0.0")
    app.state.settings = settings
    app.state.auth_config = auth_config
    app.state.clock = clock
    app.state.tokens = JwtTokenService(auth_config, clock=clock)
    app.state.passwords = PasswordHasher()
    app.state.store = store if store is not None else _build_store(settings)
    app.state.media = media if media is not None else _build_media(settings)
    app.state.mailer = mailer if mailer is not None else _build_mailer(settings)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = perf_counter()
        correlation_id = request_correlation_id(request)
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        logger.info(
            "request.completed correlation_id=%s method=%s path=%s status=%s duration_ms=%.1f",
            safe_log_identifier(correlation_id, prefix="cid"),
            request.method,
            request.url.path,
            response.status_code,
            (perf_counter() - started) * 1000,
        )
        return response

    _configure_cors(app, settings)

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return _error_response(exc.status_code, exc.payload)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_, exc: RequestValidationError) -> JSONResponse:
        payload = ErrorResponse(
            code="VALIDATION_ERROR",
            message="Validation failed. Please check your input.",
            errors=_field_errors(exc),
        )
        return _error_response(400, payload)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            payload = ErrorResponse(code="ROUTE_NOT_FOUND", message="Route not found")
        else:
            payload = ErrorResponse(code="HTTP_ERROR", message=str(exc.detail))
        return _error_response(exc.status_code, payload)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "request.failed method=%s path=%s error=%s",
            request.method,
            request.url.path,
            type(exc).__name__,
        )
        return _error_response(500, ErrorResponse(code="INTERNAL_ERROR", message="Something went wrong!"))

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(skills_router, prefix=API_PREFIX)
    app.include_router(experiences_router, prefix=API_PREFIX)
    app.include_router(projects_router, prefix=API_PREFIX)
    app.include_router(contact_form_router, prefix=API_PREFIX)
    app.include_router(contact_router, prefix=API_PREFIX)
    app.include_router(uploads_router, prefix=API_PREFIX)

    logger.info(
        "app.created environment=%s store=%s media=%s mail=%s",
        settings.environment,
        type(app.state.store).__name__,
        type(app.state.media).__name__,
        type(app.state.mailer).__name__,
    )
    return app

"""Dependency wiring for routes, including the per-request authorization gate."""

import logging
from typing import Annotated, NoReturn
from uuid import uuid4

from fastapi import Depends, Request, Response, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.adapters.auth import JwtTokenService
from app.adapters.auth.jwt_tokens import Clock
from app.core.config import AuthConfig, Settings
from app.core.logging_safety import safe_log_identifier
from app.domain.access_policy import AccessLevel, RouteClass, required_access
from app.domain.auth_failures import AuthFailure
from app.domain.token_policy import expiry_advisory
from app.errors import auth_error
from app.repositories.base import RowStore
from app.schemas.auth import AuthContext
from app.services.auth import AuthService
from app.services.contact import ContactService
from app.services.experiences import ExperienceService
from app.services.projects import ProjectService
from app.services.skills import SkillService
from app.services.uploads import UploadService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)

EXPIRES_SOON_HEADER = "X-Token-Expires-Soon"
EXPIRES_IN_HEADER = "X-Token-Expires-In"


def request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id") or f"req-{uuid4()}"
    request.state.correlation_id = correlation_id
    return correlation_id


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_config(request: Request) -> AuthConfig:
    return request.app.state.auth_config


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_token_service(request: Request) -> JwtTokenService:
    return request.app.state.tokens


def get_store(request: Request) -> RowStore:
    return request.app.state.store


def bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        return None
    return credentials.credentials


def _reject(request: Request, failure: AuthFailure) -> NoReturn:
    logger.warning(
        "auth.rejected correlation_id=%s method=%s path=%s reason=%s",
        safe_log_identifier(request_correlation_id(request), prefix="cid"),
        request.method,
        request.url.path,
        failure.value,
    )
    raise auth_error(failure)


class AuthorizationGate:
    """Decides, per request, whether the handler behind a route class may run.

    Public requests pass with ``None``. Protected requests need a valid bearer
    token; the decoded principal is returned as an ``AuthContext`` for the
    handler instead of being stored on the request.
    """

    def __init__(self, route_class: RouteClass) -> None:
        self.route_class = route_class

    async def __call__(
        self,
        request: Request,
        response: Response,
        credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
        tokens: Annotated[JwtTokenService, Depends(get_token_service)],
        config: Annotated[AuthConfig, Depends(get_auth_config)],
        clock: Annotated[Clock, Depends(get_clock)],
    ) -> AuthContext | None:
        access = required_access(self.route_class, request.method)
        if access is AccessLevel.PUBLIC:
            return None

        token = bearer_token(credentials)
        if token is None:
            _reject(request, AuthFailure.NO_TOKEN)

        verified = tokens.verify(token)
        if isinstance(verified, AuthFailure):
            _reject(request, verified)

        advisory = expiry_advisory(verified.expires_at, clock(), config.expiry_warning)
        if advisory.expires_soon:
            response.headers[EXPIRES_SOON_HEADER] = "true"
            response.headers[EXPIRES_IN_HEADER] = str(advisory.seconds_remaining)

        context = AuthContext(
            principal=verified.principal,
            expires_at=verified.expires_at,
            seconds_remaining=advisory.seconds_remaining,
            expires_soon=advisory.expires_soon,
        )
        if access is AccessLevel.ADMIN:
            ensure_admin(request, context)

        logger.info(
            "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s role=%s",
            safe_log_identifier(request_correlation_id(request), prefix="cid"),
            request.method,
            request.url.path,
            safe_log_identifier(context.principal.id, prefix="pid"),
            context.principal.role,
        )
        return context


def ensure_admin(request: Request, context: AuthContext | None) -> AuthContext:
    if context is None:
        _reject(request, AuthFailure.UNAUTHENTICATED)
    if context.principal.role != "admin":
        _reject(request, AuthFailure.FORBIDDEN)
    return context


health_gate = AuthorizationGate(RouteClass.HEALTH)
auth_gate = AuthorizationGate(RouteClass.AUTH)
contact_form_gate = AuthorizationGate(RouteClass.CONTACT_FORM)
resource_gate = AuthorizationGate(RouteClass.RESOURCE)
admin_gate = AuthorizationGate(RouteClass.ADMIN)


async def require_admin(
    request: Request,
    context: Annotated[AuthContext | None, Depends(admin_gate)],
) -> AuthContext:
    """Optional second gate for admin-only routes; verifies the token for every method."""
    return ensure_admin(request, context)


def get_auth_service(
    request: Request,
    store: Annotated[RowStore, Depends(get_store)],
    tokens: Annotated[JwtTokenService, Depends(get_token_service)],
    config: Annotated[AuthConfig, Depends(get_auth_config)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> AuthService:
    return AuthService(
        store=store,
        tokens=tokens,
        passwords=request.app.state.passwords,
        config=config,
        register_role=request.app.state.settings.register_role,
        clock=clock,
    )


def get_skill_service(store: Annotated[RowStore, Depends(get_store)]) -> SkillService:
    return SkillService(store)


def get_experience_service(store: Annotated[RowStore, Depends(get_store)]) -> ExperienceService:
    return ExperienceService(store)


def get_project_service(store: Annotated[RowStore, Depends(get_store)]) -> ProjectService:
    return ProjectService(store)


def get_contact_service(
    request: Request,
    store: Annotated[RowStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_settings_from_app)],
) -> ContactService:
    return ContactService(
        store,
        mailer=request.app.state.mailer,
        notify_to=settings.contact_email_to,
        site_name=settings.site_name,
    )


def get_upload_service(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings_from_app)],
) -> UploadService:
    return UploadService(
        request.app.state.media,
        root_folder=settings.media_folder,
        max_bytes=settings.max_upload_bytes,
        max_files=settings.max_upload_files,
    )


async def require_authenticated(
    request: Request,
    context: Annotated[AuthContext | None, Depends(resource_gate)],
) -> AuthContext:
    """Context for handlers that only run behind the resource gate's write rule."""
    if context is None:
        _reject(request, AuthFailure.UNAUTHENTICATED)
    return context

# schoolhub/main.py

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from schoolhub.api.middleware import (
    CorrelationIdMiddleware,
    HostTenantMiddleware,
    RequestAuditMiddleware,
)
from schoolhub.api.routers import courses, health, schools, storefront, webhooks
from schoolhub.application.container import ServiceContainer, build_container
from schoolhub.config.logging import configure_logging
from schoolhub.config.settings import get_settings
from schoolhub.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainError,
    DomainValidationError,
    ErrorCode,
    InvalidStateError,
    NotFoundError,
    WebhookRejectedError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": exc.code.value, "detail": exc.message})


def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """Build the HTTP app over `container` (a fresh in-memory one when omitted)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    app.state.container = container or build_container(settings=settings)

    # Middleware order: last added runs first (outermost). Request flow: CorrelationId -> HostTenant -> RequestAudit.
    app.add_middleware(RequestAuditMiddleware)
    app.add_middleware(HostTenantMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    @app.exception_handler(DomainValidationError)
    async def domain_validation_error_handler(request, exc: DomainValidationError):
        return _error(422, exc)

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request, exc: NotFoundError):
        return _error(404, exc)

    @app.exception_handler(AccessDeniedError)
    async def access_denied_error_handler(request, exc: AccessDeniedError):
        return _error(403, exc)

    @app.exception_handler(ConflictError)
    async def conflict_error_handler(request, exc: ConflictError):
        return _error(409, exc)

    @app.exception_handler(InvalidStateError)
    async def invalid_state_error_handler(request, exc: InvalidStateError):
        return _error(409, exc)

    @app.exception_handler(WebhookRejectedError)
    async def webhook_rejected_error_handler(request, exc: WebhookRejectedError):
        status_code = 401 if exc.code == ErrorCode.WEBHOOK_SIGNATURE_INVALID else 422
        return _error(status_code, exc)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request, exc: DomainError):
        return _error(400, exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request, exc: Exception):
        logger.exception("unhandled_error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # Routers: /health, /schools, /schools/{id}/courses, /store, /webhooks
    app.include_router(health.router)
    app.include_router(schools.router, prefix="/schools")
    app.include_router(courses.router, prefix="/schools/{school_id}/courses")
    app.include_router(storefront.router, prefix="/store")
    app.include_router(webhooks.router, prefix="/webhooks")
    return app


configure_logging(get_settings().log_level)
app = create_app()

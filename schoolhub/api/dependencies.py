"""FastAPI dependency injection: service container, resolved storefront school, correlation_id."""

from fastapi import Request

from schoolhub.application.container import ServiceContainer
from schoolhub.domain.models import School


def get_container(request: Request) -> ServiceContainer:
    """Return the container attached to the app at startup."""
    return request.app.state.container


def get_store_school(request: Request) -> School:
    """School resolved from the Host header (set by HostTenantMiddleware on /store routes)."""
    return request.state.school


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""

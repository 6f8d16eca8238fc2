"""API middleware: correlation ID, host-based tenant resolution, request audit."""

import json
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from schoolhub.core.context import correlation_id_ctx, school_id_ctx
from schoolhub.domain.exceptions import ErrorCode

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
STOREFRONT_PREFIX = "/store"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        correlation_id_ctx.set(correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class HostTenantMiddleware(BaseHTTPMiddleware):
    """
    Storefront routes are served per school: resolve the Host header to a school,
    return 404 if nothing serves it, and attach it to request.state and the logging context.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.school = None
        if not request.url.path.startswith(STOREFRONT_PREFIX):
            return await call_next(request)

        host = request.headers.get("host", "")
        container = request.app.state.container
        school = await container.directory.resolve_host(host)
        if school is None:
            return JSONResponse(
                status_code=404,
                content={"code": ErrorCode.SCHOOL_NOT_FOUND.value, "detail": f"No school serves host {host!r}"},
            )
        request.state.school = school
        school_id_ctx.set(school.id)
        return await call_next(request)


class RequestAuditMiddleware(BaseHTTPMiddleware):
    """After response: log structured audit event (correlation_id, school_id, path, method, status_code)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        school = getattr(request.state, "school", None)
        audit_event = {
            "event": "request_audit",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "school_id": school.id if school is not None else None,
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(audit_event))
        return response

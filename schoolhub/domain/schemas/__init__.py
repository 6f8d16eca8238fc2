"""Domain schemas. Request/response and validation."""

from schoolhub.domain.schemas.commerce import (
    AccessResponse,
    CheckoutRequest,
    CheckoutResponse,
    OrderCreateRequest,
    OrderResponse,
    WebhookRequest,
    WebhookResponse,
)
from schoolhub.domain.schemas.course import (
    AiInputsRequest,
    CourseCreateRequest,
    CoursePageResponse,
    CourseResponse,
    PublicCourseResponse,
    StructureSchema,
)
from schoolhub.domain.schemas.school import (
    AuditEventResponse,
    DomainRequest,
    DomainResponse,
    DomainVerifyRequest,
    GatewayResponse,
    SchoolCreateRequest,
    SchoolResponse,
    SchoolStatsResponse,
    SchoolStatusRequest,
)

__all__ = [
    "AccessResponse",
    "AiInputsRequest",
    "AuditEventResponse",
    "CheckoutRequest",
    "CheckoutResponse",
    "CourseCreateRequest",
    "CoursePageResponse",
    "CourseResponse",
    "DomainRequest",
    "DomainResponse",
    "DomainVerifyRequest",
    "GatewayResponse",
    "OrderCreateRequest",
    "OrderResponse",
    "PublicCourseResponse",
    "SchoolCreateRequest",
    "SchoolResponse",
    "SchoolStatsResponse",
    "SchoolStatusRequest",
    "StructureSchema",
    "WebhookRequest",
    "WebhookResponse",
]

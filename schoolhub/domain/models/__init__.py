"""Domain models. Pure business entities."""

from schoolhub.domain.models.commerce import (
    DEMO_PROVIDER,
    CheckoutOutcome,
    CheckoutSession,
    Enrollment,
    Order,
    OrderStatus,
    Payment,
    PaymentStatus,
    WebhookEvent,
    WebhookResult,
)
from schoolhub.domain.models.course import (
    AiInputs,
    Course,
    CourseState,
    CourseStructure,
    CourseType,
    FullContent,
    GeneratedLesson,
    GeneratedModule,
    Lesson,
    Pricing,
    Promo,
    PromoType,
    Quiz,
    QuizQuestion,
    StructureModule,
)
from schoolhub.domain.models.school import (
    DomainConfig,
    DomainType,
    GatewayConfig,
    School,
    SchoolStatus,
)

__all__ = [
    "DEMO_PROVIDER",
    "AiInputs",
    "CheckoutOutcome",
    "CheckoutSession",
    "Course",
    "CourseState",
    "CourseStructure",
    "CourseType",
    "DomainConfig",
    "DomainType",
    "Enrollment",
    "FullContent",
    "GatewayConfig",
    "GeneratedLesson",
    "GeneratedModule",
    "Lesson",
    "Order",
    "OrderStatus",
    "Payment",
    "PaymentStatus",
    "Pricing",
    "Promo",
    "PromoType",
    "Quiz",
    "QuizQuestion",
    "School",
    "SchoolStatus",
    "StructureModule",
    "WebhookEvent",
    "WebhookResult",
]

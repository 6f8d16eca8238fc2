"""In-memory persistence: the store and repositories over it."""

from schoolhub.infrastructure.memory.repositories import (
    InMemoryAuditRepository,
    InMemoryCourseRepository,
    InMemoryDomainRepository,
    InMemoryEnrollmentRepository,
    InMemoryGatewayRepository,
    InMemoryOrderRepository,
    InMemoryPaymentRepository,
    InMemorySchoolRepository,
    InMemoryWebhookEventRepository,
)
from schoolhub.infrastructure.memory.store import InMemoryStore

__all__ = [
    "InMemoryAuditRepository",
    "InMemoryCourseRepository",
    "InMemoryDomainRepository",
    "InMemoryEnrollmentRepository",
    "InMemoryGatewayRepository",
    "InMemoryOrderRepository",
    "InMemoryPaymentRepository",
    "InMemorySchoolRepository",
    "InMemoryStore",
    "InMemoryWebhookEventRepository",
]

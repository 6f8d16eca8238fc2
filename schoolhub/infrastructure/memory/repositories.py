"""In-memory repositories over InMemoryStore. Implement the application repository protocols.

Entities are deep-copied on the way in and out, so the store only changes on save.
"""

import copy
from typing import List, Optional, TypeVar

from schoolhub.domain.models import (
    Course,
    DomainConfig,
    DomainType,
    Enrollment,
    GatewayConfig,
    Order,
    Payment,
    School,
    WebhookEvent,
)
from schoolhub.governance.audit_models import AuditEvent
from schoolhub.infrastructure.memory.store import InMemoryStore

T = TypeVar("T")


def _copy(entity: Optional[T]) -> Optional[T]:
    return copy.deepcopy(entity) if entity is not None else None


def _append_unique(ids: List[str], entity_id: str) -> None:
    if entity_id not in ids:
        ids.append(entity_id)


class InMemorySchoolRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def save(self, school: School) -> None:
        self._store.schools[school.id] = _copy(school)

    async def get(self, school_id: str) -> Optional[School]:
        return _copy(self._store.schools.get(school_id))

    async def get_by_slug(self, slug: str) -> Optional[School]:
        for school in self._store.schools.values():
            if school.slug == slug:
                return _copy(school)
        return None

    async def list_all(self) -> List[School]:
        return [_copy(s) for s in self._store.schools.values()]


class InMemoryGatewayRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def save(self, config: GatewayConfig) -> None:
        self._store.gateways[config.school_id] = _copy(config)

    async def get(self, school_id: str) -> Optional[GatewayConfig]:
        return _copy(self._store.gateways.get(school_id))


class InMemoryDomainRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def save(self, config: DomainConfig) -> None:
        self._store.domains[config.id] = _copy(config)
        if config.type == DomainType.CUSTOM:
            self._store.custom_domain_index[config.domain] = config.id

    async def get_custom(self, domain: str) -> Optional[DomainConfig]:
        domain_id = self._store.custom_domain_index.get(domain)
        if domain_id is None:
            return None
        return _copy(self._store.domains.get(domain_id))

    async def find(
        self, school_id: str, type_: DomainType, domain: Optional[str] = None
    ) -> Optional[DomainConfig]:
        for cfg in self._store.domains.values():
            if cfg.school_id != school_id or cfg.type != type_:
                continue
            if domain is None or cfg.domain == domain:
                return _copy(cfg)
        return None

    async def bind_subdomain(self, host: str, school_id: str) -> None:
        self._store.subdomain_index[host] = school_id

    async def subdomain_owner(self, host: str) -> Optional[str]:
        return self._store.subdomain_index.get(host)

    async def list_by_school(self, school_id: str) -> List[DomainConfig]:
        return [_copy(d) for d in self._store.domains.values() if d.school_id == school_id]


class InMemoryCourseRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def save(self, course: Course) -> None:
        self._store.courses[course.id] = _copy(course)
        _append_unique(self._store.courses_by_school.setdefault(course.school_id, []), course.id)

    async def get(self, course_id: str) -> Optional[Course]:
        return _copy(self._store.courses.get(course_id))

    async def list_by_school(self, school_id: str) -> List[Course]:
        ids = self._store.courses_by_school.get(school_id, [])
        return [_copy(self._store.courses[i]) for i in ids]


class InMemoryOrderRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def save(self, order: Order) -> None:
        self._store.orders[order.id] = _copy(order)
        _append_unique(self._store.orders_by_school.setdefault(order.school_id, []), order.id)
        buyer_key = (order.school_id, order.buyer_email)
        _append_unique(self._store.orders_by_buyer.setdefault(buyer_key, []), order.id)

    async def get(self, order_id: str) -> Optional[Order]:
        return _copy(self._store.orders.get(order_id))

    async def count_by_school(self, school_id: str) -> int:
        return len(self._store.orders_by_school.get(school_id, []))

    async def list_by_buyer(self, school_id: str, buyer_email: str) -> List[Order]:
        ids = self._store.orders_by_buyer.get((school_id, buyer_email), [])
        return [_copy(self._store.orders[i]) for i in ids]


class InMemoryPaymentRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def save(self, payment: Payment) -> None:
        self._store.payments[payment.id] = _copy(payment)

    async def get(self, payment_id: str) -> Optional[Payment]:
        return _copy(self._store.payments.get(payment_id))


class InMemoryWebhookEventRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, event_id: str) -> Optional[WebhookEvent]:
        return _copy(self._store.webhook_events.get(event_id))

    async def add(self, event: WebhookEvent) -> bool:
        if event.event_id in self._store.webhook_events:
            return False
        self._store.webhook_events[event.event_id] = _copy(event)
        return True


class InMemoryEnrollmentRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_by_key(self, school_id: str, buyer_email: str, course_id: str) -> Optional[Enrollment]:
        enrollment_id = self._store.enrollment_index.get((school_id, buyer_email, course_id))
        if enrollment_id is None:
            return None
        return _copy(self._store.enrollments.get(enrollment_id))

    async def add(self, enrollment: Enrollment) -> Enrollment:
        key = (enrollment.school_id, enrollment.buyer_email, enrollment.course_id)
        existing_id = self._store.enrollment_index.get(key)
        if existing_id is not None:
            return _copy(self._store.enrollments[existing_id])
        self._store.enrollments[enrollment.id] = _copy(enrollment)
        self._store.enrollment_index[key] = enrollment.id
        return _copy(enrollment)


class InMemoryAuditRepository:
    """Append-only; there is no update or delete."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def save(self, event: AuditEvent) -> None:
        self._store.audit.append(event)

    async def list_by_school(self, school_id: str) -> List[AuditEvent]:
        return [e for e in self._store.audit if e.school_id == school_id]

"""Repository protocols. Application layer depends on these; infrastructure implements them.

Implementations hand out copies: mutating a returned entity has no effect until it is saved.
"""

from typing import List, Optional, Protocol

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


class SchoolRepository(Protocol):
    async def save(self, school: School) -> None:
        ...

    async def get(self, school_id: str) -> Optional[School]:
        ...

    async def get_by_slug(self, slug: str) -> Optional[School]:
        ...

    async def list_all(self) -> List[School]:
        """All schools in creation order."""
        ...


class GatewayRepository(Protocol):
    async def save(self, config: GatewayConfig) -> None:
        ...

    async def get(self, school_id: str) -> Optional[GatewayConfig]:
        ...


class DomainRepository(Protocol):
    """Domain configs plus the two host indexes (custom domain -> config, subdomain -> school)."""

    async def save(self, config: DomainConfig) -> None:
        """Upsert a config. Custom domains are (re)indexed by hostname."""
        ...

    async def get_custom(self, domain: str) -> Optional[DomainConfig]:
        """Config currently indexed for a custom hostname, verified or not."""
        ...

    async def find(
        self, school_id: str, type_: DomainType, domain: Optional[str] = None
    ) -> Optional[DomainConfig]:
        ...

    async def bind_subdomain(self, host: str, school_id: str) -> None:
        ...

    async def subdomain_owner(self, host: str) -> Optional[str]:
        ...

    async def list_by_school(self, school_id: str) -> List[DomainConfig]:
        ...


class CourseRepository(Protocol):
    async def save(self, course: Course) -> None:
        ...

    async def get(self, course_id: str) -> Optional[Course]:
        ...

    async def list_by_school(self, school_id: str) -> List[Course]:
        """Courses of a school in creation order."""
        ...


class OrderRepository(Protocol):
    async def save(self, order: Order) -> None:
        ...

    async def get(self, order_id: str) -> Optional[Order]:
        ...

    async def count_by_school(self, school_id: str) -> int:
        ...

    async def list_by_buyer(self, school_id: str, buyer_email: str) -> List[Order]:
        """Orders of a buyer within a school in creation order."""
        ...


class PaymentRepository(Protocol):
    async def save(self, payment: Payment) -> None:
        ...

    async def get(self, payment_id: str) -> Optional[Payment]:
        ...


class WebhookEventRepository(Protocol):
    async def get(self, event_id: str) -> Optional[WebhookEvent]:
        ...

    async def add(self, event: WebhookEvent) -> bool:
        """Insert if absent. Returns False (and stores nothing) when the id is already recorded."""
        ...


class EnrollmentRepository(Protocol):
    async def get_by_key(self, school_id: str, buyer_email: str, course_id: str) -> Optional[Enrollment]:
        ...

    async def add(self, enrollment: Enrollment) -> Enrollment:
        """Insert if the (school, buyer, course) key is free; return the stored record either way."""
        ...

"""School registry and per-school gateway configuration."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Union

from schoolhub.application.guards import require_active_school, require_school
from schoolhub.application.repositories import (
    CourseRepository,
    GatewayRepository,
    OrderRepository,
    SchoolRepository,
)
from schoolhub.application.tenant_directory import TenantDirectory
from schoolhub.core.identifiers import generate_id, random_token
from schoolhub.domain.exceptions import ConflictError, DomainValidationError, ErrorCode, NotFoundError
from schoolhub.domain.models import DEMO_PROVIDER, GatewayConfig, School, SchoolStatus
from schoolhub.domain.validators import validate_school_fields
from schoolhub.governance.audit_logger import AuditLogger
from schoolhub.governance.audit_models import AuditEvent

WEBHOOK_SECRET_BYTES = 16
GATEWAY_MODE_DEMO = "demo"


@dataclass(frozen=True)
class SchoolStats:
    school_id: str
    courses_count: int
    orders_count: int


class SchoolService:
    """Create and administer tenants. Every new school gets a subdomain and a DEMO gateway."""

    def __init__(
        self,
        schools: SchoolRepository,
        gateways: GatewayRepository,
        courses: CourseRepository,
        orders: OrderRepository,
        directory: TenantDirectory,
        audit: AuditLogger,
        clock: Callable[[], datetime],
        logger: logging.Logger,
    ) -> None:
        self._schools = schools
        self._gateways = gateways
        self._courses = courses
        self._orders = orders
        self._directory = directory
        self._audit = audit
        self._clock = clock
        self._logger = logger

    async def create_school(self, name: str, slug: str) -> School:
        n, s = validate_school_fields(name, slug)
        if await self._schools.get_by_slug(s) is not None:
            raise ConflictError(ErrorCode.SCHOOL_SLUG_ALREADY_EXISTS, f"Slug already taken: {s}")

        now = self._clock()
        school = School(
            id=generate_id("sch"),
            name=n,
            slug=s,
            status=SchoolStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )
        # Subdomain first: a collision must leave no school behind.
        await self._directory.register_subdomain(school)
        await self._schools.save(school)
        await self._gateways.save(
            GatewayConfig(
                school_id=school.id,
                provider=DEMO_PROVIDER,
                mode=GATEWAY_MODE_DEMO,
                webhook_secret=random_token(WEBHOOK_SECRET_BYTES),
                updated_at=now,
            )
        )
        await self._audit.log(school.id, "SCHOOL_CREATED", {"name": n, "slug": s})
        self._logger.info("school_created", extra={"school_id": school.id, "slug": s})
        return school

    async def list_schools(self) -> List[School]:
        schools = await self._schools.list_all()
        return sorted(schools, key=lambda s: s.created_at)

    async def get_school(self, school_id: str) -> School:
        return await require_school(self._schools, school_id)

    async def assert_school_active(self, school_id: str) -> School:
        return await require_active_school(self._schools, school_id)

    async def list_audit(self, school_id: str) -> List[AuditEvent]:
        """Audit trail of a school, oldest first."""
        await require_school(self._schools, school_id)
        return await self._audit.list_by_school(school_id)

    async def set_school_status(self, school_id: str, status: Union[SchoolStatus, str]) -> School:
        """Suspend or reactivate a school."""
        school = await require_school(self._schools, school_id)
        raw = status.value if isinstance(status, Enum) else str(status or "").strip().upper()
        if raw not in SchoolStatus.__members__:
            raise DomainValidationError(ErrorCode.SCHOOL_STATUS_INVALID, f"Invalid status: {status!r}")

        school.status = SchoolStatus(raw)
        school.updated_at = self._clock()
        await self._schools.save(school)
        await self._audit.log(school_id, "SCHOOL_STATUS_CHANGED", {"status": raw})
        return school

    async def school_stats(self, school_id: str) -> SchoolStats:
        await require_school(self._schools, school_id)
        courses = await self._courses.list_by_school(school_id)
        return SchoolStats(
            school_id=school_id,
            courses_count=len(courses),
            orders_count=await self._orders.count_by_school(school_id),
        )

    async def get_gateway_config(self, school_id: str) -> GatewayConfig:
        await require_school(self._schools, school_id)
        config = await self._gateways.get(school_id)
        if config is None:
            raise NotFoundError(ErrorCode.GATEWAY_NOT_CONFIGURED, f"No gateway for school: {school_id}")
        return config

    async def rotate_webhook_secret(self, school_id: str) -> GatewayConfig:
        """Replace the signing secret. Payloads signed with the old one stop verifying."""
        await require_active_school(self._schools, school_id)
        config = await self._gateways.get(school_id)
        if config is None:
            raise NotFoundError(ErrorCode.GATEWAY_NOT_CONFIGURED, f"No gateway for school: {school_id}")
        config.webhook_secret = random_token(WEBHOOK_SECRET_BYTES)
        config.updated_at = self._clock()
        await self._gateways.save(config)
        await self._audit.log(school_id, "GATEWAY_WEBHOOK_SECRET_ROTATED", {})
        return config

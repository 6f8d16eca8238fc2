"""Enrollment/Access index: idempotent grant per (school, buyer, course)."""

import logging
from datetime import datetime
from typing import Callable

from schoolhub.application.repositories import EnrollmentRepository
from schoolhub.core.identifiers import generate_id
from schoolhub.domain.models import Enrollment
from schoolhub.domain.validators import normalize_email
from schoolhub.governance.audit_logger import AuditLogger


class EnrollmentService:
    def __init__(
        self,
        enrollments: EnrollmentRepository,
        audit: AuditLogger,
        clock: Callable[[], datetime],
        logger: logging.Logger,
    ) -> None:
        self._enrollments = enrollments
        self._audit = audit
        self._clock = clock
        self._logger = logger

    async def ensure_enrollment(
        self,
        school_id: str,
        buyer_email: str,
        course_id: str,
        order_id: str,
    ) -> Enrollment:
        """Grant access once. A second call for the same key returns the existing record unchanged."""
        email = normalize_email(buyer_email)
        existing = await self._enrollments.get_by_key(school_id, email, course_id)
        if existing is not None:
            return existing

        stored = await self._enrollments.add(
            Enrollment(
                id=generate_id("enr"),
                school_id=school_id,
                buyer_email=email,
                course_id=course_id,
                order_id=order_id,
                created_at=self._clock(),
            )
        )
        await self._audit.log(
            school_id,
            "ENROLLMENT_CREATED",
            {"enrollment_id": stored.id, "course_id": course_id, "buyer_email": email},
        )
        self._logger.info(
            "enrollment_created",
            extra={"school_id": school_id, "course_id": course_id, "enrollment_id": stored.id},
        )
        return stored

    async def can_access(self, school_id: str, buyer_email: str, course_id: str) -> bool:
        return await self._enrollments.get_by_key(school_id, normalize_email(buyer_email), course_id) is not None

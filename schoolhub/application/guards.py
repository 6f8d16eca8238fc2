"""Shared preconditions for application services. Raise before any mutation."""

from schoolhub.application.repositories import SchoolRepository
from schoolhub.domain.exceptions import AccessDeniedError, ErrorCode, NotFoundError
from schoolhub.domain.models import School


async def require_school(schools: SchoolRepository, school_id: str) -> School:
    """Return the school or raise NotFoundError(SCHOOL_NOT_FOUND)."""
    school = await schools.get(school_id)
    if school is None:
        raise NotFoundError(ErrorCode.SCHOOL_NOT_FOUND, f"School not found: {school_id}")
    return school


async def require_active_school(schools: SchoolRepository, school_id: str) -> School:
    """Return the school if it exists and is ACTIVE. Suspended schools cannot mutate anything."""
    school = await require_school(schools, school_id)
    if not school.is_active:
        raise AccessDeniedError(ErrorCode.SCHOOL_SUSPENDED, f"School is suspended: {school_id}")
    return school

"""School registry: creation, uniqueness, status changes, stats, gateway secret rotation."""

import pytest

from schoolhub.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainValidationError,
    ErrorCode,
    NotFoundError,
)
from schoolhub.domain.models import DEMO_PROVIDER, SchoolStatus


async def test_create_school_sets_up_gateway_and_audit(container, school):
    assert school.id.startswith("sch_")
    assert school.slug == "alpha"
    assert school.status == SchoolStatus.ACTIVE

    gateway = await container.schools.get_gateway_config(school.id)
    assert gateway.provider == DEMO_PROVIDER
    assert gateway.mode == "demo"
    assert len(gateway.webhook_secret) == 32

    actions = [e.action for e in await container.schools.list_audit(school.id)]
    assert "SCHOOL_CREATED" in actions


async def test_slug_is_unique_case_insensitively(container, school):
    with pytest.raises(ConflictError) as exc_info:
        await container.schools.create_school("Another", "ALPHA")
    assert exc_info.value.code == ErrorCode.SCHOOL_SLUG_ALREADY_EXISTS


async def test_invalid_fields_create_nothing(container, store):
    with pytest.raises(DomainValidationError):
        await container.schools.create_school("", "x")
    with pytest.raises(DomainValidationError):
        await container.schools.create_school("X", "bad slug")
    assert store.schools == {}
    assert store.subdomain_index == {}


async def test_list_schools_in_creation_order(container, clock):
    first = await container.schools.create_school("First", "first")
    clock.advance(seconds=1)
    second = await container.schools.create_school("Second", "second")
    assert [s.id for s in await container.schools.list_schools()] == [first.id, second.id]


async def test_get_unknown_school(container):
    with pytest.raises(NotFoundError) as exc_info:
        await container.schools.get_school("sch_missing")
    assert exc_info.value.code == ErrorCode.SCHOOL_NOT_FOUND


async def test_suspend_and_reactivate(container, school):
    suspended = await container.schools.set_school_status(school.id, "suspended")
    assert suspended.status == SchoolStatus.SUSPENDED
    with pytest.raises(AccessDeniedError) as exc_info:
        await container.schools.assert_school_active(school.id)
    assert exc_info.value.code == ErrorCode.SCHOOL_SUSPENDED

    # Suspended schools stay reachable by host.
    assert (await container.directory.resolve_host("alpha.platform.local")).id == school.id

    active = await container.schools.set_school_status(school.id, SchoolStatus.ACTIVE)
    assert active.status == SchoolStatus.ACTIVE
    await container.schools.assert_school_active(school.id)


async def test_invalid_status_rejected(container, school):
    with pytest.raises(DomainValidationError) as exc_info:
        await container.schools.set_school_status(school.id, "CLOSED")
    assert exc_info.value.code == ErrorCode.SCHOOL_STATUS_INVALID


async def test_stats_count_courses_and_orders(container, school, make_published_course):
    course = await make_published_course(school.id)
    await container.courses.create_course_ai(school.id, "Draft only", price="10")
    await container.orders.create_order(school.id, course.id, "a@example.com")
    stats = await container.schools.school_stats(school.id)
    assert stats.courses_count == 2
    assert stats.orders_count == 1


async def test_rotate_webhook_secret(container, school):
    before = await container.schools.get_gateway_config(school.id)
    rotated = await container.schools.rotate_webhook_secret(school.id)
    assert rotated.webhook_secret != before.webhook_secret
    assert (await container.schools.get_gateway_config(school.id)).webhook_secret == rotated.webhook_secret


async def test_rotate_requires_active_school(container, school):
    await container.schools.set_school_status(school.id, "SUSPENDED")
    with pytest.raises(AccessDeniedError):
        await container.schools.rotate_webhook_secret(school.id)

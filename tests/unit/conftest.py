"""Shared fixtures: controllable clock, fresh in-memory container, school and course factories."""

from datetime import datetime, timedelta, timezone

import pytest

from schoolhub.application.container import build_container
from schoolhub.config.settings import AppSettings
from schoolhub.domain.models import CourseStructure, Lesson, StructureModule
from schoolhub.infrastructure.memory import InMemoryStore

START = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def _import_structure(modules: int = 1, lessons: int = 2) -> CourseStructure:
    return CourseStructure(
        modules=[
            StructureModule(
                title=f"Module {m}",
                lessons=[
                    Lesson(title=f"Lesson {m}.{n}", external_url=f"https://videos.example.com/{m}/{n}")
                    for n in range(1, lessons + 1)
                ],
            )
            for m in range(1, modules + 1)
        ]
    )


@pytest.fixture
def import_structure():
    """Factory for a valid IMPORT structure (every lesson has an external URL)."""
    return _import_structure


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return AppSettings(
        base_domain="platform.local",
        demo_checkout_base_url="https://checkout.demo.local",
        default_currency="BRL",
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def container(store, settings, clock):
    return build_container(store=store, settings=settings, clock=clock)


@pytest.fixture
async def school(container):
    return await container.schools.create_school("Alpha Academy", "alpha")


@pytest.fixture
async def other_school(container):
    return await container.schools.create_school("Beta School", "beta")


@pytest.fixture
def make_published_course(container):
    """Factory: create an IMPORT course, give it a structure and publish it."""

    async def _make(school_id, title="Python for Data", price="199.90", promo=None, **kwargs):
        course = await container.courses.create_course_import(
            school_id, title, price=price, promo=promo, **kwargs
        )
        await container.courses.set_import_structure(school_id, course.id, _import_structure())
        return await container.courses.publish(school_id, course.id)

    return _make


@pytest.fixture
def make_checkout(container, make_published_course):
    """Factory: published course + order + checkout session for a buyer."""

    async def _make(school_id, outcome="APPROVED", buyer_email="buyer@example.com", course=None):
        course = course or await make_published_course(school_id)
        order = await container.orders.create_order(school_id, course.id, buyer_email)
        session = await container.orders.start_checkout(school_id, order.id, outcome)
        return course, order, session

    return _make

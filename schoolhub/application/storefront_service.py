"""Public catalog of a school, reached through the host it is served on."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional

from schoolhub.application.repositories import CourseRepository
from schoolhub.application.tenant_directory import TenantDirectory
from schoolhub.domain.models import Course, CourseType, Promo
from schoolhub.domain.pricing import effective_price


@dataclass(frozen=True)
class PublicCourse:
    id: str
    title: str
    description: str
    type: CourseType
    currency: str
    price: Decimal
    effective_price: Decimal
    promo: Optional[Promo]
    tags: List[str]
    category: Optional[str]
    published_at: Optional[datetime]


@dataclass(frozen=True)
class PreviewModule:
    title: str
    lessons: List[str]


@dataclass(frozen=True)
class CoursePage:
    """Sales page: public data plus a title-only outline. Full content is never exposed."""

    course: PublicCourse
    preview: List[PreviewModule]
    cta_action: str
    cta_course_id: str


class StorefrontService:
    """Read-only views over PUBLISHED courses. Unknown hosts yield None rather than an error."""

    def __init__(
        self,
        directory: TenantDirectory,
        courses: CourseRepository,
        clock: Callable[[], datetime],
    ) -> None:
        self._directory = directory
        self._courses = courses
        self._clock = clock

    def _public(self, course: Course) -> PublicCourse:
        return PublicCourse(
            id=course.id,
            title=course.title,
            description=course.description,
            type=course.type,
            currency=course.pricing.currency,
            price=course.pricing.price,
            effective_price=effective_price(course.pricing, self._clock()),
            promo=course.pricing.promo,
            tags=list(course.tags),
            category=course.category,
            published_at=course.published_at,
        )

    async def public_list_courses(
        self,
        host: str,
        q: Optional[str] = None,
        tag: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Optional[List[PublicCourse]]:
        """Published courses of the host's school, optionally filtered. Case-insensitive."""
        school = await self._directory.resolve_host(host)
        if school is None:
            return None

        query = (q or "").strip().lower()
        wanted_tag = (tag or "").strip().lower()
        wanted_category = (category or "").strip().lower()

        out = []
        for course in await self._courses.list_by_school(school.id):
            if not course.is_published:
                continue
            if query and query not in f"{course.title} {course.description}".lower():
                continue
            if wanted_tag and wanted_tag not in [t.lower() for t in course.tags]:
                continue
            if wanted_category and (course.category or "").lower() != wanted_category:
                continue
            out.append(self._public(course))
        return out

    async def public_course_page(self, host: str, course_id: str) -> Optional[CoursePage]:
        school = await self._directory.resolve_host(host)
        if school is None:
            return None
        course = await self._courses.get(course_id)
        if course is None or course.school_id != school.id or not course.is_published:
            return None

        modules = course.structure.modules if course.structure else []
        return CoursePage(
            course=self._public(course),
            preview=[
                PreviewModule(title=m.title, lessons=[lesson.title for lesson in m.lessons])
                for m in modules
            ],
            cta_action="BUY",
            cta_course_id=course.id,
        )

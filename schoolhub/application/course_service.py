"""Course authoring and publication. Guards every lifecycle step with a named error."""

import copy
import logging
from datetime import datetime
from typing import Any, Callable, Iterable, List, Mapping, Optional

from schoolhub.application.guards import require_active_school, require_school
from schoolhub.application.repositories import CourseRepository, SchoolRepository
from schoolhub.core.identifiers import generate_id
from schoolhub.domain.exceptions import ErrorCode, InvalidStateError, NotFoundError
from schoolhub.domain.models import Course, CourseState, CourseStructure, CourseType
from schoolhub.domain.pricing import normalize_pricing
from schoolhub.domain.validators import validate_ai_inputs, validate_structure, validate_title
from schoolhub.governance.audit_logger import AuditLogger
from schoolhub.security.tenant_context import TenantContext
from schoolhub.workflows.interface import CourseGenerator


class CourseService:
    """
    Per-type state machine:
      AI:     DRAFT -> DRAFTING_STRUCTURE -> STRUCTURE_APPROVED -> (GENERATING_FULL) -> DRAFT_READY -> PUBLISHED
      IMPORT: DRAFT -> DRAFT_READY -> PUBLISHED
    Each operation loads a copy, mutates it and saves only after every guard passed.
    """

    def __init__(
        self,
        schools: SchoolRepository,
        courses: CourseRepository,
        generator: CourseGenerator,
        audit: AuditLogger,
        default_currency: str,
        clock: Callable[[], datetime],
        logger: logging.Logger,
    ) -> None:
        self._schools = schools
        self._courses = courses
        self._generator = generator
        self._audit = audit
        self._default_currency = default_currency
        self._clock = clock
        self._logger = logger

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create_course_ai(
        self,
        school_id: str,
        title: str,
        description: str = "",
        price: Any = None,
        currency: Optional[str] = None,
        promo: Optional[Mapping[str, Any]] = None,
        tags: Optional[Iterable[str]] = None,
        category: Optional[str] = None,
    ) -> Course:
        return await self._create(CourseType.AI, school_id, title, description, price, currency, promo, tags, category)

    async def create_course_import(
        self,
        school_id: str,
        title: str,
        description: str = "",
        price: Any = None,
        currency: Optional[str] = None,
        promo: Optional[Mapping[str, Any]] = None,
        tags: Optional[Iterable[str]] = None,
        category: Optional[str] = None,
    ) -> Course:
        return await self._create(
            CourseType.IMPORT, school_id, title, description, price, currency, promo, tags, category
        )

    async def _create(
        self,
        course_type: CourseType,
        school_id: str,
        title: str,
        description: Optional[str],
        price: Any,
        currency: Optional[str],
        promo: Optional[Mapping[str, Any]],
        tags: Optional[Iterable[str]],
        category: Optional[str],
    ) -> Course:
        await require_active_school(self._schools, school_id)
        t = validate_title(title)
        pricing = normalize_pricing(price, currency or self._default_currency, promo)

        now = self._clock()
        course = Course(
            id=generate_id("crs"),
            school_id=school_id,
            type=course_type,
            title=t,
            description=str(description or "").strip(),
            pricing=pricing,
            state=CourseState.DRAFT,
            created_at=now,
            updated_at=now,
            tags=[str(tag).strip() for tag in (tags or []) if str(tag).strip()],
            category=str(category).strip() if category and str(category).strip() else None,
        )
        await self._courses.save(course)
        await self._audit.log(school_id, "COURSE_CREATED", {"course_id": course.id, "type": course_type.value})
        self._logger.info(
            "course_created",
            extra={"school_id": school_id, "course_id": course.id, "course_type": course_type.value},
        )
        return course

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_course(self, school_id: str, course_id: str) -> Course:
        await require_school(self._schools, school_id)
        return await self._load_owned(school_id, course_id)

    async def list_courses(self, school_id: str) -> List[Course]:
        """Courses of a school in creation order."""
        await require_school(self._schools, school_id)
        return await self._courses.list_by_school(school_id)

    # ------------------------------------------------------------------
    # AI pipeline
    # ------------------------------------------------------------------

    async def generate_structure(self, school_id: str, course_id: str, inputs: Mapping[str, Any]) -> Course:
        """DRAFT -> DRAFTING_STRUCTURE with a deterministic outline from the inputs."""
        course = await self._load_for_update(school_id, course_id)
        self._require_type(course, CourseType.AI)
        self._require_state(course, CourseState.DRAFT, ErrorCode.COURSE_INVALID_STATE)
        ai_inputs = validate_ai_inputs(inputs)

        course.ai_inputs = ai_inputs
        course.structure = self._generator.generate_structure(ai_inputs)
        course.transition_to(CourseState.DRAFTING_STRUCTURE, self._clock())
        return await self._commit(course, "COURSE_STRUCTURE_GENERATED")

    async def edit_structure(self, school_id: str, course_id: str, structure: CourseStructure) -> Course:
        """Replace the outline while it is still being drafted. State is unchanged."""
        course = await self._load_for_update(school_id, course_id)
        self._require_state(course, CourseState.DRAFTING_STRUCTURE, ErrorCode.COURSE_STRUCTURE_NOT_EDITABLE)
        validate_structure(structure)

        course.structure = copy.deepcopy(structure)
        course.updated_at = self._clock()
        return await self._commit(course, "COURSE_STRUCTURE_EDITED")

    async def approve_structure(self, school_id: str, course_id: str) -> Course:
        """Lock the outline. No structure edits are possible afterwards."""
        course = await self._load_for_update(school_id, course_id)
        self._require_state(course, CourseState.DRAFTING_STRUCTURE, ErrorCode.COURSE_INVALID_STATE)
        if course.structure is None or not course.structure.modules:
            raise InvalidStateError(ErrorCode.COURSE_STRUCTURE_MISSING, "Course has no structure to approve")

        course.transition_to(CourseState.STRUCTURE_APPROVED, self._clock())
        return await self._commit(course, "COURSE_STRUCTURE_APPROVED")

    async def generate_full(self, school_id: str, course_id: str) -> Course:
        """Expand the approved outline into lessons, scripts, slides and quizzes."""
        course = await self._load_for_update(school_id, course_id)
        self._require_type(course, CourseType.AI)
        self._require_state(course, CourseState.STRUCTURE_APPROVED, ErrorCode.COURSE_INVALID_STATE)

        now = self._clock()
        course.transition_to(CourseState.GENERATING_FULL, now)
        course.full_content = self._generator.generate_full(course.title, course.structure, now)
        course.transition_to(CourseState.DRAFT_READY, now)
        return await self._commit(course, "COURSE_FULL_GENERATED")

    # ------------------------------------------------------------------
    # Import pipeline
    # ------------------------------------------------------------------

    async def set_import_structure(self, school_id: str, course_id: str, structure: CourseStructure) -> Course:
        """DRAFT -> DRAFT_READY. Every lesson must point at external content."""
        course = await self._load_for_update(school_id, course_id)
        self._require_type(course, CourseType.IMPORT)
        self._require_state(course, CourseState.DRAFT, ErrorCode.COURSE_INVALID_STATE)
        validate_structure(structure, require_external_url=True)

        course.structure = copy.deepcopy(structure)
        course.transition_to(CourseState.DRAFT_READY, self._clock())
        return await self._commit(course, "COURSE_IMPORT_STRUCTURE_SET")

    # ------------------------------------------------------------------
    # Publication
    # ------------------------------------------------------------------

    async def publish(self, school_id: str, course_id: str) -> Course:
        """DRAFT_READY -> PUBLISHED (terminal). Sets published_at once."""
        course = await self._load_for_update(school_id, course_id)
        self._require_state(course, CourseState.DRAFT_READY, ErrorCode.COURSE_NOT_READY_TO_PUBLISH)

        course.transition_to(CourseState.PUBLISHED, self._clock())
        return await self._commit(course, "COURSE_PUBLISHED")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load_owned(self, school_id: str, course_id: str) -> Course:
        course = await self._courses.get(course_id)
        if course is None:
            raise NotFoundError(ErrorCode.COURSE_NOT_FOUND, f"Course not found: {course_id}")
        TenantContext.validate_access(course.school_id, school_id, ErrorCode.COURSE_ACCESS_DENIED)
        return course

    async def _load_for_update(self, school_id: str, course_id: str) -> Course:
        await require_active_school(self._schools, school_id)
        return await self._load_owned(school_id, course_id)

    @staticmethod
    def _require_type(course: Course, course_type: CourseType) -> None:
        if course.type != course_type:
            code = ErrorCode.COURSE_NOT_AI if course_type == CourseType.AI else ErrorCode.COURSE_NOT_IMPORT
            raise InvalidStateError(code, f"Course {course.id} is {course.type.value}, expected {course_type.value}")

    @staticmethod
    def _require_state(course: Course, state: CourseState, code: ErrorCode) -> None:
        if course.state != state:
            raise InvalidStateError(
                code, f"Course {course.id} is {course.state.value}, expected {state.value}"
            )

    async def _commit(self, course: Course, action: str) -> Course:
        await self._courses.save(course)
        await self._audit.log(course.school_id, action, {"course_id": course.id})
        self._logger.info(
            action.lower(),
            extra={"school_id": course.school_id, "course_id": course.id, "state": course.state.value},
        )
        return course

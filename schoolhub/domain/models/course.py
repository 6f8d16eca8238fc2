"""Domain model for courses and their publication lifecycle. No infrastructure."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from schoolhub.domain.exceptions import ErrorCode, InvalidStateError


class CourseType(str, Enum):
    AI = "AI"
    IMPORT = "IMPORT"


class CourseState(str, Enum):
    """Publication lifecycle. States only ever move forward."""

    DRAFT = "DRAFT"
    DRAFTING_STRUCTURE = "DRAFTING_STRUCTURE"
    STRUCTURE_APPROVED = "STRUCTURE_APPROVED"
    GENERATING_FULL = "GENERATING_FULL"
    DRAFT_READY = "DRAFT_READY"
    PUBLISHED = "PUBLISHED"


# Allowed transitions per course type: from_state -> set of valid next states
_TRANSITIONS: Dict[CourseType, Dict[CourseState, FrozenSet[CourseState]]] = {
    CourseType.AI: {
        CourseState.DRAFT: frozenset({CourseState.DRAFTING_STRUCTURE}),
        CourseState.DRAFTING_STRUCTURE: frozenset({CourseState.STRUCTURE_APPROVED}),
        CourseState.STRUCTURE_APPROVED: frozenset({CourseState.GENERATING_FULL}),
        CourseState.GENERATING_FULL: frozenset({CourseState.DRAFT_READY}),
        CourseState.DRAFT_READY: frozenset({CourseState.PUBLISHED}),
        CourseState.PUBLISHED: frozenset(),
    },
    CourseType.IMPORT: {
        CourseState.DRAFT: frozenset({CourseState.DRAFT_READY}),
        CourseState.DRAFT_READY: frozenset({CourseState.PUBLISHED}),
        CourseState.PUBLISHED: frozenset(),
    },
}


def allowed_transitions(course_type: CourseType, current: CourseState) -> FrozenSet[CourseState]:
    return _TRANSITIONS[course_type].get(current, frozenset())


class PromoType(str, Enum):
    PERCENT = "PERCENT"
    FIXED = "FIXED"


@dataclass(frozen=True)
class Promo:
    type: PromoType
    value: Decimal
    until: datetime


@dataclass(frozen=True)
class Pricing:
    """Base price (2 decimals, > 0), ISO currency code and an optional promo."""

    price: Decimal
    currency: str
    promo: Optional[Promo] = None


@dataclass
class Lesson:
    title: str
    external_url: Optional[str] = None


@dataclass
class StructureModule:
    title: str
    lessons: List[Lesson] = field(default_factory=list)
    objectives: List[str] = field(default_factory=list)


@dataclass
class CourseStructure:
    """Modules -> lessons tree shared by both course types."""

    modules: List[StructureModule] = field(default_factory=list)


@dataclass(frozen=True)
class AiInputs:
    theme: str
    audience: str
    level: str
    hours: float
    language: str


@dataclass
class GeneratedLesson:
    title: str
    body: str
    video_script: str
    slides: List[str]


@dataclass
class QuizQuestion:
    prompt: str
    options: List[str]
    answer: str


@dataclass
class Quiz:
    title: str
    questions: List[QuizQuestion]


@dataclass
class GeneratedModule:
    title: str
    objectives: List[str]
    lessons: List[GeneratedLesson]
    quiz: Quiz


@dataclass
class FullContent:
    generated_at: datetime
    modules: List[GeneratedModule]
    artifacts: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Course:
    """
    Course owned by a school. State must be changed only via transition_to()
    so the per-type lifecycle is enforced.
    """

    id: str
    school_id: str
    type: CourseType
    title: str
    description: str
    pricing: Pricing
    state: CourseState
    created_at: datetime
    updated_at: datetime
    tags: List[str] = field(default_factory=list)
    category: Optional[str] = None
    ai_inputs: Optional[AiInputs] = None
    structure: Optional[CourseStructure] = None
    full_content: Optional[FullContent] = None
    published_at: Optional[datetime] = None

    def transition_to(self, new_state: CourseState, at: datetime) -> None:
        """
        Move to new_state if the lifecycle allows it. Mutates in place.
        Raises InvalidStateError(COURSE_INVALID_STATE) otherwise.
        """
        if new_state not in allowed_transitions(self.type, self.state):
            raise InvalidStateError(
                ErrorCode.COURSE_INVALID_STATE,
                f"Invalid course transition from {self.state.value} to {new_state.value}",
            )
        self.state = new_state
        self.updated_at = at
        if new_state == CourseState.PUBLISHED:
            self.published_at = at

    @property
    def is_published(self) -> bool:
        return self.state == CourseState.PUBLISHED

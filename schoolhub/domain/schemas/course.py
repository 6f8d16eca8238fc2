"""Pydantic schemas for course authoring and the public storefront."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from schoolhub.domain.models import CourseState, CourseStructure, CourseType, Lesson, PromoType, StructureModule
from schoolhub.domain.schemas.school import ORMModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class CourseCreateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = ""
    price: Any = None
    currency: Optional[str] = None
    promo: Optional[Dict[str, Any]] = Field(None, description="{type: PERCENT|FIXED, value, until}")
    tags: Optional[List[str]] = None
    category: Optional[str] = None


class AiInputsRequest(BaseModel):
    theme: Optional[str] = None
    audience: Optional[str] = None
    level: Optional[str] = None
    hours: Any = None
    language: Optional[str] = None


class LessonSchema(ORMModel):
    title: Optional[str] = ""
    external_url: Optional[str] = None


class ModuleSchema(ORMModel):
    title: Optional[str] = ""
    objectives: List[str] = Field(default_factory=list)
    lessons: List[LessonSchema] = Field(default_factory=list)


class StructureSchema(ORMModel):
    """Outline used both to submit edits/imports and to render a course."""

    modules: List[ModuleSchema] = Field(default_factory=list)

    def to_domain(self) -> CourseStructure:
        return CourseStructure(
            modules=[
                StructureModule(
                    title=(m.title or "").strip(),
                    objectives=list(m.objectives),
                    lessons=[
                        Lesson(
                            title=(lesson.title or "").strip(),
                            external_url=(lesson.external_url or "").strip() or None,
                        )
                        for lesson in m.lessons
                    ],
                )
                for m in self.modules
            ]
        )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class PromoResponse(ORMModel):
    type: PromoType
    value: Decimal
    until: datetime


class PricingResponse(ORMModel):
    price: Decimal
    currency: str
    promo: Optional[PromoResponse] = None


class AiInputsResponse(ORMModel):
    theme: str
    audience: str
    level: str
    hours: float
    language: str


class GeneratedLessonResponse(ORMModel):
    title: str
    body: str
    video_script: str
    slides: List[str]


class QuizQuestionResponse(ORMModel):
    prompt: str
    options: List[str]
    answer: str


class QuizResponse(ORMModel):
    title: str
    questions: List[QuizQuestionResponse]


class GeneratedModuleResponse(ORMModel):
    title: str
    objectives: List[str]
    lessons: List[GeneratedLessonResponse]
    quiz: QuizResponse


class FullContentResponse(ORMModel):
    generated_at: datetime
    modules: List[GeneratedModuleResponse]
    artifacts: Dict[str, Any] = Field(default_factory=dict)


class CourseResponse(ORMModel):
    id: str
    school_id: str
    type: CourseType
    title: str
    description: str
    tags: List[str]
    category: Optional[str] = None
    pricing: PricingResponse
    state: CourseState
    ai_inputs: Optional[AiInputsResponse] = None
    structure: Optional[StructureSchema] = None
    full_content: Optional[FullContentResponse] = None
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime] = None


class PublicCourseResponse(ORMModel):
    id: str
    title: str
    description: str
    type: CourseType
    currency: str
    price: Decimal
    effective_price: Decimal
    promo: Optional[PromoResponse] = None
    tags: List[str]
    category: Optional[str] = None
    published_at: Optional[datetime] = None


class PreviewModuleResponse(ORMModel):
    title: str
    lessons: List[str]


class CoursePageResponse(ORMModel):
    course: PublicCourseResponse
    preview: List[PreviewModuleResponse]
    cta_action: str
    cta_course_id: str

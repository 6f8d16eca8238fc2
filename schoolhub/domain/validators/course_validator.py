"""Validators for course authoring input. Pure functions, no repository access."""

from typing import Any, Mapping

from schoolhub.domain.exceptions import DomainValidationError, ErrorCode
from schoolhub.domain.models.course import AiInputs, CourseStructure

AI_HOURS_MIN = 8
AI_HOURS_MAX = 40


def validate_title(title: Any) -> str:
    t = str(title or "").strip()
    if not t:
        raise DomainValidationError(ErrorCode.COURSE_TITLE_REQUIRED, "Course title is required")
    return t


def validate_ai_inputs(inputs: Mapping[str, Any]) -> AiInputs:
    """Normalize generation inputs. Hours must be within [8, 40]."""
    inputs = inputs or {}
    theme = str(inputs.get("theme") or "").strip()
    audience = str(inputs.get("audience") or "").strip()
    level = str(inputs.get("level") or "").strip()
    language = str(inputs.get("language") or "").strip()

    if not theme:
        raise DomainValidationError(ErrorCode.AI_INPUT_THEME_REQUIRED, "theme is required")
    if not audience:
        raise DomainValidationError(ErrorCode.AI_INPUT_AUDIENCE_REQUIRED, "audience is required")
    if not level:
        raise DomainValidationError(ErrorCode.AI_INPUT_LEVEL_REQUIRED, "level is required")

    raw_hours = inputs.get("hours")
    try:
        hours = float(raw_hours)
    except (TypeError, ValueError):
        hours = None
    if isinstance(raw_hours, bool) or hours is None or not (AI_HOURS_MIN <= hours <= AI_HOURS_MAX):
        raise DomainValidationError(
            ErrorCode.AI_INPUT_HOURS_INVALID,
            f"hours must be between {AI_HOURS_MIN} and {AI_HOURS_MAX}, got {raw_hours!r}",
        )

    if not language:
        raise DomainValidationError(ErrorCode.AI_INPUT_LANGUAGE_REQUIRED, "language is required")

    return AiInputs(
        theme=theme,
        audience=audience,
        level=level,
        hours=hours,
        language=language,
    )


def validate_structure(structure: CourseStructure, require_external_url: bool = False) -> None:
    """
    Every module needs a title and at least one lesson; every lesson a title.
    Imported courses additionally need an external URL per lesson.
    """
    if structure is None or not structure.modules:
        raise DomainValidationError(ErrorCode.COURSE_STRUCTURE_INVALID, "Structure needs at least one module")
    for module in structure.modules:
        if not (module.title or "").strip():
            raise DomainValidationError(
                ErrorCode.COURSE_STRUCTURE_MODULE_TITLE_REQUIRED, "Module title is required"
            )
        if not module.lessons:
            raise DomainValidationError(
                ErrorCode.COURSE_STRUCTURE_LESSONS_REQUIRED,
                f"Module {module.title!r} needs at least one lesson",
            )
        for lesson in module.lessons:
            if not (lesson.title or "").strip():
                raise DomainValidationError(
                    ErrorCode.COURSE_STRUCTURE_LESSON_TITLE_REQUIRED, "Lesson title is required"
                )
            if require_external_url and not (lesson.external_url or "").strip():
                raise DomainValidationError(
                    ErrorCode.COURSE_IMPORT_URL_REQUIRED,
                    f"Lesson {lesson.title!r} needs an external URL",
                )

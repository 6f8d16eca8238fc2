"""Deterministic stand-in for AI course generation. Same inputs, same output."""

import logging
from datetime import datetime

from schoolhub.domain.models.course import (
    AiInputs,
    CourseStructure,
    FullContent,
    GeneratedLesson,
    GeneratedModule,
    Lesson,
    Quiz,
    QuizQuestion,
    StructureModule,
)

logger = logging.getLogger(__name__)

MODULE_BASES = ("Foundations", "Application", "Project")
QUIZ_OPTIONS = ("A", "B", "C", "D")


class DeterministicCourseGenerator:
    """Mock CourseGenerator: 3 modules x 3 lessons seeded from the theme."""

    def generate_structure(self, inputs: AiInputs) -> CourseStructure:
        modules = []
        for base in MODULE_BASES:
            topic = base.lower()
            modules.append(
                StructureModule(
                    title=f"{base} - {inputs.theme}",
                    objectives=[
                        f"Understand the core ideas of {topic}.",
                        f"Apply {topic} to typical scenarios.",
                        "Consolidate with a guided exercise.",
                    ],
                    lessons=[
                        Lesson(title=f"{base}: key concepts"),
                        Lesson(title=f"{base}: guided practice"),
                        Lesson(title=f"{base}: exercise and review"),
                    ],
                )
            )
        logger.info(
            "course_structure_generated",
            extra={"theme": inputs.theme, "modules": len(modules)},
        )
        return CourseStructure(modules=modules)

    def generate_full(self, title: str, structure: CourseStructure, generated_at: datetime) -> FullContent:
        modules = []
        for index, module in enumerate(structure.modules, start=1):
            lessons = [_expand_lesson(lesson.title) for lesson in module.lessons]
            quiz = Quiz(
                title=f"Module {index} quiz",
                questions=[
                    QuizQuestion(
                        prompt=f"Question 1 about {module.title}",
                        options=list(QUIZ_OPTIONS),
                        answer="A",
                    ),
                    QuizQuestion(
                        prompt=f"Question 2 about {module.title}",
                        options=list(QUIZ_OPTIONS),
                        answer="B",
                    ),
                ],
            )
            modules.append(
                GeneratedModule(
                    title=module.title,
                    objectives=list(module.objectives),
                    lessons=lessons,
                    quiz=quiz,
                )
            )
        return FullContent(
            generated_at=generated_at,
            modules=modules,
            artifacts={
                "ebook": {
                    "type": "JSON_PLACEHOLDER",
                    "title": f"Ebook - {title}",
                    "chapters": [m.title for m in modules],
                },
                "materials": {
                    "type": "JSON_PLACEHOLDER",
                    "items": ["Checklist", "Summary", "Quick guide"],
                },
            },
        )


def _expand_lesson(title: str) -> GeneratedLesson:
    return GeneratedLesson(
        title=title,
        body=f'Study text for "{title}", structured for reading and review.',
        video_script=f'Video script for "{title}": opening, walkthrough, worked example, wrap-up.',
        slides=[
            f'Slide 1: Introduction to "{title}"',
            "Slide 2: Core concepts",
            "Slide 3: Worked example",
            "Slide 4: Summary and next steps",
        ],
    )

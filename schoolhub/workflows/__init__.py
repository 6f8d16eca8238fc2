# Course generation: interface and the deterministic mock implementation.

from schoolhub.workflows.interface import CourseGenerator
from schoolhub.workflows.mock_generator import DeterministicCourseGenerator

__all__ = [
    "CourseGenerator",
    "DeterministicCourseGenerator",
]

"""Course generation interface. Application layer depends on this protocol."""

from datetime import datetime
from typing import Protocol

from schoolhub.domain.models.course import AiInputs, CourseStructure, FullContent


class CourseGenerator(Protocol):
    """Produces course structure and full content. Implementations must be deterministic per input."""

    def generate_structure(self, inputs: AiInputs) -> CourseStructure:
        """Outline (modules -> lessons) for the given generation inputs."""
        ...

    def generate_full(self, title: str, structure: CourseStructure, generated_at: datetime) -> FullContent:
        """Expand every lesson of an approved structure into study material."""
        ...

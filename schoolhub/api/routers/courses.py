"""Courses API router: creation and the per-type lifecycle, scoped to a school."""

from typing import Annotated, List

from fastapi import APIRouter, Depends

from schoolhub.api.dependencies import get_container
from schoolhub.application.container import ServiceContainer
from schoolhub.domain.schemas import AiInputsRequest, CourseCreateRequest, CourseResponse, StructureSchema

router = APIRouter()

Container = Annotated[ServiceContainer, Depends(get_container)]


def _creation_args(body: CourseCreateRequest) -> dict:
    return {
        "title": body.title,
        "description": body.description,
        "price": body.price,
        "currency": body.currency,
        "promo": body.promo,
        "tags": body.tags,
        "category": body.category,
    }


@router.post("/ai", response_model=CourseResponse, status_code=201)
async def create_course_ai(school_id: str, body: CourseCreateRequest, container: Container):
    course = await container.courses.create_course_ai(school_id, **_creation_args(body))
    return CourseResponse.model_validate(course)


@router.post("/import", response_model=CourseResponse, status_code=201)
async def create_course_import(school_id: str, body: CourseCreateRequest, container: Container):
    course = await container.courses.create_course_import(school_id, **_creation_args(body))
    return CourseResponse.model_validate(course)


@router.get("", response_model=List[CourseResponse])
async def list_courses(school_id: str, container: Container):
    return [CourseResponse.model_validate(c) for c in await container.courses.list_courses(school_id)]


@router.get("/{course_id}", response_model=CourseResponse)
async def get_course(school_id: str, course_id: str, container: Container):
    return CourseResponse.model_validate(await container.courses.get_course(school_id, course_id))


@router.post("/{course_id}/structure/generate", response_model=CourseResponse)
async def generate_structure(school_id: str, course_id: str, body: AiInputsRequest, container: Container):
    course = await container.courses.generate_structure(school_id, course_id, body.model_dump())
    return CourseResponse.model_validate(course)


@router.put("/{course_id}/structure", response_model=CourseResponse)
async def edit_structure(school_id: str, course_id: str, body: StructureSchema, container: Container):
    course = await container.courses.edit_structure(school_id, course_id, body.to_domain())
    return CourseResponse.model_validate(course)


@router.post("/{course_id}/structure/approve", response_model=CourseResponse)
async def approve_structure(school_id: str, course_id: str, container: Container):
    return CourseResponse.model_validate(await container.courses.approve_structure(school_id, course_id))


@router.post("/{course_id}/generate-full", response_model=CourseResponse)
async def generate_full(school_id: str, course_id: str, container: Container):
    return CourseResponse.model_validate(await container.courses.generate_full(school_id, course_id))


@router.put("/{course_id}/import-structure", response_model=CourseResponse)
async def set_import_structure(school_id: str, course_id: str, body: StructureSchema, container: Container):
    course = await container.courses.set_import_structure(school_id, course_id, body.to_domain())
    return CourseResponse.model_validate(course)


@router.post("/{course_id}/publish", response_model=CourseResponse)
async def publish(school_id: str, course_id: str, container: Container):
    return CourseResponse.model_validate(await container.courses.publish(school_id, course_id))

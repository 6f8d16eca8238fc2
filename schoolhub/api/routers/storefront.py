"""Storefront API router. The school is the one serving the request's Host."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from schoolhub.api.dependencies import get_container, get_store_school
from schoolhub.application.container import ServiceContainer
from schoolhub.domain.exceptions import ErrorCode
from schoolhub.domain.models import School
from schoolhub.domain.schemas import (
    AccessResponse,
    CheckoutRequest,
    CheckoutResponse,
    CoursePageResponse,
    OrderCreateRequest,
    OrderResponse,
    PublicCourseResponse,
)
from schoolhub.domain.validators import normalize_email

router = APIRouter()

Container = Annotated[ServiceContainer, Depends(get_container)]
StoreSchool = Annotated[School, Depends(get_store_school)]


@router.get("/courses", response_model=List[PublicCourseResponse])
async def list_public_courses(
    request: Request,
    container: Container,
    q: Optional[str] = None,
    tag: Optional[str] = None,
    category: Optional[str] = None,
):
    """Published courses, optionally filtered by text, tag and category."""
    courses = await container.storefront.public_list_courses(request.headers.get("host", ""), q, tag, category)
    return [PublicCourseResponse.model_validate(c) for c in courses or []]


@router.get("/courses/{course_id}", response_model=CoursePageResponse)
async def course_page(request: Request, course_id: str, container: Container):
    page = await container.storefront.public_course_page(request.headers.get("host", ""), course_id)
    if page is None:
        return JSONResponse(
            status_code=404,
            content={"code": ErrorCode.COURSE_NOT_FOUND.value, "detail": "Course not found"},
        )
    return CoursePageResponse.model_validate(page)


@router.post("/orders", response_model=OrderResponse, status_code=201)
async def create_order(body: OrderCreateRequest, school: StoreSchool, container: Container):
    order = await container.orders.create_order(school.id, body.course_id, body.buyer_email)
    return OrderResponse.model_validate(order)


@router.post("/orders/{order_id}/checkout", response_model=CheckoutResponse)
async def start_checkout(order_id: str, body: CheckoutRequest, school: StoreSchool, container: Container):
    """Open a DEMO checkout; the signed webhook to deliver back is part of the response."""
    session = await container.orders.start_checkout(school.id, order_id, body.outcome)
    return CheckoutResponse.model_validate(session)


@router.get("/me/orders", response_model=List[OrderResponse])
async def my_orders(email: str, school: StoreSchool, container: Container):
    orders = await container.orders.list_orders_by_buyer(school.id, email)
    return [OrderResponse.model_validate(o) for o in orders]


@router.get("/me/access", response_model=AccessResponse)
async def my_access(email: str, course_id: str, school: StoreSchool, container: Container):
    allowed = await container.enrollments.can_access(school.id, email, course_id)
    return AccessResponse(
        school_id=school.id,
        buyer_email=normalize_email(email),
        course_id=course_id,
        can_access=allowed,
    )

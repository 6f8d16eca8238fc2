"""Storefront catalog: host-resolved listing, filters, course page preview."""

from decimal import Decimal

HOST = "alpha.platform.local"
PROMO = {"type": "FIXED", "value": "50", "until": "2026-03-08T12:00:00Z"}


async def test_unknown_host_yields_none(container, school):
    assert await container.storefront.public_list_courses("ghost.platform.local") is None
    assert await container.storefront.public_course_page("ghost.platform.local", "crs_1") is None


async def test_lists_only_published_courses_with_effective_price(container, school, make_published_course):
    published = await make_published_course(school.id, title="Python for Data", price="199.90", promo=PROMO)
    await container.courses.create_course_import(school.id, "Unpublished", price="10")

    courses = await container.storefront.public_list_courses(HOST)
    assert [c.id for c in courses] == [published.id]
    item = courses[0]
    assert item.price == Decimal("199.90")
    assert item.effective_price == Decimal("149.90")
    assert item.currency == "BRL"
    assert item.published_at is not None


async def test_filters_are_case_insensitive(container, school, make_published_course, clock):
    python = await make_published_course(
        school.id, title="Python for Data", tags=["Data", "python"], category="Programming"
    )
    clock.advance(seconds=1)
    excel = await make_published_course(
        school.id, title="Excel basics", description="Spreadsheets for DATA people", category="Office"
    )

    assert [c.id for c in await container.storefront.public_list_courses(HOST, q="data")] == [python.id, excel.id]
    assert [c.id for c in await container.storefront.public_list_courses(HOST, tag="DATA")] == [python.id]
    assert [c.id for c in await container.storefront.public_list_courses(HOST, category="office")] == [excel.id]
    assert await container.storefront.public_list_courses(HOST, q="cobol") == []


async def test_other_schools_courses_are_invisible(container, school, other_school, make_published_course):
    foreign = await make_published_course(other_school.id)
    assert await container.storefront.public_list_courses(HOST) == []
    assert await container.storefront.public_course_page(HOST, foreign.id) is None


async def test_course_page_has_title_only_preview(container, school, make_published_course):
    course = await make_published_course(school.id)
    page = await container.storefront.public_course_page(HOST, course.id)
    assert page.course.id == course.id
    assert page.cta_action == "BUY"
    assert page.cta_course_id == course.id
    assert [m.title for m in page.preview] == ["Module 1"]
    assert page.preview[0].lessons == ["Lesson 1.1", "Lesson 1.2"]


async def test_course_page_requires_published(container, school):
    draft = await container.courses.create_course_import(school.id, "Draft", price="10")
    assert await container.storefront.public_course_page(HOST, draft.id) is None

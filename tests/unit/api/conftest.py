"""Fixtures for API unit tests: app over a fresh container, AsyncClient, storefront headers."""

import pytest
from httpx import ASGITransport, AsyncClient

from schoolhub.main import create_app

STORE_HEADERS = {"Host": "alpha.platform.local"}


@pytest.fixture
def app(container):
    """App wired to the per-test in-memory container."""
    return create_app(container)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def store_headers():
    return dict(STORE_HEADERS)


@pytest.fixture
async def api_school(client):
    r = await client.post("/schools", json={"name": "Alpha Academy", "slug": "alpha"})
    assert r.status_code == 201
    return r.json()


@pytest.fixture
def publish_course(client):
    """Factory: create and publish an IMPORT course over HTTP."""

    async def _publish(school_id, **fields):
        body = {"title": "Python for Data", "price": "199.90", **fields}
        r = await client.post(f"/schools/{school_id}/courses/import", json=body)
        assert r.status_code == 201, r.text
        course_id = r.json()["id"]
        structure = {
            "modules": [
                {
                    "title": "Module 1",
                    "lessons": [{"title": "Lesson 1", "external_url": "https://videos.example.com/1"}],
                }
            ]
        }
        r = await client.put(f"/schools/{school_id}/courses/{course_id}/import-structure", json=structure)
        assert r.status_code == 200, r.text
        r = await client.post(f"/schools/{school_id}/courses/{course_id}/publish")
        assert r.status_code == 200, r.text
        return r.json()

    return _publish

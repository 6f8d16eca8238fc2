"""Schools API: creation, errors as {code, detail}, status, domains, gateway, stats."""

from httpx import AsyncClient


async def test_create_and_list_schools(client: AsyncClient, api_school):
    assert api_school["slug"] == "alpha"
    assert api_school["status"] == "ACTIVE"
    r = await client.get("/schools")
    assert [s["id"] for s in r.json()] == [api_school["id"]]


async def test_duplicate_slug_is_409(client: AsyncClient, api_school):
    r = await client.post("/schools", json={"name": "Again", "slug": "alpha"})
    assert r.status_code == 409
    assert r.json() == {"code": "SCHOOL_SLUG_ALREADY_EXISTS", "detail": "Slug already taken: alpha"}


async def test_missing_name_is_422(client: AsyncClient):
    r = await client.post("/schools", json={"slug": "alpha"})
    assert r.status_code == 422
    assert r.json()["code"] == "SCHOOL_NAME_REQUIRED"


async def test_unknown_school_is_404(client: AsyncClient):
    r = await client.get("/schools/sch_missing")
    assert r.status_code == 404
    assert r.json()["code"] == "SCHOOL_NOT_FOUND"


async def test_suspend_school_blocks_authoring(client: AsyncClient, api_school):
    school_id = api_school["id"]
    r = await client.patch(f"/schools/{school_id}/status", json={"status": "SUSPENDED"})
    assert r.status_code == 200
    assert r.json()["status"] == "SUSPENDED"

    r = await client.post(f"/schools/{school_id}/courses/ai", json={"title": "X", "price": "10"})
    assert r.status_code == 403
    assert r.json()["code"] == "SCHOOL_SUSPENDED"

    r = await client.patch(f"/schools/{school_id}/status", json={"status": "GONE"})
    assert r.status_code == 422
    assert r.json()["code"] == "SCHOOL_STATUS_INVALID"


async def test_custom_domain_flow(client: AsyncClient, api_school, publish_course):
    school_id = api_school["id"]
    await publish_course(school_id)

    r = await client.post(f"/schools/{school_id}/domains", json={"domain": "cursos.example.com"})
    assert r.status_code == 201
    token = r.json()["verification_token"]
    assert r.json()["verified"] is False

    r = await client.get("/store/courses", headers={"Host": "cursos.example.com"})
    assert r.status_code == 404

    r = await client.post(
        f"/schools/{school_id}/domains/verify", json={"domain": "cursos.example.com", "token": "wrong"}
    )
    assert r.status_code == 422
    assert r.json()["code"] == "CUSTOM_DOMAIN_TOKEN_INVALID"

    r = await client.post(
        f"/schools/{school_id}/domains/verify", json={"domain": "cursos.example.com", "token": token}
    )
    assert r.status_code == 200
    assert r.json()["verified"] is True

    r = await client.get("/store/courses", headers={"Host": "cursos.example.com"})
    assert r.status_code == 200
    assert len(r.json()) == 1

    domains = (await client.get(f"/schools/{school_id}/domains")).json()
    assert [d["type"] for d in domains] == ["subdomain", "custom"]


async def test_platform_domain_not_allowed(client: AsyncClient, api_school):
    r = await client.post(f"/schools/{api_school['id']}/domains", json={"domain": "x.platform.local"})
    assert r.status_code == 422
    assert r.json()["code"] == "CUSTOM_DOMAIN_NOT_ALLOWED"


async def test_gateway_rotation(client: AsyncClient, api_school):
    school_id = api_school["id"]
    before = (await client.get(f"/schools/{school_id}/gateway")).json()
    assert before["provider"] == "DEMO"
    after = (await client.post(f"/schools/{school_id}/gateway/rotate-secret")).json()
    assert after["webhook_secret"] != before["webhook_secret"]


async def test_stats(client: AsyncClient, api_school, publish_course):
    school_id = api_school["id"]
    await publish_course(school_id)
    r = await client.get(f"/schools/{school_id}/stats")
    assert r.json() == {"school_id": school_id, "courses_count": 1, "orders_count": 0}

"""
Health, identity and transport-level behaviour (CORS, OPTIONS, error guard).
"""

import pytest
from httpx import AsyncClient

from library_mock.routes import KNOWN_ROUTES, describe_routes


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["timestamp"].endswith("Z")


@pytest.mark.asyncio
async def test_users_me_requires_bearer(client: AsyncClient):
    response = await client.get("/users/me")
    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}

    response = await client.get("/users/me", headers={"Authorization": "Token abc"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_users_me_fabricates_a_new_user_per_call(client: AsyncClient, bearer, store):
    first = await client.get("/users/me", headers=bearer)
    second = await client.get("/users/me", headers=bearer)
    assert first.status_code == 200
    assert second.status_code == 200

    a, b = first.json(), second.json()
    assert set(a) == {"user_id", "email", "name"}
    assert "@" in a["email"]
    assert a["user_id"] != b["user_id"]
    assert set(store.users) == {a["user_id"], b["user_id"]}


@pytest.mark.asyncio
async def test_bare_options_is_short_circuited(client: AsyncClient):
    response = await client.options("/libraries")
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "DELETE" in response.headers["access-control-allow-methods"]
    assert "org-id" in response.headers["access-control-allow-headers"]


@pytest.mark.asyncio
async def test_cors_preflight_allows_any_origin(client: AsyncClient):
    response = await client.options(
        "/library/lib-org001-001/contexts",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "org-id, content-type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_simple_request_carries_cors_header(client: AsyncClient):
    response = await client.get("/health", headers={"Origin": "http://localhost:5173"})
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_unexpected_errors_become_json_500(client: AsyncClient, store, org001, monkeypatch):
    def boom(org_id):
        raise RuntimeError("store exploded")

    monkeypatch.setattr(store, "libraries_for_org", boom)
    response = await client.get("/libraries", headers=org001)
    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["error"] == {"type": "RuntimeError", "message": "store exploded"}


def test_route_table_lists_every_endpoint():
    lines = describe_routes()
    assert len(lines) == len(KNOWN_ROUTES)
    assert any(line.startswith("DELETE") and line.endswith("/organizations/{organization_id}/users") for line in lines)


@pytest.mark.asyncio
@pytest.mark.parametrize("path,status", [("/health", 200), ("/libraries", 400), ("/organizations", 401)])
async def test_cors_headers_without_origin(client: AsyncClient, path, status):
    response = await client.get(path)
    assert response.status_code == status
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, POST, PUT, DELETE, OPTIONS"
    assert response.headers["access-control-allow-headers"] == "Content-Type, Authorization, org-id"


@pytest.mark.asyncio
async def test_no_content_response_keeps_cors_headers(client: AsyncClient):
    created = (await client.post("/organizations", json={"name": "Hooli", "owner_id": "gavin"})).json()
    response = await client.request("DELETE", f"/organizations/{created['id']}/users", json={"user_id": "gavin"})
    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"

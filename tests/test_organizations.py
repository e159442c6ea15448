"""
Organization and membership endpoints.

Covers creation (owner auto-admin), bearer gating of the listing, membership
uniqueness, removal and cursor pagination.
"""

from __future__ import annotations

import math

import pytest
from httpx import AsyncClient


async def _create_org(client: AsyncClient, name: str = "Globex", owner_id: str = "owner-1", **extra) -> dict:
    response = await client.post("/organizations", json={"name": name, "owner_id": owner_id, **extra})
    assert response.status_code == 201
    return response.json()


async def _members(client: AsyncClient, org_id: str, **params) -> dict:
    response = await client.get(f"/organizations/{org_id}/users", params=params)
    assert response.status_code == 200
    return response.json()


# ---------------------------------------------------------------------------
# Organizations
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_organization(client: AsyncClient):
    org = await _create_org(client, description="Widgets")
    assert set(org) == {"id", "name", "description", "owner_id", "created_at"}
    assert org["name"] == "Globex"
    assert org["description"] == "Widgets"
    assert org["owner_id"] == "owner-1"
    assert org["created_at"].endswith("Z")

    members = await _members(client, org["id"])
    assert members == {"users": [{"user_id": "owner-1", "role": "admin"}], "next_cursor": None}


@pytest.mark.asyncio
async def test_create_organization_description_defaults_to_empty(client: AsyncClient):
    org = await _create_org(client)
    assert org["description"] == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"name": "Globex"}, {"owner_id": "owner-1"}, {"name": "", "owner_id": "x"}])
async def test_create_organization_requires_fields(client: AsyncClient, body):
    response = await client.post("/organizations", json=body)
    assert response.status_code == 400
    assert response.json() == {"detail": "name and owner_id are required"}


@pytest.mark.asyncio
async def test_create_organization_with_malformed_json(client: AsyncClient):
    response = await client.post(
        "/organizations",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_organizations_requires_bearer(client: AsyncClient):
    response = await client.get("/organizations")
    assert response.status_code == 401
    assert response.json() == {"detail": "Unauthorized"}


@pytest.mark.asyncio
async def test_list_organizations_includes_seeds_and_created(client: AsyncClient, bearer):
    org = await _create_org(client)
    response = await client.get("/organizations", headers=bearer)
    assert response.status_code == 200
    ids = [o["id"] for o in response.json()["organizations"]]
    assert ids == ["org-001", "org-002", org["id"]]


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_user_defaults_to_member(client: AsyncClient):
    org = await _create_org(client)
    response = await client.post(f"/organizations/{org['id']}/users", json={"user_id": "u-1", "role": "owner"})
    assert response.status_code == 201
    assert response.json() == {}

    response = await client.post(f"/organizations/{org['id']}/users", json={"user_id": "u-2", "role": "admin"})
    assert response.status_code == 201

    members = await _members(client, org["id"])
    assert members["users"] == [
        {"user_id": "owner-1", "role": "admin"},
        {"user_id": "u-1", "role": "member"},
        {"user_id": "u-2", "role": "admin"},
    ]


@pytest.mark.asyncio
async def test_add_user_to_unknown_organization(client: AsyncClient):
    response = await client.post("/organizations/nope/users", json={"user_id": "u-1"})
    assert response.status_code == 404
    assert response.json() == {"detail": "Organization not found"}


@pytest.mark.asyncio
async def test_add_user_requires_user_id(client: AsyncClient):
    org = await _create_org(client)
    response = await client.post(f"/organizations/{org['id']}/users", json={"role": "admin"})
    assert response.status_code == 400
    assert response.json() == {"detail": "user_id is required"}


@pytest.mark.asyncio
async def test_duplicate_membership_is_rejected(client: AsyncClient, store):
    org = await _create_org(client)
    first = await client.post(f"/organizations/{org['id']}/users", json={"user_id": "u-1"})
    assert first.status_code == 201

    second = await client.post(f"/organizations/{org['id']}/users", json={"user_id": "u-1", "role": "admin"})
    assert second.status_code == 400
    assert second.json() == {"detail": "User already in organization"}
    assert len(store.members(org["id"])) == 2


@pytest.mark.asyncio
async def test_seeded_organization_accepts_members(client: AsyncClient):
    response = await client.post("/organizations/org-001/users", json={"user_id": "user-001"})
    assert response.status_code == 201
    members = await _members(client, "org-001")
    assert members["users"] == [{"user_id": "user-001", "role": "member"}]


@pytest.mark.asyncio
async def test_remove_user(client: AsyncClient):
    org = await _create_org(client)
    await client.post(f"/organizations/{org['id']}/users", json={"user_id": "u-1"})

    response = await client.request("DELETE", f"/organizations/{org['id']}/users", json={"user_id": "u-1"})
    assert response.status_code == 204
    assert response.content == b""

    members = await _members(client, org["id"])
    assert [u["user_id"] for u in members["users"]] == ["owner-1"]


@pytest.mark.asyncio
async def test_remove_user_errors(client: AsyncClient):
    org = await _create_org(client)

    response = await client.request("DELETE", "/organizations/nope/users", json={"user_id": "u-1"})
    assert response.status_code == 404
    assert response.json() == {"detail": "Organization not found"}

    response = await client.request("DELETE", f"/organizations/{org['id']}/users", json={})
    assert response.status_code == 400
    assert response.json() == {"detail": "user_id is required"}

    response = await client.request("DELETE", f"/organizations/{org['id']}/users", json={"user_id": "ghost"})
    assert response.status_code == 404
    assert response.json() == {"detail": "User not found in organization"}


# ---------------------------------------------------------------------------
# Cursor pagination
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_users_unknown_organization(client: AsyncClient):
    response = await client.get("/organizations/nope/users")
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("extra_users,size", [(6, 3), (5, 3), (0, 1), (9, 20)])
async def test_cursor_pages_reproduce_the_membership_list(client: AsyncClient, extra_users, size):
    org = await _create_org(client)
    for i in range(extra_users):
        await client.post(f"/organizations/{org['id']}/users", json={"user_id": f"u-{i}"})
    expected = ["owner-1"] + [f"u-{i}" for i in range(extra_users)]

    collected: list[str] = []
    pages = 0
    cursor = None
    while True:
        params = {"size": size}
        if cursor:
            params["cursor"] = cursor
        data = await _members(client, org["id"], **params)
        pages += 1
        collected.extend(u["user_id"] for u in data["users"])
        cursor = data["next_cursor"]
        if cursor is None:
            break
        # The cursor names the last row already returned.
        assert cursor == data["users"][-1]["user_id"]

    assert collected == expected
    assert pages == math.ceil(len(expected) / size)


@pytest.mark.asyncio
async def test_unknown_cursor_restarts_from_the_top(client: AsyncClient):
    org = await _create_org(client)
    await client.post(f"/organizations/{org['id']}/users", json={"user_id": "u-1"})
    data = await _members(client, org["id"], cursor="not-a-member")
    assert [u["user_id"] for u in data["users"]] == ["owner-1", "u-1"]
    assert data["next_cursor"] is None

import pytest
from datetime import timedelta
from httpx import AsyncClient
from uuid import UUID, uuid4

from tests.utils.json_compare import exclude_keys, pluck


async def assign(client, headers, data, member, campus, is_primary=False):
    response = await client.post(
        "/campus-members/assignments",
        json={
            "member_id": data.member_id(member),
            "campus_id": data.campus_id(campus),
            "organization_id": data.organization_id(),
            "is_primary": is_primary,
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["assignment_id"]


@pytest.mark.asyncio
async def test_campus_stats_cover_every_campus(
    client: AsyncClient, auth_headers, test_data, db_session
):
    await assign(client, auth_headers, test_data, "Ada Okafor", "North", is_primary=True)
    await assign(client, auth_headers, test_data, "Bruno Silva", "North")
    old_id = await assign(client, auth_headers, test_data, "Chen Wei", "North", is_primary=True)
    leaving_id = await assign(client, auth_headers, test_data, "Bruno Silva", "South")

    deactivated = await client.post(
        f"/campus-members/assignments/{leaving_id}/deactivate", headers=auth_headers
    )
    assert deactivated.status_code == 200

    # Chen joined long before the recent-join window
    from sqlmodel import select
    from src.domain.base import utcnow
    from src.domain.entities import MemberCampusAssignment

    result = await db_session.exec(
        select(MemberCampusAssignment).where(MemberCampusAssignment.id == UUID(old_id))
    )
    old = result.one()
    old.assigned_at = utcnow() - timedelta(days=90)
    db_session.add(old)
    await db_session.commit()

    response = await client.get(
        f"/campus-members/organizations/{test_data.organization_id()}/analytics",
        headers=auth_headers,
    )

    assert response.status_code == 200
    stats = response.json()["analytics"]
    assert pluck(stats, "campus_name") == ["North", "South", "West"]

    north, south, west = (exclude_keys(stat, {"campus_id", "campus_name"}) for stat in stats)
    assert north == {
        "total_members": 3,
        "active_members": 3,
        "inactive_members": 0,
        "primary_members": 2,
        "recent_joins": 2,
    }
    assert south == {
        "total_members": 0,
        "active_members": 0,
        "inactive_members": 1,
        "primary_members": 0,
        "recent_joins": 0,
    }
    assert west["total_members"] == 0
    assert west["inactive_members"] == 0


@pytest.mark.asyncio
async def test_campus_stats_single_campus(client: AsyncClient, auth_headers, test_data):
    await assign(client, auth_headers, test_data, "Ada Okafor", "West")

    response = await client.get(
        f"/campus-members/organizations/{test_data.organization_id()}/analytics",
        params={"campus_id": test_data.campus_id("West")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    stats = response.json()["analytics"]
    assert len(stats) == 1
    assert stats[0]["campus_id"] == test_data.campus_id("West")
    assert stats[0]["total_members"] == 1


@pytest.mark.asyncio
async def test_campus_stats_unknown_campus(client: AsyncClient, auth_headers, test_data):
    response = await client.get(
        f"/campus-members/organizations/{test_data.organization_id()}/analytics",
        params={"campus_id": str(uuid4())},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "CAMPUS_NOT_FOUND"


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

import pytest
from httpx import AsyncClient
from uuid import UUID

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


async def grant(client, headers, data, member, campus, title, permissions):
    response = await client.post(
        "/campus-members/roles",
        json={
            "member_id": data.member_id(member),
            "campus_id": data.campus_id(campus),
            "title": title,
            "permissions": permissions,
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


async def transfer(client, headers, data, member, source, destination, **extra):
    return await client.post(
        "/campus-members/transfers",
        json={
            "member_id": data.member_id(member),
            "from_campus_id": data.campus_id(source),
            "to_campus_id": data.campus_id(destination),
            "organization_id": data.organization_id(),
            **extra,
        },
        headers=headers,
    )


async def load_assignments(db_session, member_id):
    from sqlmodel import select
    from src.domain.entities import MemberCampusAssignment

    stmt = (
        select(MemberCampusAssignment)
        .where(MemberCampusAssignment.member_id == UUID(member_id))
        .execution_options(populate_existing=True)
    )
    result = await db_session.exec(stmt)
    return {str(row.campus_id): row for row in result.all()}


async def count_history(db_session):
    from sqlmodel import func, select
    from src.domain.entities import MemberTransferHistory

    result = await db_session.exec(select(func.count()).select_from(MemberTransferHistory))
    return result.one()


@pytest.mark.asyncio
async def test_transfer_moves_primary_and_closes_roles(
    client: AsyncClient, auth_headers, test_data, db_session
):
    """Transfer of a primary member holding one role

    Given Ada is primary at North and serves as Usher there
    When Ada is transferred from North to South
    Then Ada is primary at South
    And the North assignment is transferred
    And the Usher role is closed
    And the ledger holds one record with the Usher snapshot
    """
    await assign(client, auth_headers, test_data, "Ada Okafor", "North", is_primary=True)
    usher_id = await grant(
        client, auth_headers, test_data, "Ada Okafor", "North", "Usher", ["doors", "seating"]
    )

    response = await transfer(
        client, auth_headers, test_data, "Ada Okafor", "North", "South", reason="Moved house"
    )

    assert response.status_code == 201
    data = response.json()
    assert data["is_primary"] is True
    assert pluck(data["closed_roles"], "title") == ["Usher"]
    assert data["closed_roles"][0]["role_id"] == usher_id

    assignments = await load_assignments(db_session, test_data.member_id("Ada Okafor"))
    north = assignments[test_data.campus_id("North")]
    south = assignments[test_data.campus_id("South")]
    assert north.status.value == "transferred"
    assert south.status.value == "active"
    assert south.is_primary is True
    assert str(south.id) == data["new_assignment_id"]
    assert str(south.transferred_from_campus_id) == test_data.campus_id("North")

    roles = await client.get(
        f"/campus-members/members/{test_data.member_id('Ada Okafor')}/roles",
        headers=auth_headers,
    )
    assert roles.json()["roles"] == []

    history = await client.get(
        "/campus-members/transfers",
        params={"member_id": test_data.member_id("Ada Okafor")},
        headers=auth_headers,
    )
    assert history.status_code == 200
    entries = history.json()["history"]
    assert len(entries) == 1
    entry = entries[0]
    assert entry["id"] == data["history_record_id"]
    assert entry["status"] == "completed"
    assert entry["transfer_type"] == "manual"
    assert entry["member_name"] == "Ada Okafor"
    assert entry["from_campus_name"] == "North"
    assert entry["to_campus_name"] == "South"
    assert entry["reason"] == "Moved house"
    assert entry["requested_by"] == test_data.get("actor")["id"]
    assert entry["approved_by"] == test_data.get("actor")["id"]
    assert pluck(entry["role_snapshot"], "title") == ["Usher"]
    assert exclude_keys(entry["role_snapshot"][0], {"start_date", "assigned_by"}) == {
        "role_id": usher_id,
        "campus_id": test_data.campus_id("North"),
        "title": "Usher",
        "description": None,
        "permissions": ["doors", "seating"],
    }


@pytest.mark.asyncio
async def test_transfer_to_same_campus_changes_nothing(
    client: AsyncClient, auth_headers, test_data, db_session
):
    await assign(client, auth_headers, test_data, "Ada Okafor", "North", is_primary=True)

    response = await transfer(client, auth_headers, test_data, "Ada Okafor", "North", "North")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NO_OP_TRANSFER"

    assignments = await load_assignments(db_session, test_data.member_id("Ada Okafor"))
    north = assignments[test_data.campus_id("North")]
    assert north.status.value == "active"
    assert north.is_primary is True
    assert await count_history(db_session) == 0


@pytest.mark.asyncio
async def test_transfer_to_already_assigned_campus_is_rejected(
    client: AsyncClient, auth_headers, test_data, db_session
):
    """Transfer onto a campus the member already attends

    Given Ada is primary at North and also attends South
    When Ada is transferred from North to South
    Then the request fails with DESTINATION_ALREADY_ASSIGNED
    And the North assignment is unchanged
    """
    await assign(client, auth_headers, test_data, "Ada Okafor", "North", is_primary=True)
    await assign(client, auth_headers, test_data, "Ada Okafor", "South")
    await grant(client, auth_headers, test_data, "Ada Okafor", "North", "Usher", ["doors"])

    response = await transfer(client, auth_headers, test_data, "Ada Okafor", "North", "South")

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DESTINATION_ALREADY_ASSIGNED"

    assignments = await load_assignments(db_session, test_data.member_id("Ada Okafor"))
    north = assignments[test_data.campus_id("North")]
    assert north.status.value == "active"
    assert north.is_primary is True
    assert await count_history(db_session) == 0

    roles = await client.get(
        f"/campus-members/members/{test_data.member_id('Ada Okafor')}/roles",
        headers=auth_headers,
    )
    assert pluck(roles.json()["roles"], "title") == ["Usher"]


@pytest.mark.asyncio
async def test_transfer_without_source_assignment(client: AsyncClient, auth_headers, test_data):
    response = await transfer(client, auth_headers, test_data, "Chen Wei", "North", "South")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "SOURCE_ASSIGNMENT_NOT_FOUND"


@pytest.mark.asyncio
async def test_transfer_leaves_third_campus_assignment(
    client: AsyncClient, auth_headers, test_data, db_session
):
    await assign(client, auth_headers, test_data, "Bruno Silva", "North")
    await assign(client, auth_headers, test_data, "Bruno Silva", "West", is_primary=True)

    response = await transfer(client, auth_headers, test_data, "Bruno Silva", "North", "South")

    assert response.status_code == 201
    assert response.json()["is_primary"] is False

    assignments = await load_assignments(db_session, test_data.member_id("Bruno Silva"))
    west = assignments[test_data.campus_id("West")]
    assert west.status.value == "active"
    assert west.is_primary is True


@pytest.mark.asyncio
async def test_transfer_rejects_unknown_transfer_type(client: AsyncClient, auth_headers, test_data):
    await assign(client, auth_headers, test_data, "Ada Okafor", "North")

    response = await transfer(
        client, auth_headers, test_data, "Ada Okafor", "North", "South", transfer_type="forced"
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_history_is_newest_first_and_limited(client: AsyncClient, auth_headers, test_data):
    await assign(client, auth_headers, test_data, "Chen Wei", "North", is_primary=True)
    first = await transfer(client, auth_headers, test_data, "Chen Wei", "North", "South")
    second = await transfer(
        client, auth_headers, test_data, "Chen Wei", "South", "West", transfer_type="bulk"
    )
    assert first.status_code == 201
    assert second.status_code == 201

    response = await client.get(
        "/campus-members/transfers",
        params={"organization_id": test_data.organization_id(), "limit": 1},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["history"][0]["id"] == second.json()["history_record_id"]
    assert data["history"][0]["transfer_type"] == "bulk"


@pytest.mark.asyncio
async def test_history_limit_out_of_range(client: AsyncClient, auth_headers):
    response = await client.get(
        "/campus-members/transfers", params={"limit": 500}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_history_limit_not_an_integer(client: AsyncClient, auth_headers):
    response = await client.get(
        "/campus-members/transfers", params={"limit": "abc"}, headers=auth_headers
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]["field"] == "limit"

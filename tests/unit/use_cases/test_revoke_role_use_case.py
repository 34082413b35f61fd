from contextlib import asynccontextmanager
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from src.app.services.member_lock import MemberLockTimeout
from src.app.use_cases.roles import RevokeRoleUseCase
from src.domain.base import utcnow
from src.domain.entities import CampusMemberRole


@pytest.fixture
def role():
    return CampusMemberRole(
        id=uuid4(),
        member_id=uuid4(),
        campus_id=uuid4(),
        organization_id=uuid4(),
        title="Worship Leader",
        permissions=["stage"],
        is_active=True,
    )


@pytest.mark.asyncio
async def test_revoke_role_success(mock_uow, role):
    mock_uow.roles.get_by_id.return_value = role

    result = await RevokeRoleUseCase(mock_uow).execute(role.id, uuid4())

    assert result.is_ok()
    assert result.value.is_active is False
    assert result.value.end_date is not None
    assert role.end_date is not None
    mock_uow.roles.update.assert_called_once_with(role)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_revoke_missing_role(mock_uow):
    mock_uow.roles.get_by_id.return_value = None

    result = await RevokeRoleUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "ROLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_revoke_closed_role(mock_uow, role):
    role.is_active = False
    role.end_date = utcnow()
    mock_uow.roles.get_by_id.return_value = role

    result = await RevokeRoleUseCase(mock_uow).execute(role.id)

    assert result.is_err()
    assert result.error.code == "ROLE_ALREADY_CLOSED"
    mock_uow.roles.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_rereads_role_under_member_lock(mock_uow, role):
    mock_uow.roles.get_by_id.return_value = role

    result = await RevokeRoleUseCase(mock_uow).execute(role.id)

    assert result.is_ok()
    mock_uow.lock_member.assert_called_once_with(role.member_id)
    mock_uow.roles.get_by_id.assert_called_with(role.id, for_update=True)


@pytest.mark.asyncio
async def test_role_closed_by_transfer_before_lock_is_not_rewritten(mock_uow, role):
    """A transfer closed the grant between the first read and the lock"""
    transfer_time = utcnow()
    closed = CampusMemberRole(
        id=role.id,
        member_id=role.member_id,
        campus_id=role.campus_id,
        organization_id=role.organization_id,
        title=role.title,
        permissions=role.permissions,
        is_active=False,
        end_date=transfer_time,
    )
    mock_uow.roles.get_by_id.side_effect = [role, closed]

    result = await RevokeRoleUseCase(mock_uow).execute(role.id)

    assert result.is_err()
    assert result.error.code == "ROLE_ALREADY_CLOSED"
    assert closed.end_date == transfer_time
    mock_uow.roles.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_revoke_lock_timeout_reports_conflict(mock_uow, role):
    @asynccontextmanager
    async def busy(member_id):
        raise MemberLockTimeout(member_id, 5.0)
        yield

    mock_uow.roles.get_by_id.return_value = role
    mock_uow.lock_member = MagicMock(side_effect=busy)

    result = await RevokeRoleUseCase(mock_uow).execute(role.id)

    assert result.is_err()
    assert result.error.code == "CONCURRENCY_CONFLICT"
    assert result.error.details["member_id"] == str(role.member_id)
    assert result.error.details["retryable"] is True
    mock_uow.roles.update.assert_not_called()

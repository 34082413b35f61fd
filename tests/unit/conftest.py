from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest


@asynccontextmanager
async def _held(member_id):
    yield False


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.lock_member = MagicMock(side_effect=_held)

    uow.assignments = MagicMock()
    uow.assignments.get_by_id = AsyncMock()
    uow.assignments.get_active = AsyncMock(return_value=None)
    uow.assignments.get_active_for_member = AsyncMock(return_value=[])
    uow.assignments.list_for_member = AsyncMock(return_value=[])
    uow.assignments.list_active_by_campus = AsyncMock(return_value=[])
    uow.assignments.create = AsyncMock(side_effect=lambda assignment: assignment)
    uow.assignments.clear_primary = AsyncMock(return_value=[])
    uow.assignments.count_by_campus = AsyncMock(return_value={})

    async def deactivate(assignment, new_status):
        assignment.status = new_status
        return assignment

    uow.assignments.deactivate = AsyncMock(side_effect=deactivate)

    uow.roles = MagicMock()
    uow.roles.get_by_id = AsyncMock()
    uow.roles.create = AsyncMock(side_effect=lambda role: role)
    uow.roles.update = AsyncMock(side_effect=lambda role: role)
    uow.roles.get_active_for_campus = AsyncMock(return_value=[])
    uow.roles.list_active = AsyncMock(return_value=[])
    uow.roles.close_roles = AsyncMock(return_value=[])

    uow.transfer_ledger = MagicMock()
    uow.transfer_ledger.record = AsyncMock(side_effect=lambda entry: entry)
    uow.transfer_ledger.query = AsyncMock(return_value=[])

    uow.directory = MagicMock()
    uow.directory.get_member = AsyncMock()
    uow.directory.get_campus = AsyncMock()
    uow.directory.list_campuses = AsyncMock(return_value=[])
    uow.directory.get_member_names = AsyncMock(return_value={})
    uow.directory.get_campus_names = AsyncMock(return_value={})
    return uow

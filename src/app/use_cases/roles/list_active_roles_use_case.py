"""
List Active Campus Roles Use Case
"""

from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import ActiveRolesResponse, to_role_info


class ListActiveRolesUseCase:
    """Lists a member's active role grants, optionally at one campus."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, member_id: UUID, campus_id: Optional[UUID] = None
    ) -> Result[ActiveRolesResponse]:
        async with self.uow:
            rows = await self.uow.roles.list_active(member_id, campus_id)
            return Return.ok(
                ActiveRolesResponse(
                    roles=[to_role_info(role, campus_name) for role, campus_name in rows]
                )
            )

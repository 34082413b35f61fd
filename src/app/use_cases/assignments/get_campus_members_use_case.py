"""
Get Campus Members Use Case

Lists active members of an organization's campuses.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import CampusMemberInfo, CampusMembersResponse


class GetCampusMembersUseCase:
    """
    Use case for listing active assignments by campus.

    Business Rules:
    - Only status=active assignments are listed
    - Optional campus filter must name a campus of the organization
    - Ordered by campus name, then member display name
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, organization_id: UUID, campus_id: Optional[UUID] = None
    ) -> Result[CampusMembersResponse]:
        async with self.uow:
            if campus_id is not None:
                campus = await self.uow.directory.get_campus(campus_id)
                if campus is None or campus.organization_id != organization_id:
                    return Return.err(
                        Error(
                            "CAMPUS_NOT_FOUND",
                            "Campus not found in this organization",
                            {
                                "campus_id": str(campus_id),
                                "organization_id": str(organization_id),
                            },
                        )
                    )

            rows = await self.uow.assignments.list_active_by_campus(organization_id, campus_id)

            members = [
                CampusMemberInfo(
                    assignment_id=str(assignment.id),
                    member_id=str(member.id),
                    display_name=member.display_name,
                    email=member.email,
                    campus_id=str(campus.id),
                    campus_name=campus.name,
                    is_primary=assignment.is_primary,
                    assigned_at=assignment.assigned_at.isoformat() + "Z",
                    note=assignment.note,
                )
                for assignment, member, campus in rows
            ]
            return Return.ok(CampusMembersResponse(members=members, count=len(members)))

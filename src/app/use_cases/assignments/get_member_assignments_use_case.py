"""
Get Member Assignments Use Case

Lists every campus assignment a member has held within an organization.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import AssignmentInfo, MemberAssignmentsResponse


class GetMemberAssignmentsUseCase:
    """
    Use case for listing a member's campus assignments.

    Business Rules:
    - Includes active, inactive and transferred rows
    - Ordered by primary first, then campus name
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, member_id: UUID, organization_id: UUID
    ) -> Result[MemberAssignmentsResponse]:
        async with self.uow:
            member = await self.uow.directory.get_member(member_id)
            if member is None:
                return Return.err(
                    Error("MEMBER_NOT_FOUND", "Member not found", {"member_id": str(member_id)})
                )

            rows = await self.uow.assignments.list_for_member(member_id, organization_id)

            return Return.ok(
                MemberAssignmentsResponse(
                    assignments=[
                        AssignmentInfo(
                            id=str(assignment.id),
                            campus_id=str(assignment.campus_id),
                            campus_name=campus_name,
                            is_primary=assignment.is_primary,
                            status=assignment.status.value,
                            assigned_at=assignment.assigned_at.isoformat() + "Z",
                            note=assignment.note,
                            assigned_by=_optional_str(assignment.assigned_by),
                            transferred_from_campus_id=_optional_str(
                                assignment.transferred_from_campus_id
                            ),
                        )
                        for assignment, campus_name in rows
                    ]
                )
            )


def _optional_str(value):
    return str(value) if value is not None else None

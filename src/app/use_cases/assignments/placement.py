"""
Assignment placement shared by the assign and transfer workflows.

Runs inside the caller's unit of work and member lock; never commits.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AssignmentStatus, MemberCampusAssignment

logger = logging.getLogger(__name__)


async def place_member(
    uow: UnitOfWork,
    member_id: UUID,
    campus_id: UUID,
    organization_id: UUID,
    is_primary: bool,
    assigned_by: Optional[UUID] = None,
    note: Optional[str] = None,
    transferred_from_campus_id: Optional[UUID] = None,
    transfer_reason: Optional[str] = None,
) -> Result[MemberCampusAssignment]:
    """
    Create an active assignment for (member, campus).

    A new primary assignment first clears is_primary on the member's other
    active assignments in the organization.

    Returns:
        Result with the created assignment, or Error(DUPLICATE_ASSIGNMENT)
    """
    existing = await uow.assignments.get_active(member_id, campus_id)
    if existing is not None:
        return Return.err(
            Error(
                "DUPLICATE_ASSIGNMENT",
                "Member is already assigned to this campus",
                {
                    "member_id": str(member_id),
                    "campus_id": str(campus_id),
                    "assignment_id": str(existing.id),
                },
            )
        )

    if is_primary:
        demoted = await uow.assignments.clear_primary(member_id, organization_id)
        for previous in demoted:
            logger.info(
                f"Primary campus moved: member={member_id} "
                f"from={previous.campus_id} to={campus_id}"
            )

    assignment = MemberCampusAssignment(
        member_id=member_id,
        campus_id=campus_id,
        organization_id=organization_id,
        is_primary=is_primary,
        status=AssignmentStatus.active,
        note=note,
        assigned_by=assigned_by,
        transferred_from_campus_id=transferred_from_campus_id,
        transfer_reason=transfer_reason,
    )
    assignment = await uow.assignments.create(assignment)
    return Return.ok(assignment)

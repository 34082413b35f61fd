"""
Assign Member to Campus Use Case

Places a member at a campus of their organization.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.member_lock import MemberLockTimeout
from src.app.services.unit_of_work import UnitOfWork

from .dtos import AssignMemberCommand, AssignMemberResponse
from .placement import place_member

logger = logging.getLogger(__name__)


class AssignMemberUseCase:
    """
    Use case for assigning a member to a campus.

    Business Rules:
    - Member must exist in the identity store
    - Campus must exist and belong to the organization
    - At most one active assignment per (member, campus): DUPLICATE_ASSIGNMENT
    - A primary assignment demotes the member's other active primaries
      in the same transaction
    - Runs under the member's lock
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: AssignMemberCommand) -> Result[AssignMemberResponse]:
        """
        Execute assign member use case.

        Args:
            command: AssignMemberCommand with member, campus, organization

        Returns:
            Result with AssignMemberResponse, or Error
        """
        async with self.uow:
            member = await self.uow.directory.get_member(command.member_id)
            if member is None:
                return Return.err(
                    Error(
                        "MEMBER_NOT_FOUND",
                        "Member not found",
                        {"member_id": str(command.member_id)},
                    )
                )

            campus = await self.uow.directory.get_campus(command.campus_id)
            if campus is None or campus.organization_id != command.organization_id:
                return Return.err(
                    Error(
                        "CAMPUS_NOT_FOUND",
                        "Campus not found in this organization",
                        {
                            "campus_id": str(command.campus_id),
                            "organization_id": str(command.organization_id),
                        },
                    )
                )

            try:
                async with self.uow.lock_member(command.member_id):
                    # Lock the member's current rows for the rest of the transaction
                    await self.uow.assignments.get_active_for_member(
                        command.member_id, command.organization_id, for_update=True
                    )

                    placed = await place_member(
                        self.uow,
                        member_id=command.member_id,
                        campus_id=command.campus_id,
                        organization_id=command.organization_id,
                        is_primary=command.is_primary,
                        assigned_by=command.assigned_by,
                        note=command.note,
                    )
                    if placed.is_err():
                        return placed

                    await self.uow.commit()
            except MemberLockTimeout as exc:
                return Return.err(_concurrency_conflict(command, exc.timeout))
            except IntegrityError:
                await self.uow.rollback()
                logger.warning(
                    f"Assignment rejected by storage constraint: member={command.member_id}"
                )
                return Return.err(_concurrency_conflict(command))

            assignment = placed.value
            logger.info(
                f"Member assigned: member={command.member_id} campus={command.campus_id} "
                f"primary={assignment.is_primary}"
            )
            return Return.ok(
                AssignMemberResponse(
                    assignment_id=str(assignment.id),
                    status=assignment.status.value,
                    is_primary=assignment.is_primary,
                )
            )


def _concurrency_conflict(
    command: AssignMemberCommand, timeout: Optional[float] = None
) -> Error:
    details = {
        "member_id": str(command.member_id),
        "campus_id": str(command.campus_id),
        "retryable": True,
    }
    if timeout is not None:
        details["lock_timeout_seconds"] = timeout
    return Error(
        "CONCURRENCY_CONFLICT",
        "Another change for this member is in progress, retry later",
        details,
    )

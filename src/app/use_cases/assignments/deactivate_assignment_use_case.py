"""
Deactivate Assignment Use Case

Ends a member's assignment at a campus without moving them elsewhere.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.member_lock import MemberLockTimeout
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AssignmentStatus

from .dtos import DeactivateAssignmentResponse

logger = logging.getLogger(__name__)


class DeactivateAssignmentUseCase:
    """
    Use case for deactivating a campus assignment.

    Business Rules:
    - Assignment must exist and be active
    - Status becomes inactive and the primary flag is cleared
    - Every active role grant of the member at that campus is closed in
      the same transaction
    - Runs under the member's lock
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, assignment_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[DeactivateAssignmentResponse]:
        async with self.uow:
            assignment = await self.uow.assignments.get_by_id(assignment_id)
            if assignment is None:
                return Return.err(_not_found(assignment_id))

            member_id = assignment.member_id
            try:
                async with self.uow.lock_member(member_id):
                    # Re-read under the lock; another workflow may have changed it
                    assignment = await self.uow.assignments.get_by_id(
                        assignment_id, for_update=True
                    )
                    if assignment is None:
                        return Return.err(_not_found(assignment_id))

                    if assignment.status != AssignmentStatus.active:
                        return Return.err(
                            Error(
                                "ASSIGNMENT_NOT_ACTIVE",
                                f"Assignment is already {assignment.status.value}",
                                {
                                    "assignment_id": str(assignment_id),
                                    "status": assignment.status.value,
                                },
                            )
                        )

                    now = utcnow()
                    assignment.is_primary = False
                    await self.uow.assignments.deactivate(
                        assignment, AssignmentStatus.inactive
                    )
                    closed = await self.uow.roles.close_roles(
                        member_id, assignment.campus_id, now
                    )

                    await self.uow.commit()
            except MemberLockTimeout as exc:
                return Return.err(
                    Error(
                        "CONCURRENCY_CONFLICT",
                        "Another change for this member is in progress, retry later",
                        {
                            "member_id": str(member_id),
                            "assignment_id": str(assignment_id),
                            "lock_timeout_seconds": exc.timeout,
                            "retryable": True,
                        },
                    )
                )

            logger.info(
                f"Assignment deactivated: assignment={assignment_id} "
                f"member={member_id} closed_roles={len(closed)} actor={actor_id}"
            )
            return Return.ok(
                DeactivateAssignmentResponse(
                    assignment_id=str(assignment_id),
                    status=AssignmentStatus.inactive.value,
                    closed_role_ids=[str(role.id) for role in closed],
                )
            )


def _not_found(assignment_id: UUID) -> Error:
    return Error(
        "ASSIGNMENT_NOT_FOUND",
        "Assignment not found",
        {"assignment_id": str(assignment_id)},
    )

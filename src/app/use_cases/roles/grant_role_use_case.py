"""
Grant Campus Role Use Case

Gives a member a campus-scoped role.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.member_lock import MemberLockTimeout
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import CampusMemberRole

from .dtos import GrantRoleCommand, RoleInfo, to_role_info

logger = logging.getLogger(__name__)


class GrantRoleUseCase:
    """
    Use case for granting a campus role.

    Business Rules:
    - Campus must exist
    - Member must hold an active assignment at that campus
    - Permission tags must be non-empty strings, kept in the given order
      with duplicates dropped
    - Runs under the member's lock so a concurrent transfer cannot close
      the assignment between the check and the insert
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: GrantRoleCommand) -> Result[RoleInfo]:
        title = command.title.strip()
        if not title:
            return Return.err(Error("VALIDATION_ERROR", "Role title must not be blank"))

        permissions = []
        for tag in command.permissions:
            tag = tag.strip()
            if not tag:
                return Return.err(
                    Error("VALIDATION_ERROR", "Permission tags must not be blank")
                )
            if tag not in permissions:
                permissions.append(tag)

        async with self.uow:
            campus = await self.uow.directory.get_campus(command.campus_id)
            if campus is None:
                return Return.err(
                    Error(
                        "CAMPUS_NOT_FOUND",
                        "Campus not found",
                        {"campus_id": str(command.campus_id)},
                    )
                )

            try:
                async with self.uow.lock_member(command.member_id):
                    assignment = await self.uow.assignments.get_active(
                        command.member_id, command.campus_id
                    )
                    if assignment is None:
                        return Return.err(
                            Error(
                                "NOT_ASSIGNED_TO_CAMPUS",
                                "Member has no active assignment at this campus",
                                {
                                    "member_id": str(command.member_id),
                                    "campus_id": str(command.campus_id),
                                },
                            )
                        )

                    role = CampusMemberRole(
                        member_id=command.member_id,
                        campus_id=command.campus_id,
                        organization_id=campus.organization_id,
                        title=title,
                        description=command.description,
                        permissions=permissions,
                        is_active=True,
                        assigned_by=command.assigned_by,
                    )
                    role = await self.uow.roles.create(role)

                    await self.uow.commit()
            except MemberLockTimeout as exc:
                return Return.err(
                    Error(
                        "CONCURRENCY_CONFLICT",
                        "Another change for this member is in progress, retry later",
                        {
                            "member_id": str(command.member_id),
                            "campus_id": str(command.campus_id),
                            "lock_timeout_seconds": exc.timeout,
                            "retryable": True,
                        },
                    )
                )

            logger.info(
                f"Campus role granted: member={command.member_id} "
                f"campus={command.campus_id} title={title!r}"
            )
            return Return.ok(to_role_info(role, campus.name))

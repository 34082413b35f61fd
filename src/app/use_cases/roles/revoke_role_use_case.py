"""
Revoke Campus Role Use Case

Closes a single role grant ahead of any transfer.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.member_lock import MemberLockTimeout
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

from .dtos import RoleInfo, to_role_info

logger = logging.getLogger(__name__)


class RevokeRoleUseCase:
    """
    Use case for revoking a campus role.

    Business Rules:
    - Role grant must exist: ROLE_NOT_FOUND
    - Closed grants cannot be revoked again: ROLE_ALREADY_CLOSED
    - Revocation sets is_active=False and end_date=now
    - Runs under the member's lock; the grant is re-read under the lock so
      a role closed by a concurrent transfer keeps its transfer end_date
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: UUID, actor_id: Optional[UUID] = None) -> Result[RoleInfo]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(_not_found(role_id))

            member_id = role.member_id
            try:
                async with self.uow.lock_member(member_id):
                    role = await self.uow.roles.get_by_id(role_id, for_update=True)
                    if role is None:
                        return Return.err(_not_found(role_id))

                    if not role.is_active:
                        return Return.err(
                            Error(
                                "ROLE_ALREADY_CLOSED",
                                "Role grant is already closed",
                                {"role_id": str(role_id)},
                            )
                        )

                    now = utcnow()
                    role.is_active = False
                    role.end_date = now
                    role.updated_at = now
                    role = await self.uow.roles.update(role)

                    await self.uow.commit()
            except MemberLockTimeout as exc:
                return Return.err(
                    Error(
                        "CONCURRENCY_CONFLICT",
                        "Another change for this member is in progress, retry later",
                        {
                            "member_id": str(member_id),
                            "role_id": str(role_id),
                            "lock_timeout_seconds": exc.timeout,
                            "retryable": True,
                        },
                    )
                )

            logger.info(f"Campus role revoked: role={role_id} actor={actor_id}")
            return Return.ok(to_role_info(role))


def _not_found(role_id: UUID) -> Error:
    return Error("ROLE_NOT_FOUND", "Role grant not found", {"role_id": str(role_id)})

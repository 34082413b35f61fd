"""
Transfer Member Use Case

Moves a member's active assignment from one campus to another.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.member_lock import MemberLockTimeout
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.assignments.placement import place_member
from src.domain.base import utcnow
from src.domain.entities import (
    AssignmentStatus,
    MemberCampusAssignment,
    MemberTransferHistory,
    TransferStatus,
)
from src.domain.errors import InvalidSnapshotError
from src.domain.role_snapshot import build_role_snapshot

from .dtos import TransferMemberCommand, TransferMemberResponse

logger = logging.getLogger(__name__)


class TransferMemberUseCase:
    """
    Use case for transferring a member between campuses.

    States: Requested -> Validated -> Applied -> Recorded, or
    Requested -> Rejected when a precondition fails.

    Preconditions (checked under the member lock, before any write):
    - Active assignment at the source campus: SOURCE_ASSIGNMENT_NOT_FOUND,
      or CONCURRENCY_CONFLICT when the lock wait let another change for
      the member commit first
    - Source and destination differ: NO_OP_TRANSFER
    - No active assignment at the destination: DESTINATION_ALREADY_ASSIGNED
    - Destination is a campus of the organization: CAMPUS_NOT_FOUND

    Applied in one transaction:
    1. Snapshot the active role grants at the source campus
    2. Source assignment -> transferred
    3. Close the source role grants (roles never follow the member)
    4. Destination assignment, carrying is_primary and transferred_from
    5. Completed ledger record holding the snapshot

    Any failure after validation rolls the whole transaction back, so the
    ledger only ever contains completed transfers. Assignments at other
    campuses are left untouched.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: TransferMemberCommand) -> Result[TransferMemberResponse]:
        """
        Execute transfer member use case.

        Args:
            command: TransferMemberCommand

        Returns:
            Result with TransferMemberResponse, or Error
        """
        async with self.uow:
            try:
                async with self.uow.lock_member(command.member_id) as waited:
                    source, rejection = await self._validate(command, waited)
                    if rejection is not None:
                        logger.info(
                            f"Transfer rejected: member={command.member_id} "
                            f"code={rejection.code}"
                        )
                        return Return.err(rejection)

                    return await self._apply(command, source)
            except MemberLockTimeout as exc:
                logger.warning(f"Transfer lock timeout: member={command.member_id}")
                return Return.err(self._conflict(command, exc.timeout))

    async def _validate(
        self, command: TransferMemberCommand, waited: bool = False
    ) -> Tuple[Optional[MemberCampusAssignment], Optional[Error]]:
        details = {
            "member_id": str(command.member_id),
            "from_campus_id": str(command.from_campus_id),
            "to_campus_id": str(command.to_campus_id),
        }

        active = await self.uow.assignments.get_active_for_member(
            command.member_id, command.organization_id, for_update=True
        )
        by_campus = {assignment.campus_id: assignment for assignment in active}

        source = by_campus.get(command.from_campus_id)
        if source is None and waited:
            # A transfer committed while this one waited for the lock
            return None, self._conflict(command)
        if source is None:
            return None, Error(
                "SOURCE_ASSIGNMENT_NOT_FOUND",
                "Member has no active assignment at the source campus",
                details,
            )

        if command.from_campus_id == command.to_campus_id:
            return None, Error(
                "NO_OP_TRANSFER",
                "Source and destination campus are the same",
                details,
            )

        if command.to_campus_id in by_campus:
            return None, Error(
                "DESTINATION_ALREADY_ASSIGNED",
                "Member is already assigned to the destination campus",
                details,
            )

        destination = await self.uow.directory.get_campus(command.to_campus_id)
        if destination is None or destination.organization_id != command.organization_id:
            return None, Error(
                "CAMPUS_NOT_FOUND",
                "Destination campus not found in this organization",
                {**details, "organization_id": str(command.organization_id)},
            )

        return source, None

    async def _apply(
        self, command: TransferMemberCommand, source: MemberCampusAssignment
    ) -> Result[TransferMemberResponse]:
        now = utcnow()

        try:
            source_roles = await self.uow.roles.get_active_for_campus(
                command.member_id, command.from_campus_id
            )
            snapshot = build_role_snapshot(source_roles)

            await self.uow.assignments.deactivate(source, AssignmentStatus.transferred)
            closed = await self.uow.roles.close_roles(
                command.member_id, command.from_campus_id, now
            )

            placed = await place_member(
                self.uow,
                member_id=command.member_id,
                campus_id=command.to_campus_id,
                organization_id=command.organization_id,
                is_primary=source.is_primary,
                assigned_by=command.approved_by or command.requested_by,
                note=command.note,
                transferred_from_campus_id=command.from_campus_id,
                transfer_reason=command.reason,
            )
            if placed.is_err():
                await self.uow.rollback()
                return placed

            record = await self.uow.transfer_ledger.record(
                MemberTransferHistory(
                    member_id=command.member_id,
                    from_campus_id=command.from_campus_id,
                    to_campus_id=command.to_campus_id,
                    organization_id=command.organization_id,
                    reason=command.reason,
                    transfer_type=command.transfer_type,
                    requested_by=command.requested_by,
                    approved_by=command.approved_by,
                    role_snapshot=snapshot,
                    note=command.note,
                    status=TransferStatus.completed,
                    transferred_at=now,
                )
            )

            await self.uow.commit()
        except InvalidSnapshotError as exc:
            await self.uow.rollback()
            logger.error(f"Transfer aborted, bad role snapshot: member={command.member_id}")
            return Return.err(
                Error(
                    "INVALID_SNAPSHOT",
                    exc.message,
                    {
                        "member_id": str(command.member_id),
                        "from_campus_id": str(command.from_campus_id),
                    },
                )
            )
        except IntegrityError:
            await self.uow.rollback()
            logger.warning(
                f"Transfer rejected by storage constraint: member={command.member_id}"
            )
            return Return.err(self._conflict(command))

        new_assignment = placed.value
        logger.info(
            f"Member transferred: member={command.member_id} "
            f"from={command.from_campus_id} to={command.to_campus_id} "
            f"closed_roles={len(closed)} history={record.id}"
        )
        return Return.ok(
            TransferMemberResponse(
                new_assignment_id=str(new_assignment.id),
                history_record_id=str(record.id),
                is_primary=new_assignment.is_primary,
                closed_roles=snapshot,
            )
        )

    @staticmethod
    def _conflict(command: TransferMemberCommand, timeout: Optional[float] = None) -> Error:
        details = {
            "member_id": str(command.member_id),
            "from_campus_id": str(command.from_campus_id),
            "to_campus_id": str(command.to_campus_id),
            "retryable": True,
        }
        if timeout is not None:
            details["lock_timeout_seconds"] = timeout
        return Error(
            "CONCURRENCY_CONFLICT",
            "Another change for this member is in progress, retry later",
            details,
        )

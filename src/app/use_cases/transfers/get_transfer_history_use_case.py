"""
Get Transfer History Use Case

Reads the transfer ledger, newest first.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import TransferHistoryEntry, TransferHistoryResponse


class GetTransferHistoryUseCase:
    """
    Use case for querying the transfer ledger.

    Business Rules:
    - Optional filters by member and organization
    - limit must be between 1 and max_limit
    - Entries carry member and campus display names when known
    """

    def __init__(self, uow: UnitOfWork, max_limit: int = 200):
        self.uow = uow
        self.max_limit = max_limit

    async def execute(
        self,
        member_id: Optional[UUID] = None,
        organization_id: Optional[UUID] = None,
        limit: int = 50,
    ) -> Result[TransferHistoryResponse]:
        if limit < 1 or limit > self.max_limit:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"limit must be between 1 and {self.max_limit}",
                    {"limit": limit},
                )
            )

        async with self.uow:
            records = await self.uow.transfer_ledger.query(
                member_id=member_id, organization_id=organization_id, limit=limit
            )

            member_names = await self.uow.directory.get_member_names(
                record.member_id for record in records
            )
            campus_names = await self.uow.directory.get_campus_names(
                campus_id
                for record in records
                for campus_id in (record.from_campus_id, record.to_campus_id)
            )

            history = [
                TransferHistoryEntry(
                    id=str(record.id),
                    member_id=str(record.member_id),
                    member_name=member_names.get(record.member_id),
                    from_campus_id=str(record.from_campus_id),
                    from_campus_name=campus_names.get(record.from_campus_id),
                    to_campus_id=str(record.to_campus_id),
                    to_campus_name=campus_names.get(record.to_campus_id),
                    organization_id=str(record.organization_id),
                    reason=record.reason,
                    transfer_type=record.transfer_type.value,
                    requested_by=str(record.requested_by) if record.requested_by else None,
                    approved_by=str(record.approved_by) if record.approved_by else None,
                    role_snapshot=list(record.role_snapshot or []),
                    note=record.note,
                    status=record.status.value,
                    transferred_at=record.transferred_at.isoformat() + "Z",
                )
                for record in records
            ]
            return Return.ok(TransferHistoryResponse(history=history, count=len(history)))

from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.transfer_ledger_repository import ITransferLedgerRepository
from src.domain.entities import MemberTransferHistory
from src.domain.role_snapshot import validate_role_snapshot


class TransferLedgerRepository(ITransferLedgerRepository):
    """Transfer ledger implementation using SQLModel (append-only)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record(self, entry: MemberTransferHistory) -> MemberTransferHistory:
        """Append one history record (immutable once completed)"""
        validate_role_snapshot(entry.role_snapshot)

        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def query(
        self,
        member_id: Optional[UUID] = None,
        organization_id: Optional[UUID] = None,
        limit: int = 50,
    ) -> List[MemberTransferHistory]:
        """Get history records, newest first"""
        stmt = select(MemberTransferHistory)
        if member_id is not None:
            stmt = stmt.where(MemberTransferHistory.member_id == member_id)
        if organization_id is not None:
            stmt = stmt.where(MemberTransferHistory.organization_id == organization_id)

        stmt = stmt.order_by(MemberTransferHistory.transferred_at.desc()).limit(limit)

        result = await self.session.exec(stmt)
        return list(result.all())

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import MemberTransferHistory


class ITransferLedgerRepository(ABC):
    """
    Transfer ledger interface - application layer

    Append-only: there is deliberately no update or delete.
    """

    @abstractmethod
    async def record(self, entry: MemberTransferHistory) -> MemberTransferHistory:
        """Append one history record; raises InvalidSnapshotError on a bad snapshot"""
        pass

    @abstractmethod
    async def query(
        self,
        member_id: Optional[UUID] = None,
        organization_id: Optional[UUID] = None,
        limit: int = 50,
    ) -> List[MemberTransferHistory]:
        """Get history records, newest first"""
        pass

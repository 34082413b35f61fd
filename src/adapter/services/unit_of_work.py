from typing import AsyncContextManager, Optional
from uuid import UUID

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.assignment_repository import AssignmentRepository
from src.adapter.repositories.directory_repository import DirectoryRepository
from src.adapter.repositories.role_repository import RoleRepository
from src.adapter.repositories.transfer_ledger_repository import TransferLedgerRepository
from src.app.services.member_lock import MemberLockRegistry, member_locks
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(
        self, session: AsyncSession, locks: Optional[MemberLockRegistry] = None
    ):
        self.session = session
        self.locks = locks or member_locks

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.assignments = AssignmentRepository(self.session)
        self.roles = RoleRepository(self.session)
        self.transfer_ledger = TransferLedgerRepository(self.session)
        self.directory = DirectoryRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    def lock_member(self, member_id: UUID) -> AsyncContextManager[bool]:
        return self.locks.hold(member_id)

from abc import ABC, abstractmethod
from typing import AsyncContextManager
from uuid import UUID

from src.app.repositories.assignment_repository import IAssignmentRepository
from src.app.repositories.directory_repository import IDirectoryRepository
from src.app.repositories.role_repository import IRoleRepository
from src.app.repositories.transfer_ledger_repository import ITransferLedgerRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    assignments: IAssignmentRepository
    roles: IRoleRepository
    transfer_ledger: ITransferLedgerRepository
    directory: IDirectoryRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    def lock_member(self, member_id: UUID) -> AsyncContextManager[bool]:
        """
        Serialize work on one member until the block exits.

        The context value is True when the caller had to wait behind
        another holder of the same member's lock.

        Raises:
            MemberLockTimeout: lock not acquired within the bounded wait
        """
        pass

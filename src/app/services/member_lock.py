"""
Per-member mutual exclusion.

Every workflow that mutates a member's assignments or roles holds the
member's lock until its transaction commits or rolls back, so two requests
for the same member cannot both pass their precondition checks.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict
from uuid import UUID

logger = logging.getLogger(__name__)


class MemberLockTimeout(Exception):
    """The member lock could not be acquired within the bounded wait"""

    def __init__(self, member_id: UUID, timeout: float):
        self.member_id = member_id
        self.timeout = timeout
        super().__init__(f"Timed out after {timeout}s waiting for member {member_id}")


class MemberLockRegistry:
    """asyncio locks keyed by member ID, dropped once nobody holds or waits"""

    def __init__(self, timeout: float = 5.0):
        self.timeout = timeout
        self._locks: Dict[UUID, asyncio.Lock] = {}
        self._users: Dict[UUID, int] = {}

    def is_locked(self, member_id: UUID) -> bool:
        lock = self._locks.get(member_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, member_id: UUID) -> AsyncIterator[bool]:
        """
        Hold the member's lock for the block.

        Yields True when another holder or waiter was ahead of this caller.
        """
        lock = self._locks.setdefault(member_id, asyncio.Lock())
        contended = self._users.get(member_id, 0) > 0
        self._users[member_id] = self._users.get(member_id, 0) + 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Member lock wait expired: member={member_id}")
                raise MemberLockTimeout(member_id, self.timeout)
            try:
                yield contended
            finally:
                lock.release()
        finally:
            self._users[member_id] -= 1
            if self._users[member_id] == 0:
                del self._users[member_id]
                self._locks.pop(member_id, None)


# Process-wide registry used by request-scoped units of work
member_locks = MemberLockRegistry()

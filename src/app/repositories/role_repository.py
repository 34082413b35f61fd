from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import CampusMemberRole


class IRoleRepository(ABC):
    """Role store interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, role_id: UUID, for_update: bool = False
    ) -> Optional[CampusMemberRole]:
        """Get role grant by ID, optionally locking the row"""
        pass

    @abstractmethod
    async def create(self, role: CampusMemberRole) -> CampusMemberRole:
        """Create a new role grant"""
        pass

    @abstractmethod
    async def update(self, role: CampusMemberRole) -> CampusMemberRole:
        """Update existing role grant"""
        pass

    @abstractmethod
    async def get_active_for_campus(
        self, member_id: UUID, campus_id: UUID
    ) -> List[CampusMemberRole]:
        """Get active role grants of a member at one campus"""
        pass

    @abstractmethod
    async def list_active(
        self, member_id: UUID, campus_id: Optional[UUID] = None
    ) -> List[Tuple[CampusMemberRole, str]]:
        """Get active role grants with campus name, ordered by campus name then title"""
        pass

    @abstractmethod
    async def close_roles(
        self, member_id: UUID, campus_id: UUID, at: datetime
    ) -> List[CampusMemberRole]:
        """
        Close every active grant for (member, campus).

        Idempotent: a second call with no new grants returns an empty list.
        """
        pass

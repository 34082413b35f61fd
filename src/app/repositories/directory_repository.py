from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from src.domain.entities import Campus, Member


class IDirectoryRepository(ABC):
    """Read-only access to member identities and the campus directory"""

    @abstractmethod
    async def get_member(self, member_id: UUID) -> Optional[Member]:
        """Get member by ID"""
        pass

    @abstractmethod
    async def get_campus(self, campus_id: UUID) -> Optional[Campus]:
        """Get campus by ID"""
        pass

    @abstractmethod
    async def list_campuses(
        self, organization_id: UUID, campus_id: Optional[UUID] = None
    ) -> List[Campus]:
        """Get campuses of an organization ordered by name"""
        pass

    @abstractmethod
    async def get_member_names(self, member_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """Map member IDs to display names"""
        pass

    @abstractmethod
    async def get_campus_names(self, campus_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """Map campus IDs to names"""
        pass

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from src.domain.entities import (
    AssignmentStatus,
    Campus,
    Member,
    MemberCampusAssignment,
)


class IAssignmentRepository(ABC):
    """Assignment store interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, assignment_id: UUID, for_update: bool = False
    ) -> Optional[MemberCampusAssignment]:
        """Get assignment by ID, optionally locking the row"""
        pass

    @abstractmethod
    async def get_active(
        self, member_id: UUID, campus_id: UUID
    ) -> Optional[MemberCampusAssignment]:
        """Get the active assignment for (member, campus)"""
        pass

    @abstractmethod
    async def get_active_for_member(
        self, member_id: UUID, organization_id: UUID, for_update: bool = False
    ) -> List[MemberCampusAssignment]:
        """Get all active assignments of a member within an organization"""
        pass

    @abstractmethod
    async def list_for_member(
        self, member_id: UUID, organization_id: UUID
    ) -> List[Tuple[MemberCampusAssignment, str]]:
        """
        Get every assignment (any status) of a member within an organization.

        Returns:
            (assignment, campus name) pairs ordered by is_primary DESC,
            campus name ASC
        """
        pass

    @abstractmethod
    async def list_active_by_campus(
        self, organization_id: UUID, campus_id: Optional[UUID] = None
    ) -> List[Tuple[MemberCampusAssignment, Member, Campus]]:
        """Get active assignments of an organization, optionally for one campus"""
        pass

    @abstractmethod
    async def create(self, assignment: MemberCampusAssignment) -> MemberCampusAssignment:
        """Create a new assignment"""
        pass

    @abstractmethod
    async def clear_primary(
        self, member_id: UUID, organization_id: UUID
    ) -> List[MemberCampusAssignment]:
        """Unset is_primary on every active assignment of the member; returns changed rows"""
        pass

    @abstractmethod
    async def deactivate(
        self, assignment: MemberCampusAssignment, new_status: AssignmentStatus
    ) -> MemberCampusAssignment:
        """Move an active assignment to inactive or transferred"""
        pass

    @abstractmethod
    async def count_by_campus(
        self, organization_id: UUID, since: datetime, campus_id: Optional[UUID] = None
    ) -> Dict[UUID, Dict[str, Any]]:
        """
        Aggregate assignment counts per campus.

        Returns:
            campus_id -> {active_members, inactive_members, primary_members,
            recent_joins}
        """
        pass

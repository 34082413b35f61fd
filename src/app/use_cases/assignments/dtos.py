"""
Assignment Use Case DTOs (Data Transfer Objects)

Command and Response classes for the assignment store.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class AssignMemberCommand(BaseModel):
    """Validated intent to place a member at a campus"""

    member_id: UUID
    campus_id: UUID
    organization_id: UUID
    is_primary: bool = False
    note: Optional[str] = None
    assigned_by: Optional[UUID] = None


# ============================================================================
# Response DTOs
# ============================================================================


class AssignMemberResponse(BaseModel):
    """Response for assign member use case"""

    assignment_id: str
    status: str
    is_primary: bool


class AssignmentInfo(BaseModel):
    """One assignment of a member, as listed for that member"""

    id: str
    campus_id: str
    campus_name: str
    is_primary: bool
    status: str
    assigned_at: str
    note: Optional[str]
    assigned_by: Optional[str]
    transferred_from_campus_id: Optional[str]


class MemberAssignmentsResponse(BaseModel):
    """Response for get member assignments use case"""

    assignments: List[AssignmentInfo]


class CampusMemberInfo(BaseModel):
    """One active member of a campus"""

    assignment_id: str
    member_id: str
    display_name: str
    email: str
    campus_id: str
    campus_name: str
    is_primary: bool
    assigned_at: str
    note: Optional[str]


class CampusMembersResponse(BaseModel):
    """Response for get campus members use case"""

    members: List[CampusMemberInfo]
    count: int


class DeactivateAssignmentResponse(BaseModel):
    """Response for deactivate assignment use case"""

    assignment_id: str
    status: str
    closed_role_ids: List[str]

"""
Campus Role Use Case DTOs (Data Transfer Objects)

Command and Response classes for the role store.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class GrantRoleCommand(BaseModel):
    """Validated intent to grant a campus-scoped role"""

    member_id: UUID
    campus_id: UUID
    title: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    permissions: List[str] = Field(default_factory=list)
    assigned_by: Optional[UUID] = None


class RoleInfo(BaseModel):
    """One role grant"""

    id: str
    member_id: str
    campus_id: str
    campus_name: Optional[str] = None
    title: str
    description: Optional[str]
    permissions: List[str]
    start_date: str
    end_date: Optional[str]
    is_active: bool
    assigned_by: Optional[str]


class ActiveRolesResponse(BaseModel):
    """Response for list active roles use case"""

    roles: List[RoleInfo]


def to_role_info(role, campus_name: Optional[str] = None) -> RoleInfo:
    return RoleInfo(
        id=str(role.id),
        member_id=str(role.member_id),
        campus_id=str(role.campus_id),
        campus_name=campus_name,
        title=role.title,
        description=role.description,
        permissions=list(role.permissions or []),
        start_date=role.start_date.isoformat() + "Z",
        end_date=role.end_date.isoformat() + "Z" if role.end_date else None,
        is_active=role.is_active,
        assigned_by=str(role.assigned_by) if role.assigned_by else None,
    )

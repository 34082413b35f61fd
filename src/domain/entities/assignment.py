"""
MemberCampusAssignment Entity

Links a Member to a Campus within an organization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import AssignmentStatus


class MemberCampusAssignment(SQLModel, table=True):
    """
    MemberCampusAssignment entity - places a member at a campus.

    Business Rules:
    - At most one active primary assignment per (member, organization)
    - At most one active assignment per (member, campus)
    - Becomes transferred only through a transfer
    - Never deleted; inactive/transferred rows are kept as history
    """

    __tablename__ = "member_campus_assignments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    member_id: UUID = Field(foreign_key="members.id", nullable=False, index=True)
    campus_id: UUID = Field(foreign_key="campuses.id", nullable=False, index=True)
    organization_id: UUID = Field(nullable=False, index=True)

    is_primary: bool = Field(default=False)
    status: AssignmentStatus = Field(default=AssignmentStatus.active)

    note: Optional[str] = Field(default=None, max_length=2000)
    assigned_by: Optional[UUID] = Field(default=None)
    transferred_from_campus_id: Optional[UUID] = Field(
        default=None, foreign_key="campuses.id"
    )
    transfer_reason: Optional[str] = Field(default=None, max_length=2000)

    # Timestamps
    assigned_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_assignment_member_campus_active",
            "member_id",
            "campus_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
        Index(
            "uq_assignment_member_org_primary",
            "member_id",
            "organization_id",
            unique=True,
            sqlite_where=text("status = 'active' AND is_primary = 1"),
            postgresql_where=text("status = 'active' AND is_primary = true"),
        ),
        Index("idx_assignment_org_campus_status", "organization_id", "campus_id", "status"),
    )

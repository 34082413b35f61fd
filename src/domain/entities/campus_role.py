"""
CampusMemberRole Entity

Campus-scoped responsibility held by a member.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class CampusMemberRole(SQLModel, table=True):
    """
    CampusMemberRole entity - a role grant at one campus.

    Business Rules:
    - An active grant requires an active assignment at the same campus
    - Closed (is_active=False, end_date set) on transfer or revocation
    - Permissions are an ordered list of capability tags
    """

    __tablename__ = "campus_member_roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    member_id: UUID = Field(foreign_key="members.id", nullable=False, index=True)
    campus_id: UUID = Field(foreign_key="campuses.id", nullable=False, index=True)
    organization_id: UUID = Field(nullable=False, index=True)

    title: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    permissions: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    is_active: bool = Field(default=True)
    assigned_by: Optional[UUID] = Field(default=None)

    # Validity window
    start_date: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    end_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_role_member_campus_active", "member_id", "campus_id", "is_active"),
    )

"""
Campus Entity

Read-only reference to the campus directory.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Campus(SQLModel, table=True):
    """
    Campus entity - one site of a multi-campus organization.

    Business Rules:
    - A campus belongs to exactly one organization
    - Owned by the campus directory; this service only looks campuses up
    """

    __tablename__ = "campuses"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(nullable=False, index=True)
    name: str = Field(max_length=200)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_campus_org_name", "organization_id", "name"),)

"""
Member Entity

Read-only reference to the identity store.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Member(SQLModel, table=True):
    """
    Member entity - identity of a person belonging to an organization.

    Owned by the identity store; this service only looks members up.
    """

    __tablename__ = "members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    display_name: str = Field(max_length=200)
    email: str = Field(max_length=255, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

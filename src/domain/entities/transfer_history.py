"""
MemberTransferHistory Entity

Append-only ledger of completed campus transfers.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import DDL, event, inspect
from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from src.domain.errors import LedgerImmutableError

from .enums import TransferStatus, TransferType


class MemberTransferHistory(SQLModel, table=True):
    """
    MemberTransferHistory entity - one completed transfer.

    Business Rules:
    - Written in the same transaction as the assignment/role changes
    - Immutable once completed (never updated or deleted)
    - role_snapshot is a copy of the grants closed at the source campus
    - Failed attempts are rolled back and leave no record
    """

    __tablename__ = "member_transfer_history"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    member_id: UUID = Field(foreign_key="members.id", nullable=False, index=True)
    from_campus_id: UUID = Field(foreign_key="campuses.id", nullable=False)
    to_campus_id: UUID = Field(foreign_key="campuses.id", nullable=False)
    organization_id: UUID = Field(nullable=False, index=True)

    reason: Optional[str] = Field(default=None, max_length=2000)
    transfer_type: TransferType = Field(default=TransferType.manual)
    requested_by: Optional[UUID] = Field(default=None)
    approved_by: Optional[UUID] = Field(default=None)

    role_snapshot: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    note: Optional[str] = Field(default=None, max_length=2000)
    status: TransferStatus = Field(default=TransferStatus.completed)

    # Timestamps
    transferred_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )

    __table_args__ = (
        Index("idx_transfer_member_date", "member_id", "transferred_at"),
        Index("idx_transfer_org_date", "organization_id", "transferred_at"),
    )


@event.listens_for(MemberTransferHistory, "before_update")
def reject_completed_update(mapper, connection, target):
    """Completed ledger rows cannot be changed through the ORM."""
    history = inspect(target).attrs.status.history
    previous = history.deleted[0] if history.deleted else target.status
    if previous == TransferStatus.completed:
        raise LedgerImmutableError(target.id)


@event.listens_for(MemberTransferHistory, "before_delete")
def reject_completed_delete(mapper, connection, target):
    """Completed ledger rows cannot be deleted through the ORM."""
    if target.status == TransferStatus.completed:
        raise LedgerImmutableError(target.id)


# Storage-level guards for writers that bypass the ORM
_table = MemberTransferHistory.__table__

for _operation in ("UPDATE", "DELETE"):
    event.listen(
        _table,
        "after_create",
        DDL(
            f"CREATE TRIGGER trg_transfer_history_no_{_operation.lower()} "
            f"BEFORE {_operation} ON member_transfer_history "
            "WHEN OLD.status = 'completed' "
            "BEGIN SELECT RAISE(ABORT, 'member_transfer_history is append-only'); END"
        ).execute_if(dialect="sqlite"),
    )

event.listen(
    _table,
    "after_create",
    DDL(
        "CREATE OR REPLACE FUNCTION reject_completed_transfer_change() "
        "RETURNS trigger AS $$ BEGIN "
        "IF OLD.status = 'completed' THEN "
        "RAISE EXCEPTION 'member_transfer_history is append-only'; "
        "END IF; "
        "IF TG_OP = 'DELETE' THEN RETURN OLD; END IF; "
        "RETURN NEW; "
        "END; $$ LANGUAGE plpgsql"
    ).execute_if(dialect="postgresql"),
)
event.listen(
    _table,
    "after_create",
    DDL(
        "CREATE TRIGGER trg_transfer_history_append_only "
        "BEFORE UPDATE OR DELETE ON member_transfer_history "
        "FOR EACH ROW EXECUTE FUNCTION reject_completed_transfer_change()"
    ).execute_if(dialect="postgresql"),
)

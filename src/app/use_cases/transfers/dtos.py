"""
Transfer Use Case DTOs (Data Transfer Objects)

Command and Response classes for the transfer orchestrator and ledger.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import TransferType


# ============================================================================
# Command DTOs
# ============================================================================


class TransferMemberCommand(BaseModel):
    """
    Transfer command - validated intent to move a member between campuses

    requested_by/approved_by are actor IDs supplied by the caller; the
    authorization decision has already been made upstream.
    """

    member_id: UUID
    from_campus_id: UUID
    to_campus_id: UUID
    organization_id: UUID
    reason: Optional[str] = None
    note: Optional[str] = None
    transfer_type: TransferType = TransferType.manual
    requested_by: Optional[UUID] = None
    approved_by: Optional[UUID] = None


# ============================================================================
# Response DTOs
# ============================================================================


class TransferMemberResponse(BaseModel):
    """Response for transfer member use case"""

    new_assignment_id: str
    history_record_id: str
    is_primary: bool
    closed_roles: List[Dict[str, Any]]


class TransferHistoryEntry(BaseModel):
    """One ledger record, enriched with display names"""

    id: str
    member_id: str
    member_name: Optional[str]
    from_campus_id: str
    from_campus_name: Optional[str]
    to_campus_id: str
    to_campus_name: Optional[str]
    organization_id: str
    reason: Optional[str]
    transfer_type: str
    requested_by: Optional[str]
    approved_by: Optional[str]
    role_snapshot: List[Dict[str, Any]]
    note: Optional[str]
    status: str
    transferred_at: str


class TransferHistoryResponse(BaseModel):
    """Response for get transfer history use case"""

    history: List[TransferHistoryEntry]
    count: int

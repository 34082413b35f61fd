"""
Role Snapshot

Immutable copy of the role grants a member held at the source campus when
a transfer happened. Stored as plain JSON on the transfer history record so
later changes to the live grants never leak into the ledger.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from src.domain.errors import InvalidSnapshotError


class RoleSnapshotItem(BaseModel):
    """One closed role grant as recorded in the ledger"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role_id: UUID
    campus_id: UUID
    title: StrictStr = Field(min_length=1)
    description: Optional[str] = None
    permissions: List[StrictStr]
    start_date: Optional[datetime] = None
    assigned_by: Optional[UUID] = None


def build_role_snapshot(roles: Iterable[Any]) -> List[Dict[str, Any]]:
    """Copy role grants into JSON-ready snapshot items"""
    snapshot = []
    for role in roles:
        try:
            item = RoleSnapshotItem(
                role_id=role.id,
                campus_id=role.campus_id,
                title=role.title,
                description=role.description,
                permissions=list(role.permissions or []),
                start_date=role.start_date,
                assigned_by=role.assigned_by,
            )
        except ValidationError as exc:
            raise InvalidSnapshotError(f"Role {role.id} cannot be snapshotted: {exc}")
        snapshot.append(item.model_dump(mode="json"))
    return snapshot


def validate_role_snapshot(snapshot: Any) -> List[RoleSnapshotItem]:
    """
    Check a stored snapshot before it is appended to the ledger.

    Raises:
        InvalidSnapshotError: snapshot is not a list of well-formed items,
            or lists the same role twice
    """
    if not isinstance(snapshot, list):
        raise InvalidSnapshotError("Role snapshot must be a list")

    items = []
    seen = set()
    for index, raw in enumerate(snapshot):
        if not isinstance(raw, dict):
            raise InvalidSnapshotError(f"Role snapshot item {index} must be an object")
        try:
            item = RoleSnapshotItem.model_validate(raw)
        except ValidationError as exc:
            raise InvalidSnapshotError(f"Role snapshot item {index} is invalid: {exc}")
        if item.role_id in seen:
            raise InvalidSnapshotError(f"Role {item.role_id} appears twice in snapshot")
        seen.add(item.role_id)
        items.append(item)
    return items

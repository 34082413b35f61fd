"""
Use Cases

Organized into domain folders:
- assignments/: Assignment store workflows
- roles/: Campus role grants
- transfers/: Transfer orchestrator and ledger queries
- analytics/: Campus membership rollups

Import from subdirectories for better organization.
"""

from .analytics import GetCampusStatsUseCase
from .assignments import (
    AssignMemberUseCase,
    DeactivateAssignmentUseCase,
    GetCampusMembersUseCase,
    GetMemberAssignmentsUseCase,
)
from .roles import GrantRoleUseCase, ListActiveRolesUseCase, RevokeRoleUseCase
from .transfers import GetTransferHistoryUseCase, TransferMemberUseCase

__all__ = [
    # Assignments
    "AssignMemberUseCase",
    "GetMemberAssignmentsUseCase",
    "GetCampusMembersUseCase",
    "DeactivateAssignmentUseCase",
    # Roles
    "GrantRoleUseCase",
    "ListActiveRolesUseCase",
    "RevokeRoleUseCase",
    # Transfers
    "TransferMemberUseCase",
    "GetTransferHistoryUseCase",
    # Analytics
    "GetCampusStatsUseCase",
]

"""
Campus Assignment Use Cases

Placing members at campuses and reading the assignment store.
"""

from .assign_member_use_case import AssignMemberUseCase
from .deactivate_assignment_use_case import DeactivateAssignmentUseCase
from .dtos import (
    AssignMemberCommand,
    AssignMemberResponse,
    AssignmentInfo,
    CampusMemberInfo,
    CampusMembersResponse,
    DeactivateAssignmentResponse,
    MemberAssignmentsResponse,
)
from .get_campus_members_use_case import GetCampusMembersUseCase
from .get_member_assignments_use_case import GetMemberAssignmentsUseCase
from .placement import place_member

__all__ = [
    "AssignMemberUseCase",
    "GetMemberAssignmentsUseCase",
    "GetCampusMembersUseCase",
    "DeactivateAssignmentUseCase",
    "place_member",
    "AssignMemberCommand",
    "AssignMemberResponse",
    "AssignmentInfo",
    "MemberAssignmentsResponse",
    "CampusMemberInfo",
    "CampusMembersResponse",
    "DeactivateAssignmentResponse",
]

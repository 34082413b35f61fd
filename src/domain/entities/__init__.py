"""
Campus Membership Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AssignmentStatus, TransferStatus, TransferType

# Export all entities
from .member import Member
from .campus import Campus
from .assignment import MemberCampusAssignment
from .campus_role import CampusMemberRole
from .transfer_history import MemberTransferHistory

__all__ = [
    # Enums
    "AssignmentStatus",
    "TransferStatus",
    "TransferType",
    # Entities
    "Member",
    "Campus",
    "MemberCampusAssignment",
    "CampusMemberRole",
    "MemberTransferHistory",
]

"""
Campus Membership Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AssignmentStatus(str, Enum):
    """Lifecycle of a member's assignment to a campus"""

    active = "active"
    inactive = "inactive"
    transferred = "transferred"


class TransferType(str, Enum):
    """How a transfer was initiated"""

    manual = "manual"
    automatic = "automatic"
    bulk = "bulk"


class TransferStatus(str, Enum):
    """Transfer history record status"""

    completed = "completed"
    failed = "failed"
    pending = "pending"

"""
Campus Transfer Use Cases

The transfer orchestrator and transfer ledger queries.
"""

from .dtos import (
    TransferHistoryEntry,
    TransferHistoryResponse,
    TransferMemberCommand,
    TransferMemberResponse,
)
from .get_transfer_history_use_case import GetTransferHistoryUseCase
from .transfer_member_use_case import TransferMemberUseCase

__all__ = [
    "TransferMemberUseCase",
    "GetTransferHistoryUseCase",
    "TransferMemberCommand",
    "TransferMemberResponse",
    "TransferHistoryEntry",
    "TransferHistoryResponse",
]

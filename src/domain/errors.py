"""
Domain Errors

Raised from the persistence/domain layer; use cases translate them into
Result errors.
"""

from uuid import UUID


class InvalidSnapshotError(ValueError):
    """Role snapshot for a transfer record is malformed"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class LedgerImmutableError(RuntimeError):
    """Attempt to modify or delete a completed transfer history record"""

    def __init__(self, history_id: UUID):
        self.history_id = history_id
        super().__init__(f"Transfer history record {history_id} is immutable")

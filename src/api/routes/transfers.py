"""
Campus Transfer API Routes

Transferring members between campuses and reading the transfer ledger.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.ids import actor_id, parse_int, parse_optional_uuid
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.transfers import (
    GetTransferHistoryUseCase,
    TransferHistoryResponse,
    TransferMemberCommand,
    TransferMemberResponse,
    TransferMemberUseCase,
)
from src.depends import get_current_user, get_unit_of_work
from src.domain.entities import TransferType

router = APIRouter(prefix="/campus-members", tags=["Transfers"])


class TransferMemberRequest(BaseModel):
    """
    Transfer member HTTP request payload

    Validates incoming request for moving a member between campuses.
    """

    member_id: UUID = Field(..., description="Member to transfer")
    from_campus_id: UUID = Field(..., description="Campus the member leaves")
    to_campus_id: UUID = Field(..., description="Campus the member joins")
    organization_id: UUID = Field(..., description="Organization owning both campuses")
    reason: Optional[str] = Field(None, max_length=2000)
    note: Optional[str] = Field(None, max_length=2000)
    transfer_type: str = Field("manual", description="manual, automatic or bulk")
    approved_by: Optional[UUID] = Field(
        None, description="Approving actor; defaults to the requesting user"
    )


@router.post(
    "/transfers",
    status_code=status.HTTP_201_CREATED,
    response_model=TransferMemberResponse,
)
async def transfer_member(
    request: TransferMemberRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Transfer Member Between Campuses

    Atomically marks the source assignment transferred, closes the member's
    roles at the source campus, creates the destination assignment and
    appends a completed record to the transfer ledger.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (unknown transfer_type), NO_OP_TRANSFER
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: SOURCE_ASSIGNMENT_NOT_FOUND, CAMPUS_NOT_FOUND
        - 409 Conflict: DESTINATION_ALREADY_ASSIGNED, CONCURRENCY_CONFLICT (retryable)
        - 422 Unprocessable Entity: INVALID_SNAPSHOT
        - 500 Internal Server Error: Server error
    """
    try:
        transfer_type = TransferType(request.transfer_type)
    except ValueError:
        raise ClientError(
            Error(
                "VALIDATION_ERROR",
                f"Invalid transfer_type: {request.transfer_type}. "
                "Must be one of: manual, automatic, bulk",
                {"field": "transfer_type"},
            ),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    requested_by = actor_id(current_user)
    command = TransferMemberCommand(
        member_id=request.member_id,
        from_campus_id=request.from_campus_id,
        to_campus_id=request.to_campus_id,
        organization_id=request.organization_id,
        reason=request.reason,
        note=request.note,
        transfer_type=transfer_type,
        requested_by=requested_by,
        approved_by=request.approved_by or requested_by,
    )

    use_case = TransferMemberUseCase(uow)
    result = await use_case.execute(command)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "NO_OP_TRANSFER":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("SOURCE_ASSIGNMENT_NOT_FOUND", "CAMPUS_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("DESTINATION_ALREADY_ASSIGNED", "CONCURRENCY_CONFLICT"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_SNAPSHOT":
            raise ClientError(error, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
        raise ServerError(error)

    return result.value


@router.get(
    "/transfers",
    status_code=status.HTTP_200_OK,
    response_model=TransferHistoryResponse,
)
async def get_transfer_history(
    member_id: Optional[str] = Query(None, description="Filter by member"),
    organization_id: Optional[str] = Query(None, description="Filter by organization"),
    limit: Optional[str] = Query(None, description="Maximum number of records to return (default 50)"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Transfer History

    Returns ledger records, newest first.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (malformed id, non-integer limit or limit out of range)
    """
    use_case = GetTransferHistoryUseCase(uow, max_limit=ApplicationConfig.HISTORY_QUERY_MAX_LIMIT)
    result = await use_case.execute(
        member_id=parse_optional_uuid(member_id, "member_id"),
        organization_id=parse_optional_uuid(organization_id, "organization_id"),
        limit=parse_int(limit, "limit", default=50),
    )

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value

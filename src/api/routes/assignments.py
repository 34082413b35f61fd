"""
Campus Assignment API Routes

Assigning members to campuses and reading assignments.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.ids import actor_id, parse_optional_uuid, parse_uuid
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.assignments import (
    AssignMemberCommand,
    AssignMemberResponse,
    AssignMemberUseCase,
    CampusMembersResponse,
    DeactivateAssignmentResponse,
    DeactivateAssignmentUseCase,
    GetCampusMembersUseCase,
    GetMemberAssignmentsUseCase,
    MemberAssignmentsResponse,
)
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/campus-members", tags=["Assignments"])


class AssignMemberRequest(BaseModel):
    """
    Assign member HTTP request payload

    Validates incoming request for placing a member at a campus.
    """

    member_id: UUID = Field(..., description="Member to assign")
    campus_id: UUID = Field(..., description="Campus to assign the member to")
    organization_id: UUID = Field(..., description="Organization owning the campus")
    is_primary: bool = Field(False, description="Make this the member's primary campus")
    note: Optional[str] = Field(None, max_length=2000)


@router.post(
    "/assignments",
    status_code=status.HTTP_201_CREATED,
    response_model=AssignMemberResponse,
)
async def assign_member(
    request: AssignMemberRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Assign Member to Campus

    Creates an active assignment. A primary assignment demotes the member's
    other primary assignment in the organization.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: MEMBER_NOT_FOUND, CAMPUS_NOT_FOUND
        - 409 Conflict: DUPLICATE_ASSIGNMENT, CONCURRENCY_CONFLICT
        - 500 Internal Server Error: Server error
    """
    command = AssignMemberCommand(
        member_id=request.member_id,
        campus_id=request.campus_id,
        organization_id=request.organization_id,
        is_primary=request.is_primary,
        note=request.note,
        assigned_by=actor_id(current_user),
    )

    use_case = AssignMemberUseCase(uow)
    result = await use_case.execute(command)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code in ("MEMBER_NOT_FOUND", "CAMPUS_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("DUPLICATE_ASSIGNMENT", "CONCURRENCY_CONFLICT"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/members/{member_id}/assignments",
    status_code=status.HTTP_200_OK,
    response_model=MemberAssignmentsResponse,
)
async def get_member_assignments(
    member_id: str,
    organization_id: str = Query(..., description="Organization to list assignments in"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Member Assignments

    Lists all assignments (active and historical) of a member, primary
    campus first, then by campus name.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (malformed id)
        - 404 Not Found: MEMBER_NOT_FOUND
    """
    use_case = GetMemberAssignmentsUseCase(uow)
    result = await use_case.execute(
        parse_uuid(member_id, "member_id"),
        parse_uuid(organization_id, "organization_id"),
    )

    if result.is_err():
        error = result.error
        if error.code == "MEMBER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/organizations/{organization_id}/members",
    status_code=status.HTTP_200_OK,
    response_model=CampusMembersResponse,
)
async def get_campus_members(
    organization_id: str,
    campus_id: Optional[str] = Query(None, description="Restrict to one campus"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Members by Campus

    Lists active assignments of the organization, optionally for one campus.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (malformed id)
        - 404 Not Found: CAMPUS_NOT_FOUND
    """
    use_case = GetCampusMembersUseCase(uow)
    result = await use_case.execute(
        parse_uuid(organization_id, "organization_id"),
        parse_optional_uuid(campus_id, "campus_id"),
    )

    if result.is_err():
        error = result.error
        if error.code == "CAMPUS_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/assignments/{assignment_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=DeactivateAssignmentResponse,
)
async def deactivate_assignment(
    assignment_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Deactivate Assignment

    Marks an active assignment inactive and closes the member's roles at
    that campus.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (malformed id)
        - 404 Not Found: ASSIGNMENT_NOT_FOUND
        - 409 Conflict: ASSIGNMENT_NOT_ACTIVE, CONCURRENCY_CONFLICT
    """
    use_case = DeactivateAssignmentUseCase(uow)
    result = await use_case.execute(
        parse_uuid(assignment_id, "assignment_id"), actor_id(current_user)
    )

    if result.is_err():
        error = result.error
        if error.code == "ASSIGNMENT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("ASSIGNMENT_NOT_ACTIVE", "CONCURRENCY_CONFLICT"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value

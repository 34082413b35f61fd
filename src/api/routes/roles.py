"""
Campus Role API Routes

Granting, listing and revoking campus-scoped roles.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.ids import actor_id, parse_optional_uuid, parse_uuid
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.roles import (
    ActiveRolesResponse,
    GrantRoleCommand,
    GrantRoleUseCase,
    ListActiveRolesUseCase,
    RevokeRoleUseCase,
    RoleInfo,
)
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/campus-members", tags=["Roles"])


class GrantRoleRequest(BaseModel):
    """Grant campus role HTTP request payload"""

    member_id: UUID
    campus_id: UUID
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    permissions: List[str] = Field(
        default_factory=list, description="Ordered capability tags"
    )


@router.post("/roles", status_code=status.HTTP_201_CREATED, response_model=RoleInfo)
async def grant_role(
    request: GrantRoleRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Grant Campus Role

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 404 Not Found: CAMPUS_NOT_FOUND
        - 409 Conflict: NOT_ASSIGNED_TO_CAMPUS, CONCURRENCY_CONFLICT
    """
    command = GrantRoleCommand(
        member_id=request.member_id,
        campus_id=request.campus_id,
        title=request.title,
        description=request.description,
        permissions=request.permissions,
        assigned_by=actor_id(current_user),
    )

    use_case = GrantRoleUseCase(uow)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "CAMPUS_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("NOT_ASSIGNED_TO_CAMPUS", "CONCURRENCY_CONFLICT"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/members/{member_id}/roles",
    status_code=status.HTTP_200_OK,
    response_model=ActiveRolesResponse,
)
async def list_active_roles(
    member_id: str,
    campus_id: Optional[str] = Query(None, description="Restrict to one campus"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List a member's active campus roles"""
    use_case = ListActiveRolesUseCase(uow)
    result = await use_case.execute(
        parse_uuid(member_id, "member_id"),
        parse_optional_uuid(campus_id, "campus_id"),
    )

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete(
    "/roles/{role_id}",
    status_code=status.HTTP_200_OK,
    response_model=RoleInfo,
)
async def revoke_role(
    role_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke Campus Role

    Raises:
        - 404 Not Found: ROLE_NOT_FOUND
        - 409 Conflict: ROLE_ALREADY_CLOSED, CONCURRENCY_CONFLICT (retryable)
    """
    use_case = RevokeRoleUseCase(uow)
    result = await use_case.execute(parse_uuid(role_id, "role_id"), actor_id(current_user))

    if result.is_err():
        error = result.error
        if error.code == "ROLE_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("ROLE_ALREADY_CLOSED", "CONCURRENCY_CONFLICT"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value

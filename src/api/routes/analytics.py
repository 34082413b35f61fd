"""
Campus Analytics API Routes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.ids import parse_optional_uuid, parse_uuid
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.analytics import CampusStatsResponse, GetCampusStatsUseCase
from src.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/campus-members", tags=["Analytics"])


@router.get(
    "/organizations/{organization_id}/analytics",
    status_code=status.HTTP_200_OK,
    response_model=CampusStatsResponse,
)
async def get_campus_stats(
    organization_id: str,
    campus_id: Optional[str] = Query(None, description="Restrict to one campus"),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Campus Member Analytics

    Per-campus totals, primary members and recent joins, computed from
    active assignments.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (malformed id)
        - 404 Not Found: CAMPUS_NOT_FOUND
    """
    use_case = GetCampusStatsUseCase(
        uow, recent_window_days=ApplicationConfig.RECENT_JOIN_WINDOW_DAYS
    )
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

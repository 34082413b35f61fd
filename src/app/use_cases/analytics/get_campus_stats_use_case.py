"""
Get Campus Stats Use Case

Read-only membership rollups per campus.
"""

from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

from .dtos import CampusStat, CampusStatsResponse

_EMPTY = {
    "active_members": 0,
    "inactive_members": 0,
    "primary_members": 0,
    "recent_joins": 0,
}


class GetCampusStatsUseCase:
    """
    Use case for campus membership analytics.

    Business Rules:
    - total/active/primary/recent counts use status=active rows only
    - inactive_members reports status=inactive rows and is not part of
      total_members; transferred rows are not counted at all
    - recent_joins: active rows assigned within the last recent_window_days
    - Every campus of the organization is listed, zeros included,
      ordered by campus name
    """

    def __init__(self, uow: UnitOfWork, recent_window_days: int = 30):
        self.uow = uow
        self.recent_window_days = recent_window_days

    async def execute(
        self, organization_id: UUID, campus_id: Optional[UUID] = None
    ) -> Result[CampusStatsResponse]:
        async with self.uow:
            campuses = await self.uow.directory.list_campuses(organization_id, campus_id)
            if campus_id is not None and not campuses:
                return Return.err(
                    Error(
                        "CAMPUS_NOT_FOUND",
                        "Campus not found in this organization",
                        {
                            "campus_id": str(campus_id),
                            "organization_id": str(organization_id),
                        },
                    )
                )

            since = utcnow() - timedelta(days=self.recent_window_days)
            counts = await self.uow.assignments.count_by_campus(
                organization_id, since, campus_id
            )

            stats = []
            for campus in campuses:
                row = counts.get(campus.id, _EMPTY)
                stats.append(
                    CampusStat(
                        campus_id=str(campus.id),
                        campus_name=campus.name,
                        total_members=row["active_members"],
                        active_members=row["active_members"],
                        inactive_members=row["inactive_members"],
                        primary_members=row["primary_members"],
                        recent_joins=row["recent_joins"],
                    )
                )
            return Return.ok(CampusStatsResponse(analytics=stats))

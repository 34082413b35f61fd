"""
Campus Analytics DTOs
"""

from typing import List

from pydantic import BaseModel


class CampusStat(BaseModel):
    """Membership rollup for one campus"""

    campus_id: str
    campus_name: str
    total_members: int
    active_members: int
    inactive_members: int
    primary_members: int
    recent_joins: int


class CampusStatsResponse(BaseModel):
    """Response for get campus stats use case"""

    analytics: List[CampusStat]

"""
Campus Analytics Use Cases
"""

from .dtos import CampusStat, CampusStatsResponse
from .get_campus_stats_use_case import GetCampusStatsUseCase

__all__ = ["GetCampusStatsUseCase", "CampusStat", "CampusStatsResponse"]

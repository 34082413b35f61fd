from typing import Optional
from uuid import UUID

from fastapi import status
from libs.result import Error
from src.api.error import ClientError


def parse_uuid(value: str, field: str) -> UUID:
    """Parse a path/query identifier or raise a 400 VALIDATION_ERROR"""
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise ClientError(
            Error("VALIDATION_ERROR", f"Invalid {field} format", {"field": field}),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def parse_optional_uuid(value: Optional[str], field: str) -> Optional[UUID]:
    if value is None or value == "":
        return None
    return parse_uuid(value, field)


def parse_int(value: Optional[str], field: str, default: int) -> int:
    """Parse an integer query parameter or raise a 400 VALIDATION_ERROR"""
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ClientError(
            Error("VALIDATION_ERROR", f"Invalid {field}, expected an integer", {"field": field}),
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def actor_id(current_user: dict) -> UUID:
    """Acting user from the decoded JWT payload"""
    return parse_uuid(current_user["user_id"], "user_id")

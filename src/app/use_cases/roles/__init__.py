"""
Campus Role Use Cases

Granting, listing and revoking campus-scoped roles.
"""

from .dtos import ActiveRolesResponse, GrantRoleCommand, RoleInfo
from .grant_role_use_case import GrantRoleUseCase
from .list_active_roles_use_case import ListActiveRolesUseCase
from .revoke_role_use_case import RevokeRoleUseCase

__all__ = [
    "GrantRoleUseCase",
    "ListActiveRolesUseCase",
    "RevokeRoleUseCase",
    "GrantRoleCommand",
    "RoleInfo",
    "ActiveRolesResponse",
]

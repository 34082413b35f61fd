from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.role_repository import IRoleRepository
from src.domain.entities import Campus, CampusMemberRole


class RoleRepository(IRoleRepository):
    """Role store implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, role_id: UUID, for_update: bool = False
    ) -> Optional[CampusMemberRole]:
        """Get role grant by ID, optionally locking the row"""
        stmt = select(CampusMemberRole).where(CampusMemberRole.id == role_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, role: CampusMemberRole) -> CampusMemberRole:
        """Create a new role grant"""
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def update(self, role: CampusMemberRole) -> CampusMemberRole:
        """Update existing role grant"""
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def get_active_for_campus(
        self, member_id: UUID, campus_id: UUID
    ) -> List[CampusMemberRole]:
        """Get active role grants of a member at one campus"""
        stmt = (
            select(CampusMemberRole)
            .where(
                CampusMemberRole.member_id == member_id,
                CampusMemberRole.campus_id == campus_id,
                CampusMemberRole.is_active.is_(True),
            )
            .order_by(CampusMemberRole.title.asc(), CampusMemberRole.start_date.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_active(
        self, member_id: UUID, campus_id: Optional[UUID] = None
    ) -> List[Tuple[CampusMemberRole, str]]:
        """Get active role grants with campus name"""
        stmt = (
            select(CampusMemberRole, Campus.name)
            .join(Campus, Campus.id == CampusMemberRole.campus_id)
            .where(
                CampusMemberRole.member_id == member_id,
                CampusMemberRole.is_active.is_(True),
            )
        )
        if campus_id is not None:
            stmt = stmt.where(CampusMemberRole.campus_id == campus_id)
        stmt = stmt.order_by(Campus.name.asc(), CampusMemberRole.title.asc())

        result = await self.session.exec(stmt)
        return [(role, name) for role, name in result.all()]

    async def close_roles(
        self, member_id: UUID, campus_id: UUID, at: datetime
    ) -> List[CampusMemberRole]:
        """Close every active grant for (member, campus)"""
        closed = await self.get_active_for_campus(member_id, campus_id)
        for role in closed:
            role.is_active = False
            role.end_date = at
            role.updated_at = at
            self.session.add(role)

        if closed:
            await self.session.flush()
        return closed

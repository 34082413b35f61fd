from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.directory_repository import IDirectoryRepository
from src.domain.entities import Campus, Member


class DirectoryRepository(IDirectoryRepository):
    """Member/campus lookups using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_member(self, member_id: UUID) -> Optional[Member]:
        """Get member by ID"""
        stmt = select(Member).where(Member.id == member_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_campus(self, campus_id: UUID) -> Optional[Campus]:
        """Get campus by ID"""
        stmt = select(Campus).where(Campus.id == campus_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_campuses(
        self, organization_id: UUID, campus_id: Optional[UUID] = None
    ) -> List[Campus]:
        """Get campuses of an organization ordered by name"""
        stmt = select(Campus).where(Campus.organization_id == organization_id)
        if campus_id is not None:
            stmt = stmt.where(Campus.id == campus_id)
        stmt = stmt.order_by(Campus.name.asc())

        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_member_names(self, member_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """Map member IDs to display names"""
        ids = set(member_ids)
        if not ids:
            return {}
        stmt = select(Member.id, Member.display_name).where(Member.id.in_(ids))
        result = await self.session.exec(stmt)
        return {member_id: name for member_id, name in result.all()}

    async def get_campus_names(self, campus_ids: Iterable[UUID]) -> Dict[UUID, str]:
        """Map campus IDs to names"""
        ids = set(campus_ids)
        if not ids:
            return {}
        stmt = select(Campus.id, Campus.name).where(Campus.id.in_(ids))
        result = await self.session.exec(stmt)
        return {campus_id: name for campus_id, name in result.all()}

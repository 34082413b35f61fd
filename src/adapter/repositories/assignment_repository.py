from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, case, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.assignment_repository import IAssignmentRepository
from src.domain.base import utcnow
from src.domain.entities import (
    AssignmentStatus,
    Campus,
    Member,
    MemberCampusAssignment,
)


class AssignmentRepository(IAssignmentRepository):
    """Assignment store implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, assignment_id: UUID, for_update: bool = False
    ) -> Optional[MemberCampusAssignment]:
        """Get assignment by ID, optionally locking the row"""
        stmt = select(MemberCampusAssignment).where(
            MemberCampusAssignment.id == assignment_id
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active(
        self, member_id: UUID, campus_id: UUID
    ) -> Optional[MemberCampusAssignment]:
        """Get the active assignment for (member, campus)"""
        stmt = select(MemberCampusAssignment).where(
            MemberCampusAssignment.member_id == member_id,
            MemberCampusAssignment.campus_id == campus_id,
            MemberCampusAssignment.status == AssignmentStatus.active,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_active_for_member(
        self, member_id: UUID, organization_id: UUID, for_update: bool = False
    ) -> List[MemberCampusAssignment]:
        """Get all active assignments of a member within an organization"""
        stmt = select(MemberCampusAssignment).where(
            MemberCampusAssignment.member_id == member_id,
            MemberCampusAssignment.organization_id == organization_id,
            MemberCampusAssignment.status == AssignmentStatus.active,
        )
        if for_update:
            # Row locks on PostgreSQL; SQLite renders no FOR UPDATE clause
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_for_member(
        self, member_id: UUID, organization_id: UUID
    ) -> List[Tuple[MemberCampusAssignment, str]]:
        """Get every assignment of a member, primary first then by campus name"""
        stmt = (
            select(MemberCampusAssignment, Campus.name)
            .join(Campus, Campus.id == MemberCampusAssignment.campus_id)
            .where(
                MemberCampusAssignment.member_id == member_id,
                MemberCampusAssignment.organization_id == organization_id,
            )
            .order_by(
                MemberCampusAssignment.is_primary.desc(),
                Campus.name.asc(),
                MemberCampusAssignment.assigned_at.desc(),
            )
        )
        result = await self.session.exec(stmt)
        return [(assignment, name) for assignment, name in result.all()]

    async def list_active_by_campus(
        self, organization_id: UUID, campus_id: Optional[UUID] = None
    ) -> List[Tuple[MemberCampusAssignment, Member, Campus]]:
        """Get active assignments of an organization, optionally for one campus"""
        stmt = (
            select(MemberCampusAssignment, Member, Campus)
            .join(Member, Member.id == MemberCampusAssignment.member_id)
            .join(Campus, Campus.id == MemberCampusAssignment.campus_id)
            .where(
                MemberCampusAssignment.organization_id == organization_id,
                MemberCampusAssignment.status == AssignmentStatus.active,
            )
        )
        if campus_id is not None:
            stmt = stmt.where(MemberCampusAssignment.campus_id == campus_id)
        stmt = stmt.order_by(Campus.name.asc(), Member.display_name.asc())

        result = await self.session.exec(stmt)
        return [(assignment, member, campus) for assignment, member, campus in result.all()]

    async def create(self, assignment: MemberCampusAssignment) -> MemberCampusAssignment:
        """Create a new assignment"""
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment

    async def clear_primary(
        self, member_id: UUID, organization_id: UUID
    ) -> List[MemberCampusAssignment]:
        """Unset is_primary on every active assignment of the member"""
        stmt = select(MemberCampusAssignment).where(
            MemberCampusAssignment.member_id == member_id,
            MemberCampusAssignment.organization_id == organization_id,
            MemberCampusAssignment.status == AssignmentStatus.active,
            MemberCampusAssignment.is_primary.is_(True),
        )
        result = await self.session.exec(stmt)
        changed = list(result.all())

        now = utcnow()
        for assignment in changed:
            assignment.is_primary = False
            assignment.updated_at = now
            self.session.add(assignment)

        # Flush before the caller inserts a new primary row
        await self.session.flush()
        return changed

    async def deactivate(
        self, assignment: MemberCampusAssignment, new_status: AssignmentStatus
    ) -> MemberCampusAssignment:
        """Move an active assignment to inactive or transferred"""
        if new_status == AssignmentStatus.active:
            raise ValueError("deactivate() cannot set an assignment active")

        assignment.status = new_status
        assignment.updated_at = utcnow()
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment

    async def count_by_campus(
        self, organization_id: UUID, since: datetime, campus_id: Optional[UUID] = None
    ) -> Dict[UUID, Dict[str, Any]]:
        """Aggregate assignment counts per campus"""
        is_active = MemberCampusAssignment.status == AssignmentStatus.active

        stmt = select(
            MemberCampusAssignment.campus_id,
            func.sum(case((is_active, 1), else_=0)).label("active_members"),
            func.sum(
                case(
                    (MemberCampusAssignment.status == AssignmentStatus.inactive, 1),
                    else_=0,
                )
            ).label("inactive_members"),
            func.sum(
                case(
                    (and_(is_active, MemberCampusAssignment.is_primary.is_(True)), 1),
                    else_=0,
                )
            ).label("primary_members"),
            func.sum(
                case(
                    (and_(is_active, MemberCampusAssignment.assigned_at >= since), 1),
                    else_=0,
                )
            ).label("recent_joins"),
        ).where(MemberCampusAssignment.organization_id == organization_id)

        if campus_id is not None:
            stmt = stmt.where(MemberCampusAssignment.campus_id == campus_id)
        stmt = stmt.group_by(MemberCampusAssignment.campus_id)

        result = await self.session.exec(stmt)
        return {
            row.campus_id: {
                "active_members": int(row.active_members or 0),
                "inactive_members": int(row.inactive_members or 0),
                "primary_members": int(row.primary_members or 0),
                "recent_joins": int(row.recent_joins or 0),
            }
            for row in result.all()
        }

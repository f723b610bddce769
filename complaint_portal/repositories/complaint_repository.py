"""민원 레포지토리.

Complaint repository — Handles complaints DB queries, including the
aggregates behind the admin statistics.
"""

from datetime import datetime
from typing import Sequence

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.models.complaint import Complaint
from complaint_portal.models.enums import ComplaintCategory, ComplaintStatus
from complaint_portal.repositories.base import BaseRepository


class ComplaintRepository(BaseRepository[Complaint]):

    def __init__(self) -> None:
        super().__init__(Complaint)

    async def find_page(
        self,
        db: AsyncSession,
        query: Select,
        page: int,
        limit: int,
    ) -> tuple[Sequence[Complaint], int]:
        return await self.get_paginated(db, query, page, limit)

    async def count_by_status(self, db: AsyncSession) -> dict[ComplaintStatus, int]:
        result = await db.execute(
            select(Complaint.status, func.count(Complaint.id)).group_by(Complaint.status)
        )
        return {ComplaintStatus(status): count for status, count in result.all()}

    async def count_by_category(self, db: AsyncSession) -> dict[ComplaintCategory, int]:
        result = await db.execute(
            select(Complaint.category, func.count(Complaint.id)).group_by(Complaint.category)
        )
        return {ComplaintCategory(category): count for category, count in result.all()}

    async def resolved_timestamps(self, db: AsyncSession) -> list[tuple[datetime, datetime]]:
        """해결된 민원의 (생성, 수정) 시각 — created/updated pairs of Resolved complaints."""
        result = await db.execute(
            select(Complaint.created_at, Complaint.updated_at).where(
                Complaint.status == ComplaintStatus.RESOLVED
            )
        )
        return [(created, updated) for created, updated in result.all()]

    async def average_rating(self, db: AsyncSession) -> float | None:
        result = await db.execute(
            select(func.avg(Complaint.feedback_rating)).where(Complaint.feedback_rating.is_not(None))
        )
        value = result.scalar()
        return float(value) if value is not None else None

    async def delete_for_submitter(self, db: AsyncSession, user_id: int) -> int:
        """사용자 삭제 시 작성 민원 삭제 — Remove complaints filed by a deleted user."""
        result = await db.execute(delete(Complaint).where(Complaint.submitter_id == user_id))
        return result.rowcount or 0

    async def release_assignee(self, db: AsyncSession, user_id: int) -> int:
        """사용자 삭제 시 배정 해제 — Detach a deleted staff member from their complaints.

        Unfinished work goes back to Open so it can be assigned again;
        Resolved complaints keep their status with no assignee.
        """
        reopened = await db.execute(
            update(Complaint)
            .where(
                Complaint.assignee_id == user_id,
                Complaint.status != ComplaintStatus.RESOLVED,
            )
            .values(assignee_id=None, status=ComplaintStatus.OPEN)
        )
        detached = await db.execute(
            update(Complaint).where(Complaint.assignee_id == user_id).values(assignee_id=None)
        )
        return (reopened.rowcount or 0) + (detached.rowcount or 0)


complaint_repository: ComplaintRepository = ComplaintRepository()

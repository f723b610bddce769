"""민원 서비스 — 민원 생명주기 오케스트레이션.

Complaint Service — Orchestrates creation, scoped listing, retrieval,
status updates, assignment, feedback, and admin statistics. Every
operation consults the access policy and the lifecycle rules around the
repository calls; nothing here commits, the caller owns the transaction.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.models.complaint import Complaint
from complaint_portal.models.enums import ComplaintCategory, ComplaintStatus, Role
from complaint_portal.repositories.complaint_repository import complaint_repository
from complaint_portal.repositories.user_repository import user_repository
from complaint_portal.schemas.actor import Actor
from complaint_portal.schemas.common import validate_input
from complaint_portal.schemas.complaint import (
    CategoryCount,
    ComplaintCreate,
    ComplaintFilters,
    ComplaintRead,
    ComplaintStats,
)
from complaint_portal.services import complaint_lifecycle
from complaint_portal.services.access_policy import Operation, ensure_access
from complaint_portal.services.complaint_query import build_complaint_query
from complaint_portal.utils.exceptions import (
    InvalidAssigneeError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from complaint_portal.utils.pagination import Page, build_page
from complaint_portal.utils.time import as_utc, utc_now

logger = logging.getLogger(__name__)


def _require_actor(actor: Actor | None) -> Actor:
    if actor is None:
        raise UnauthorizedError()
    return actor


class ComplaintService:
    """민원 비즈니스 로직 서비스.

    Args:
        clock: 현재 시각 공급자 (Current-time provider, injectable for tests)
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self.clock: Callable[[], datetime] = clock

    # --- 응답 생성 (Response building) ---

    def is_overdue(self, complaint: Complaint) -> bool:
        deadline = as_utc(complaint.deadline_at)
        return (
            deadline is not None
            and complaint.status is not ComplaintStatus.RESOLVED
            and deadline < as_utc(self.clock())
        )

    async def build_responses(self, db: AsyncSession, complaints: Iterable[Complaint]) -> list[ComplaintRead]:
        """작성자/담당자 이름을 한 번에 조회하여 응답을 생성합니다."""
        complaints = list(complaints)
        user_ids: set[int] = set()
        for complaint in complaints:
            user_ids.add(complaint.submitter_id)
            if complaint.assignee_id is not None:
                user_ids.add(complaint.assignee_id)
        contacts = await user_repository.get_contacts(db, user_ids)

        responses: list[ComplaintRead] = []
        for complaint in complaints:
            submitter_name, submitter_email = contacts.get(complaint.submitter_id, (None, None))
            assignee_name = None
            if complaint.assignee_id is not None:
                assignee_name = contacts.get(complaint.assignee_id, (None, None))[0]
            responses.append(
                ComplaintRead(
                    id=complaint.id,
                    submitter_id=complaint.submitter_id,
                    submitter_name=submitter_name,
                    submitter_email=submitter_email,
                    assignee_id=complaint.assignee_id,
                    assignee_name=assignee_name,
                    title=complaint.title,
                    description=complaint.description,
                    category=complaint.category,
                    priority=complaint.priority,
                    location=complaint.location,
                    status=complaint.status,
                    attachments=complaint.attachments,
                    resolution_notes=complaint.resolution_notes,
                    feedback=complaint.feedback,
                    feedback_rating=complaint.feedback_rating,
                    deadline_at=as_utc(complaint.deadline_at),
                    is_overdue=self.is_overdue(complaint),
                    created_at=as_utc(complaint.created_at),
                    updated_at=as_utc(complaint.updated_at),
                )
            )
        return responses

    async def build_response(self, db: AsyncSession, complaint: Complaint) -> ComplaintRead:
        return (await self.build_responses(db, [complaint]))[0]

    # --- 조회 (Reads) ---

    async def _load(self, db: AsyncSession, complaint_id: int) -> Complaint:
        # 항상 DB의 현재 값을 읽음 — read-modify-write must see the stored status
        complaint = await complaint_repository.get_by_id(db, complaint_id, fresh=True)
        if complaint is None:
            raise NotFoundError("Complaint not found")
        return complaint

    async def get_by_id(self, db: AsyncSession, actor: Actor | None, complaint_id: int) -> Complaint:
        actor = _require_actor(actor)
        complaint = await self._load(db, complaint_id)
        ensure_access(actor, complaint, Operation.READ)
        return complaint

    async def list_complaints(
        self,
        db: AsyncSession,
        actor: Actor | None,
        filters: ComplaintFilters | dict[str, Any] | None = None,
    ) -> Page:
        """역할 범위 민원 목록 — Role-scoped, filtered, paginated complaints."""
        actor = _require_actor(actor)
        criteria = validate_input(ComplaintFilters, filters if filters is not None else {})
        query = build_complaint_query(actor, criteria)
        complaints, total = await complaint_repository.find_page(db, query, criteria.page, criteria.limit)
        items = await self.build_responses(db, complaints)
        return build_page(items, total, criteria.page, criteria.limit)

    # --- 변경 (Mutations) ---

    async def create(
        self,
        db: AsyncSession,
        actor: Actor | None,
        data: ComplaintCreate | dict[str, Any],
    ) -> Complaint:
        actor = ensure_access(actor, None, Operation.CREATE)
        payload = validate_input(ComplaintCreate, data)
        now = self.clock()
        complaint = await complaint_repository.create(
            db,
            {
                "submitter_id": actor.id,
                "assignee_id": None,
                "title": payload.title,
                "description": payload.description,
                "category": payload.category,
                "priority": payload.priority,
                "location": payload.location,
                "attachments": payload.attachments,
                "status": complaint_lifecycle.INITIAL_STATUS,
                "deadline_at": complaint_lifecycle.compute_deadline(payload.priority, now),
                "created_at": now,
                "updated_at": now,
            },
        )
        logger.info(
            "complaint.created id=%s submitter=%s category=%s priority=%s",
            complaint.id, actor.id, payload.category.value, payload.priority.value,
        )
        return complaint

    async def _apply(self, db: AsyncSession, complaint: Complaint, changes: dict[str, Any]) -> Complaint:
        changes["updated_at"] = self.clock()
        return await complaint_repository.update(db, complaint, changes)

    async def update_status(
        self,
        db: AsyncSession,
        actor: Actor | None,
        complaint_id: int,
        new_status: ComplaintStatus | str | None,
        resolution_notes: str | None = None,
    ) -> Complaint:
        """상태 변경 — Staff/Admin status update validated against the fresh status."""
        actor = _require_actor(actor)
        complaint = await self._load(db, complaint_id)
        ensure_access(actor, complaint, Operation.UPDATE_STATUS)

        if new_status is None:
            if not resolution_notes:
                raise ValidationError.for_field("status", "Provide a status or resolution notes")
            changes: dict[str, Any] = {"resolution_notes": resolution_notes}
        else:
            changes = complaint_lifecycle.transition(complaint, new_status, resolution_notes)

        previous = complaint.status
        complaint = await self._apply(db, complaint, changes)
        logger.info(
            "complaint.status_updated id=%s actor=%s from=%s to=%s",
            complaint.id, actor.id, previous.value, complaint.status.value,
        )
        return complaint

    async def assign(
        self,
        db: AsyncSession,
        actor: Actor | None,
        complaint_id: int,
        assignee_id: int,
    ) -> Complaint:
        """담당자 배정 — Admin assigns an Open complaint to a Staff member."""
        actor = _require_actor(actor)
        complaint = await self._load(db, complaint_id)
        ensure_access(actor, complaint, Operation.ASSIGN)

        assignee = await user_repository.get_by_id(db, assignee_id)
        if assignee is None:
            raise NotFoundError("Staff member not found")
        if assignee.role is not Role.STAFF:
            raise InvalidAssigneeError()

        changes = complaint_lifecycle.assign(complaint, assignee.id)
        complaint = await self._apply(db, complaint, changes)
        logger.info("complaint.assigned id=%s admin=%s staff=%s", complaint.id, actor.id, assignee.id)
        return complaint

    async def submit_feedback(
        self,
        db: AsyncSession,
        actor: Actor | None,
        complaint_id: int,
        feedback: str,
        rating: int,
    ) -> Complaint:
        """피드백 등록 — Submitter rates their resolved complaint once."""
        actor = _require_actor(actor)
        complaint = await self._load(db, complaint_id)
        ensure_access(actor, complaint, Operation.FEEDBACK)

        changes = complaint_lifecycle.submit_feedback(complaint, feedback, rating)
        complaint = await self._apply(db, complaint, changes)
        logger.info("complaint.feedback id=%s rating=%s", complaint.id, rating)
        return complaint

    # --- 통계 (Statistics) ---

    async def get_stats(self, db: AsyncSession, actor: Actor | None) -> ComplaintStats:
        """관리자 통계 — Zeroes rather than errors when there is no data."""
        ensure_access(actor, None, Operation.VIEW_STATS)

        by_status = await complaint_repository.count_by_status(db)
        by_category = await complaint_repository.count_by_category(db)
        resolved = await complaint_repository.resolved_timestamps(db)
        avg_rating = await complaint_repository.average_rating(db)

        durations = [
            (as_utc(updated) - as_utc(created)).total_seconds() / 3600
            for created, updated in resolved
            if created is not None and updated is not None
        ]
        return ComplaintStats(
            total=sum(by_status.values()),
            open=by_status.get(ComplaintStatus.OPEN, 0),
            assigned=by_status.get(ComplaintStatus.ASSIGNED, 0),
            in_progress=by_status.get(ComplaintStatus.IN_PROGRESS, 0),
            resolved=by_status.get(ComplaintStatus.RESOLVED, 0),
            by_category=[
                CategoryCount(category=category, count=by_category[category])
                for category in ComplaintCategory
                if category in by_category
            ],
            avg_resolution_hours=round(sum(durations) / len(durations), 2) if durations else 0.0,
            avg_rating=round(avg_rating, 2) if avg_rating is not None else 0.0,
        )


complaint_service: ComplaintService = ComplaintService()

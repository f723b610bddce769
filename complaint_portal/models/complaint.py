"""민원 SQLAlchemy ORM 모델 정의.

Complaint SQLAlchemy ORM model definition.

Tables:
    - complaints: 시설 민원 (Facility complaints and their lifecycle state)
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from complaint_portal.database import Base
from complaint_portal.models.enums import (
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    enum_values,
)
from complaint_portal.utils.time import utc_now


class Complaint(Base):
    """민원 모델 — 시설 민원 한 건.

    Complaint model — A single facility complaint.
    ``submitter_id``, ``category``, ``priority``, ``deadline_at`` and
    ``created_at`` never change after creation. ``status`` and
    ``assignee_id`` only change through the lifecycle rules in
    ``services.complaint_lifecycle``.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        submitter_id: 작성자 FK (Filing user, CASCADE on user delete)
        assignee_id: 담당 직원 FK (Assigned staff, SET NULL on user delete).
            Open 상태면 항상 NULL. Resolved 민원은 담당 직원 계정이 삭제되면
            NULL이 될 수 있습니다 (A Resolved complaint keeps its status with a
            null assignee once the assigned staff account is deleted).
            Assigned/In-progress 민원은 이 경우 Open으로 되돌아갑니다.
        title: 제목 (5-200 chars)
        description: 내용 (At least 10 chars)
        category: 분류 (plumbing/electrical/facility/cleaning/security/other)
        priority: 우선순위 (Low/Medium/High/Critical)
        location: 위치 (Optional location text)
        status: 상태 (Open/Assigned/In-progress/Resolved)
        attachments: 첨부 URL (Opaque blob storage URL, stored verbatim)
        resolution_notes: 처리 메모 (Staff resolution notes)
        feedback: 피드백 (Submitter feedback after resolution)
        feedback_rating: 평점 (1-5, CHECK ck_complaints_feedback_rating)
        deadline_at: 처리 기한 (Computed from priority at creation)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Bumped on every mutation)
    """

    __tablename__ = "complaints"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    submitter_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    assignee_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[ComplaintCategory] = mapped_column(
        Enum(ComplaintCategory, name="complaint_category", native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
    )
    priority: Mapped[ComplaintPriority] = mapped_column(
        Enum(ComplaintPriority, name="complaint_priority", native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=ComplaintPriority.MEDIUM,
    )
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    status: Mapped[ComplaintStatus] = mapped_column(
        Enum(ComplaintStatus, name="complaint_status", native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=ComplaintStatus.OPEN,
    )
    attachments: Mapped[str | None] = mapped_column(String(500), nullable=True)
    resolution_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    feedback_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deadline_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    __table_args__ = (
        Index("ix_complaints_submitter_id", "submitter_id"),
        Index("ix_complaints_assignee_id", "assignee_id"),
        Index("ix_complaints_status", "status"),
        Index("ix_complaints_created_at", "created_at"),
        CheckConstraint("feedback_rating BETWEEN 1 AND 5", name="ck_complaints_feedback_rating"),
    )

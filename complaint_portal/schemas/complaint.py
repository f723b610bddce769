"""민원 Pydantic 스키마.

Complaint request/response schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from complaint_portal.models.enums import (
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
)
from complaint_portal.utils.pagination import normalize_pagination


class ComplaintCreate(BaseModel):
    """민원 등록 요청 스키마 — Complaint creation request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=10)
    category: ComplaintCategory
    priority: ComplaintPriority = ComplaintPriority.MEDIUM
    location: str | None = Field(default=None, max_length=200)
    attachments: str | None = Field(default=None, max_length=500)  # blob storage file_url

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value: Any) -> Any:
        # null/"" 은 기본값 Medium으로 처리
        return value or ComplaintPriority.MEDIUM


class StatusUpdateRequest(BaseModel):
    """상태 변경 요청 스키마 — Staff/Admin status update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    status: ComplaintStatus | None = None
    resolution_notes: str | None = None

    @model_validator(mode="after")
    def _require_change(self) -> "StatusUpdateRequest":
        if self.status is None and not self.resolution_notes:
            raise ValueError("Provide a status or resolution notes")
        return self


class AssignRequest(BaseModel):
    """담당자 배정 요청 스키마 — Admin assignment request."""

    staff_id: int = Field(..., ge=1)


class FeedbackRequest(BaseModel):
    """피드백 등록 요청 스키마 — Submitter feedback on a resolved complaint."""

    model_config = ConfigDict(str_strip_whitespace=True)

    feedback: str = Field(..., min_length=5)
    feedback_rating: int = Field(..., ge=1, le=5)


class ComplaintFilters(BaseModel):
    """민원 목록 필터 — Optional list filters plus pagination.

    ``page``/``limit`` accept any raw query value: non-numeric input falls
    back to the defaults and out-of-range values are clamped.
    """

    status: ComplaintStatus | None = None
    category: ComplaintCategory | None = None
    priority: ComplaintPriority | None = None
    search: str | None = None
    page: int = 1
    limit: int = 10

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = {key: value for key, value in data.items() if value not in (None, "")}
        data["page"], data["limit"] = normalize_pagination(data.get("page"), data.get("limit"))
        search = data.get("search")
        if isinstance(search, str):
            search = search.strip()
            if search:
                data["search"] = search
            else:
                data.pop("search")
        return data


class ComplaintRead(BaseModel):
    """민원 응답 스키마 — Complaint read model with resolved names."""

    id: int
    submitter_id: int
    submitter_name: str | None = None
    submitter_email: str | None = None
    assignee_id: int | None
    assignee_name: str | None = None
    title: str
    description: str
    category: ComplaintCategory
    priority: ComplaintPriority
    location: str | None
    status: ComplaintStatus
    attachments: str | None
    resolution_notes: str | None
    feedback: str | None
    feedback_rating: int | None
    deadline_at: datetime | None
    is_overdue: bool = False
    created_at: datetime
    updated_at: datetime


class CategoryCount(BaseModel):
    category: ComplaintCategory
    count: int


class ComplaintStats(BaseModel):
    """관리자 통계 — Admin aggregate statistics."""

    total: int = 0
    open: int = 0
    assigned: int = 0
    in_progress: int = 0
    resolved: int = 0
    by_category: list[CategoryCount] = []
    avg_resolution_hours: float = 0.0
    avg_rating: float = 0.0

"""민원 생명주기 상태 머신.

Complaint lifecycle state machine: the transition table, priority-driven
deadlines, assignment and feedback rules. Every function here is pure; the
ones that validate a change return the field changes to persist instead of
touching the store.

    Open ──assign──▶ Assigned ──▶ In-progress ──▶ Resolved (terminal)
"""

from datetime import datetime, timedelta
from typing import Any, Protocol

from complaint_portal.models.enums import ComplaintPriority, ComplaintStatus
from complaint_portal.utils.exceptions import (
    AlreadyRatedError,
    InvalidStateError,
    InvalidTransitionError,
    ValidationError,
)

ALLOWED_TRANSITIONS: dict[ComplaintStatus, tuple[ComplaintStatus, ...]] = {
    ComplaintStatus.OPEN: (ComplaintStatus.ASSIGNED,),
    ComplaintStatus.ASSIGNED: (ComplaintStatus.IN_PROGRESS,),
    ComplaintStatus.IN_PROGRESS: (ComplaintStatus.RESOLVED,),
    ComplaintStatus.RESOLVED: (),
}

PRIORITY_DEADLINE_HOURS: dict[ComplaintPriority, int] = {
    ComplaintPriority.LOW: 168,  # 7일
    ComplaintPriority.MEDIUM: 72,  # 3일
    ComplaintPriority.HIGH: 24,
    ComplaintPriority.CRITICAL: 4,
}
DEFAULT_DEADLINE_HOURS: int = PRIORITY_DEADLINE_HOURS[ComplaintPriority.MEDIUM]

INITIAL_STATUS: ComplaintStatus = ComplaintStatus.OPEN


class LifecycleState(Protocol):
    status: ComplaintStatus
    feedback: str | None
    feedback_rating: int | None


def _coerce_status(value: ComplaintStatus | str) -> ComplaintStatus:
    try:
        return ComplaintStatus(value)
    except ValueError as exc:
        raise ValidationError.for_field("status", f"Invalid status value: {value}") from exc


def allowed_next(status: ComplaintStatus | str) -> tuple[ComplaintStatus, ...]:
    """허용된 다음 상태 — Legal next statuses from ``status``."""
    return ALLOWED_TRANSITIONS[_coerce_status(status)]


def deadline_hours(priority: ComplaintPriority | str | None) -> int:
    """우선순위별 처리 기한(시간) — Unknown priorities use the Medium duration."""
    try:
        return PRIORITY_DEADLINE_HOURS[ComplaintPriority(priority)]
    except ValueError:
        return DEFAULT_DEADLINE_HOURS


def compute_deadline(priority: ComplaintPriority | str | None, created_at: datetime) -> datetime:
    """처리 기한 계산 — ``created_at`` plus the priority's duration."""
    return created_at + timedelta(hours=deadline_hours(priority))


def _check_edge(current: ComplaintStatus, requested: ComplaintStatus) -> None:
    allowed = ALLOWED_TRANSITIONS[current]
    if requested not in allowed:
        raise InvalidTransitionError(current.value, requested.value, [status.value for status in allowed])


def transition(
    complaint: LifecycleState,
    requested_status: ComplaintStatus | str,
    resolution_notes: str | None = None,
) -> dict[str, Any]:
    """상태 전이 검증 — Validate a status-only transition.

    Returns the changes to persist: ``status`` and, when supplied,
    ``resolution_notes``. Open→Assigned is a legal edge but needs an
    assignee, so it is rejected here and only ``assign`` can take it.

    Raises:
        InvalidTransitionError: 허용되지 않은 전이 (edge not in the table)
        InvalidStateError: 배정 없이 Assigned로 전이 시도 (Open→Assigned without assignee)
    """
    current = _coerce_status(complaint.status)
    requested = _coerce_status(requested_status)
    _check_edge(current, requested)
    if requested is ComplaintStatus.ASSIGNED:
        raise InvalidStateError("Complaints move to Assigned only by assigning a staff member")

    changes: dict[str, Any] = {"status": requested}
    if resolution_notes:
        changes["resolution_notes"] = resolution_notes
    return changes


def assign(complaint: LifecycleState, assignee_id: int) -> dict[str, Any]:
    """담당자 배정 — Combined Open→Assigned transition carrying the assignee."""
    _check_edge(_coerce_status(complaint.status), ComplaintStatus.ASSIGNED)
    return {"assignee_id": assignee_id, "status": ComplaintStatus.ASSIGNED}


def submit_feedback(complaint: LifecycleState, feedback: str, rating: Any) -> dict[str, Any]:
    """피드백 등록 — Single-submission feedback on a Resolved complaint.

    Raises:
        InvalidStateError: 해결되지 않은 민원 (status is not Resolved)
        AlreadyRatedError: 이미 피드백 존재 (feedback already recorded)
        ValidationError: 평점이 1~5 정수가 아님 (rating not an int in [1, 5])
    """
    if _coerce_status(complaint.status) is not ComplaintStatus.RESOLVED:
        raise InvalidStateError("Feedback can only be given for resolved complaints")
    if complaint.feedback is not None or complaint.feedback_rating is not None:
        raise AlreadyRatedError()
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError.for_field("feedback_rating", "Rating must be between 1 and 5")
    return {"feedback": feedback, "feedback_rating": rating}

"""민원 생명주기 규칙 테스트 — 전이 테이블, 처리 기한, 배정, 피드백.

Lifecycle rule tests — Transition table, priority deadlines, assignment,
and single-submission feedback. Pure functions, no database.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from complaint_portal.models.enums import ComplaintPriority, ComplaintStatus
from complaint_portal.services import complaint_lifecycle as lifecycle
from complaint_portal.utils.exceptions import (
    AlreadyRatedError,
    InvalidStateError,
    InvalidTransitionError,
    ValidationError,
)

CREATED = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@dataclass
class State:
    status: ComplaintStatus
    feedback: str | None = None
    feedback_rating: int | None = None


class TestDeadlines:
    """우선순위별 처리 기한."""

    @pytest.mark.parametrize(
        ("priority", "hours"),
        [
            (ComplaintPriority.LOW, 168),
            (ComplaintPriority.MEDIUM, 72),
            (ComplaintPriority.HIGH, 24),
            (ComplaintPriority.CRITICAL, 4),
        ],
    )
    def test_deadline_offsets(self, priority, hours):
        deadline = lifecycle.compute_deadline(priority, CREATED)
        assert (deadline - CREATED).total_seconds() == hours * 3600

    def test_critical_deadline_is_four_hours_later(self):
        assert lifecycle.compute_deadline("Critical", CREATED) == datetime(2026, 3, 2, 13, 0, tzinfo=timezone.utc)

    def test_unknown_priority_uses_medium(self):
        """알 수 없는 우선순위는 72시간."""
        assert lifecycle.deadline_hours("Urgent") == 72
        assert lifecycle.deadline_hours(None) == 72


class TestTransitions:
    """상태 전이 테이블."""

    def test_allowed_next_statuses(self):
        assert lifecycle.allowed_next(ComplaintStatus.OPEN) == (ComplaintStatus.ASSIGNED,)
        assert lifecycle.allowed_next(ComplaintStatus.ASSIGNED) == (ComplaintStatus.IN_PROGRESS,)
        assert lifecycle.allowed_next(ComplaintStatus.IN_PROGRESS) == (ComplaintStatus.RESOLVED,)
        assert lifecycle.allowed_next(ComplaintStatus.RESOLVED) == ()

    def test_forward_step_returns_changes(self):
        changes = lifecycle.transition(State(ComplaintStatus.ASSIGNED), "In-progress")
        assert changes == {"status": ComplaintStatus.IN_PROGRESS}

    def test_resolution_notes_carried(self):
        changes = lifecycle.transition(State(ComplaintStatus.IN_PROGRESS), ComplaintStatus.RESOLVED, "Replaced the valve")
        assert changes == {"status": ComplaintStatus.RESOLVED, "resolution_notes": "Replaced the valve"}

    def test_skip_is_rejected_with_allowed_list(self):
        """Open → Resolved 건너뛰기 불가."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            lifecycle.transition(State(ComplaintStatus.OPEN), ComplaintStatus.RESOLVED)
        err = exc_info.value
        assert err.status_code == 400
        assert err.current_status == "Open"
        assert err.allowed == ["Assigned"]
        assert "Valid next status: Assigned" in err.detail

    def test_backward_step_is_rejected(self):
        with pytest.raises(InvalidTransitionError):
            lifecycle.transition(State(ComplaintStatus.IN_PROGRESS), ComplaintStatus.ASSIGNED)

    def test_resolved_is_terminal(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            lifecycle.transition(State(ComplaintStatus.RESOLVED), ComplaintStatus.OPEN)
        assert exc_info.value.allowed == []
        assert exc_info.value.detail.endswith("Valid next status: None")

    def test_same_status_is_rejected(self):
        with pytest.raises(InvalidTransitionError):
            lifecycle.transition(State(ComplaintStatus.ASSIGNED), ComplaintStatus.ASSIGNED)

    def test_assigned_requires_assignment(self):
        """Open → Assigned 는 배정을 통해서만 가능."""
        with pytest.raises(InvalidStateError):
            lifecycle.transition(State(ComplaintStatus.OPEN), ComplaintStatus.ASSIGNED)

    def test_unknown_status_is_validation_error(self):
        with pytest.raises(ValidationError):
            lifecycle.transition(State(ComplaintStatus.OPEN), "Closed")


class TestAssign:

    def test_assign_from_open(self):
        assert lifecycle.assign(State(ComplaintStatus.OPEN), 7) == {
            "assignee_id": 7,
            "status": ComplaintStatus.ASSIGNED,
        }

    @pytest.mark.parametrize(
        "status",
        [ComplaintStatus.ASSIGNED, ComplaintStatus.IN_PROGRESS, ComplaintStatus.RESOLVED],
    )
    def test_assign_outside_open_is_rejected(self, status):
        with pytest.raises(InvalidTransitionError):
            lifecycle.assign(State(status), 7)


class TestFeedback:

    def test_feedback_on_resolved(self):
        changes = lifecycle.submit_feedback(State(ComplaintStatus.RESOLVED), "Fixed quickly", 4)
        assert changes == {"feedback": "Fixed quickly", "feedback_rating": 4}

    def test_feedback_before_resolution_is_rejected(self):
        with pytest.raises(InvalidStateError) as exc_info:
            lifecycle.submit_feedback(State(ComplaintStatus.IN_PROGRESS), "Still waiting", 2)
        assert exc_info.value.detail == "Feedback can only be given for resolved complaints"

    def test_second_feedback_is_rejected(self):
        state = State(ComplaintStatus.RESOLVED, feedback="Great work", feedback_rating=5)
        with pytest.raises(AlreadyRatedError) as exc_info:
            lifecycle.submit_feedback(state, "Changed my mind", 1)
        assert exc_info.value.status_code == 409

    @pytest.mark.parametrize("rating", [0, 6, -1, "5", 4.5, True])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            lifecycle.submit_feedback(State(ComplaintStatus.RESOLVED), "Okay job", rating)

"""접근 정책 테스트 — 역할별 허용/거부 판단.

Access policy tests — Role-driven allow/deny decisions, checked without a
database.
"""

from dataclasses import dataclass

import pytest

from complaint_portal.models.enums import Role
from complaint_portal.schemas.actor import Actor
from complaint_portal.services.access_policy import Operation, can_access, ensure_access
from complaint_portal.utils.exceptions import ForbiddenError, UnauthorizedError

ADMIN = Actor(id=1, role=Role.ADMIN, email="admin@portal.io", name="Admin")
STAFF = Actor(id=2, role=Role.STAFF, email="staff@portal.io", name="Staff")
OTHER_STAFF = Actor(id=3, role=Role.STAFF, email="olga@portal.io", name="Olga")
USER = Actor(id=4, role=Role.USER, email="uma@portal.io", name="Uma")
OTHER_USER = Actor(id=5, role=Role.USER, email="victor@portal.io", name="Victor")


@dataclass
class Ref:
    submitter_id: int
    assignee_id: int | None = None


ASSIGNED_TO_STAFF = Ref(submitter_id=USER.id, assignee_id=STAFF.id)
UNASSIGNED = Ref(submitter_id=USER.id)


class TestAdmin:

    @pytest.mark.parametrize("operation", [Operation.READ, Operation.UPDATE_STATUS, Operation.ASSIGN])
    def test_admin_acts_on_any_complaint(self, operation):
        assert can_access(ADMIN, UNASSIGNED, operation)

    def test_admin_views_stats(self):
        assert can_access(ADMIN, None, Operation.VIEW_STATS)
        assert can_access(ADMIN, None, Operation.MANAGE_USERS)
        assert can_access(ADMIN, None, Operation.MANAGE_UPLOADS)

    def test_admin_cannot_create_or_rate(self):
        assert not can_access(ADMIN, None, Operation.CREATE)
        assert not can_access(ADMIN, ASSIGNED_TO_STAFF, Operation.FEEDBACK)


class TestStaff:

    def test_assigned_staff_reads_and_updates(self):
        assert can_access(STAFF, ASSIGNED_TO_STAFF, Operation.READ)
        assert can_access(STAFF, ASSIGNED_TO_STAFF, Operation.UPDATE_STATUS)

    def test_other_staff_is_denied(self):
        """배정되지 않은 Staff는 조회 불가."""
        assert not can_access(OTHER_STAFF, ASSIGNED_TO_STAFF, Operation.READ)
        assert not can_access(OTHER_STAFF, ASSIGNED_TO_STAFF, Operation.UPDATE_STATUS)

    def test_staff_cannot_assign_or_view_stats(self):
        assert not can_access(STAFF, ASSIGNED_TO_STAFF, Operation.ASSIGN)
        assert not can_access(STAFF, None, Operation.VIEW_STATS)
        assert not can_access(STAFF, None, Operation.CREATE)
        assert not can_access(STAFF, None, Operation.MANAGE_UPLOADS)


class TestUser:

    def test_user_creates(self):
        assert can_access(USER, None, Operation.CREATE)

    def test_owner_reads_and_rates(self):
        assert can_access(USER, ASSIGNED_TO_STAFF, Operation.READ)
        assert can_access(USER, ASSIGNED_TO_STAFF, Operation.FEEDBACK)

    def test_non_owner_is_denied(self):
        assert not can_access(OTHER_USER, ASSIGNED_TO_STAFF, Operation.READ)
        assert not can_access(OTHER_USER, ASSIGNED_TO_STAFF, Operation.FEEDBACK)

    def test_user_cannot_update_status(self):
        assert not can_access(USER, ASSIGNED_TO_STAFF, Operation.UPDATE_STATUS)

    def test_user_cannot_manage_uploads(self):
        assert not can_access(USER, None, Operation.MANAGE_UPLOADS)


class TestEnsureAccess:

    def test_missing_actor_is_unauthorized(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            ensure_access(None, UNASSIGNED, Operation.READ)
        assert exc_info.value.status_code == 401

    def test_complaint_operation_without_complaint_is_denied(self):
        with pytest.raises(ForbiddenError):
            ensure_access(ADMIN, None, Operation.READ)

    def test_denial_messages(self):
        with pytest.raises(ForbiddenError) as exc_info:
            ensure_access(OTHER_USER, ASSIGNED_TO_STAFF, Operation.READ)
        assert exc_info.value.detail == "You can only view your own complaints"

        with pytest.raises(ForbiddenError) as exc_info:
            ensure_access(OTHER_STAFF, ASSIGNED_TO_STAFF, Operation.UPDATE_STATUS)
        assert exc_info.value.detail == "This complaint is not assigned to you"

    def test_returns_actor(self):
        assert ensure_access(USER, None, Operation.CREATE) is USER

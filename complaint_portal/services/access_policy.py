"""민원 접근 정책 — 순수 함수.

Complaint access policy. Pure decision functions: given an actor, a
complaint (or None for complaint-less operations) and an operation, decide
allow/deny. No I/O, no side effects.

Rules:
    Admin: 모든 민원 조회/상태변경/배정, 통계, 사용자·업로드 관리
           (read, update status, assign, stats, user and upload management)
    Staff: 본인에게 배정된 민원만 조회/상태변경 (read/update only complaints assigned to them)
    User:  본인이 등록한 민원만 조회, 등록, 해결된 본인 민원에 피드백
           (read own complaints, create, feedback on own complaints)
"""

import enum
from typing import Protocol, assert_never

from complaint_portal.models.enums import Role
from complaint_portal.schemas.actor import Actor
from complaint_portal.utils.exceptions import ForbiddenError, UnauthorizedError


class Operation(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE_STATUS = "update_status"
    ASSIGN = "assign"
    FEEDBACK = "feedback"
    VIEW_STATS = "view_stats"
    MANAGE_USERS = "manage_users"
    MANAGE_UPLOADS = "manage_uploads"


class ComplaintRef(Protocol):
    """정책 판단에 필요한 최소 필드 — Fields the policy looks at."""

    submitter_id: int
    assignee_id: int | None


# 작업별 단일 민원이 필요한지 여부 — Operations evaluated against one complaint
_COMPLAINT_OPERATIONS = frozenset({Operation.READ, Operation.UPDATE_STATUS, Operation.ASSIGN, Operation.FEEDBACK})


def _denial_message(actor: Actor, operation: Operation) -> str:
    if operation is Operation.CREATE:
        return "Only users can register complaints"
    if operation is Operation.ASSIGN:
        return "Only admins can assign complaints"
    if operation is Operation.VIEW_STATS:
        return "Only admins can view complaint statistics"
    if operation is Operation.MANAGE_USERS:
        return "Only admins can manage users"
    if operation is Operation.MANAGE_UPLOADS:
        return "Only admins can delete uploaded files"
    if operation is Operation.FEEDBACK:
        return "Only the submitter can give feedback on a complaint"
    if actor.role is Role.STAFF:
        return "This complaint is not assigned to you"
    if operation is Operation.UPDATE_STATUS:
        return "Only staff and admins can update complaint status"
    return "You can only view your own complaints"


def can_access(actor: Actor, complaint: ComplaintRef | None, operation: Operation) -> bool:
    """접근 허용 여부 — Return True when ``actor`` may perform ``operation``.

    Role is the sole determinant of which rule applies; ownership and
    assignment are compared by id. Complaint-scoped operations with no
    complaint are denied.
    """
    if operation in _COMPLAINT_OPERATIONS and complaint is None:
        return False

    role = actor.role
    if role is Role.ADMIN:
        return operation in (
            Operation.READ,
            Operation.UPDATE_STATUS,
            Operation.ASSIGN,
            Operation.VIEW_STATS,
            Operation.MANAGE_USERS,
            Operation.MANAGE_UPLOADS,
        )
    if role is Role.STAFF:
        if operation in (Operation.READ, Operation.UPDATE_STATUS):
            return complaint is not None and complaint.assignee_id == actor.id
        return False
    if role is Role.USER:
        if operation is Operation.CREATE:
            return True
        if operation in (Operation.READ, Operation.FEEDBACK):
            return complaint is not None and complaint.submitter_id == actor.id
        return False
    assert_never(role)


def ensure_access(actor: Actor | None, complaint: ComplaintRef | None, operation: Operation) -> Actor:
    """접근 검사 — Raise UnauthorizedError without an actor, ForbiddenError when denied.

    Returns the actor so callers can narrow ``Actor | None`` in one step.
    """
    if actor is None:
        raise UnauthorizedError()
    if not can_access(actor, complaint, operation):
        raise ForbiddenError(_denial_message(actor, operation))
    return actor

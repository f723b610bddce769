"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Every error the portal raises is one of these HTTPException subclasses, so
services and policies raise them directly and the exception handlers in
``main`` render them as ``{success: false, message, ...}``.

Usage:
    from complaint_portal.utils.exceptions import NotFoundError, ForbiddenError
    raise NotFoundError("Complaint not found")
"""

from collections.abc import Sequence
from typing import Any

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """422 Unprocessable Entity 예외 — 입력값 검증 실패.

    Raised for malformed or out-of-range input the caller can fix.
    Carries a field-level breakdown in ``errors``.

    Args:
        detail: 오류 메시지 (Error message)
        errors: 필드별 오류 목록 [{"field": ..., "message": ...}]
    """

    def __init__(
        self,
        detail: str = "Validation failed",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)
        self.errors: list[dict[str, Any]] = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, [{"field": field, "message": message}])


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증되지 않은 요청 (Unauthenticated actor)."""

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 접근 정책상 권한 없음 (Access policy denied)."""

    def __init__(self, detail: str = "You do not have permission to access this resource") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 민원 또는 담당자를 찾을 수 없음."""

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidTransitionError(HTTPException):
    """400 Bad Request 예외 — 허용되지 않은 상태 전이.

    Lifecycle violation. Reports the current status and every legal next status.

    Args:
        current_status: 현재 상태 (Current status value)
        requested_status: 요청된 상태 (Requested status value)
        allowed: 허용된 다음 상태 목록 (Legal next statuses)
    """

    def __init__(self, current_status: str, requested_status: str, allowed: Sequence[str]) -> None:
        self.current_status: str = current_status
        self.requested_status: str = requested_status
        self.allowed: list[str] = list(allowed)
        detail = (
            f"Invalid status transition from {current_status} to {requested_status}. "
            f"Valid next status: {', '.join(self.allowed) or 'None'}"
        )
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidStateError(HTTPException):
    """400 Bad Request 예외 — 현재 상태에서 허용되지 않는 작업."""

    def __init__(self, detail: str = "Operation not allowed in the current state") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidAssigneeError(HTTPException):
    """400 Bad Request 예외 — 배정 대상이 Staff가 아님."""

    def __init__(self, detail: str = "Complaints can only be assigned to staff members") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AlreadyRatedError(HTTPException):
    """409 Conflict 예외 — 이미 피드백이 등록된 민원."""

    def __init__(self, detail: str = "Feedback has already been submitted for this complaint") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 고유 제약 위반 (e.g. 이미 등록된 이메일)."""

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

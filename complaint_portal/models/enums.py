"""도메인 열거형 정의.

Domain enumerations shared by models, schemas, and services.
Values are the exact strings stored in the database and exposed over the API.
"""

import enum


class Role(str, enum.Enum):
    """사용자 역할 — Actor role. Closed set; every dispatch on it must be exhaustive."""

    USER = "User"
    STAFF = "Staff"
    ADMIN = "Admin"


class ComplaintStatus(str, enum.Enum):
    """민원 상태 — Complaint lifecycle status."""

    OPEN = "Open"
    ASSIGNED = "Assigned"
    IN_PROGRESS = "In-progress"
    RESOLVED = "Resolved"


class ComplaintPriority(str, enum.Enum):
    """민원 우선순위 — Complaint priority, drives the deadline."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ComplaintCategory(str, enum.Enum):
    """민원 분류 — Complaint category."""

    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    FACILITY = "facility"
    CLEANING = "cleaning"
    SECURITY = "security"
    OTHER = "other"


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """SQLAlchemy Enum 컬럼용 값 목록 — Persist enum values rather than member names."""
    return [member.value for member in enum_cls]

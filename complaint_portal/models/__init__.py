"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata,
which Alembic and ``Base.metadata.create_all`` rely on.

Modules:
    enums: 역할, 상태, 우선순위, 분류 (Role, status, priority, category)
    user: 사용자 (Users)
    complaint: 민원 (Complaints)
"""

from complaint_portal.models.enums import ComplaintCategory, ComplaintPriority, ComplaintStatus, Role
from complaint_portal.models.user import User
from complaint_portal.models.complaint import Complaint

__all__ = [
    "ComplaintCategory", "ComplaintPriority", "ComplaintStatus", "Role",
    "User",
    "Complaint",
]

"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
Users carry a single role (User, Staff, Admin); Staff members belong
to a department.

Tables:
    - users: 사용자 계정 (User accounts)
"""

from datetime import datetime

from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from complaint_portal.database import Base
from complaint_portal.models.enums import Role, enum_values
from complaint_portal.utils.time import utc_now


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Email is globally unique and used as the login identifier.

    Attributes:
        id: 고유 식별자 (Auto-increment identifier)
        name: 표시 이름 (Display name)
        email: 이메일 (Login email, unique)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        role: 역할 (User, Staff or Admin)
        department: 부서 (Department, Staff only)
        contact_info: 연락처 (Free-form contact info, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # 로그인 이메일 — Login email (전역 고유, globally unique)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", native_enum=False, values_callable=enum_values, length=20),
        nullable=False,
        default=Role.USER,
    )
    department: Mapped[str | None] = mapped_column(String(50), nullable=True)
    contact_info: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

"""인증 및 사용자 관리 Pydantic 스키마.

Authentication and user-management request/response schemas.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from complaint_portal.models.enums import Role


class RegisterRequest(BaseModel):
    """회원가입 요청 스키마.

    Attributes:
        name: 이름 (2-100 chars)
        email: 이메일 (Login email)
        password: 비밀번호 (At least 6 chars, bcrypt-hashed on server)
        role: 역할 (Admin requires the registration key)
        department: 부서 (Required for Staff)
        contact_info: 연락처 (Optional, <= 100 chars)
        admin_key: 관리자 등록 키 (Admin registration key)
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Role.USER
    department: str | None = Field(default=None, max_length=50)
    contact_info: str | None = Field(default=None, max_length=100)
    admin_key: str | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=2, max_length=100)
    contact_info: str | None = Field(default=None, max_length=100)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class UserUpdate(BaseModel):
    """관리자용 사용자 수정 스키마 — Admin role/department update."""

    role: Role
    department: str | None = Field(default=None, max_length=50)


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    department: str | None = None
    contact_info: str | None = None
    created_at: datetime | None = None


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 — Login/registration response."""

    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    user: UserRead

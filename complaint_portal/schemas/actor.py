"""인증된 행위자 값 객체.

Authenticated actor value object handed to every service call by the
identity collaborator (the bearer-token dependency in ``api.deps``).
"""

from pydantic import BaseModel, ConfigDict

from complaint_portal.models.enums import Role


class Actor(BaseModel):
    """인증된 사용자 — Authenticated identity performing an operation.

    Attributes:
        id: 사용자 ID (User identifier)
        role: 역할 (User, Staff or Admin)
        email: 이메일 (Email)
        name: 이름 (Display name)
    """

    model_config = ConfigDict(frozen=True)

    id: int
    role: Role
    email: str
    name: str

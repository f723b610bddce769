"""인증 서비스 — 회원가입, 로그인, 프로필, 토큰 해석.

Auth Service — Registration, login, profile maintenance, and resolving a
bearer token into the Actor every complaint operation receives.
"""

import logging

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.config import Settings, settings
from complaint_portal.models.enums import Role
from complaint_portal.models.user import User
from complaint_portal.repositories.user_repository import user_repository
from complaint_portal.schemas.actor import Actor
from complaint_portal.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
)
from complaint_portal.utils.exceptions import (
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from complaint_portal.utils.jwt import create_access_token, decode_token
from complaint_portal.utils.password import hash_password, verify_password

logger = logging.getLogger(__name__)


def to_actor(user: User) -> Actor:
    return Actor(id=user.id, role=user.role, email=user.email, name=user.name)


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Args:
        config: 애플리케이션 설정 (JWT and admin-registration settings)
    """

    def __init__(self, config: Settings) -> None:
        self.config: Settings = config

    def issue_token(self, user: User) -> str:
        """JWT 액세스 토큰 발급 — Access token carrying the actor fields."""
        return create_access_token(
            {"sub": str(user.id), "role": user.role.value, "email": user.email, "name": user.name},
            self.config,
        )

    def _admin_registration_allowed(self, admin_key: str | None) -> bool:
        return (
            self.config.ADMIN_REGISTRATION_ENABLED
            and bool(self.config.ADMIN_REGISTRATION_KEY)
            and admin_key == self.config.ADMIN_REGISTRATION_KEY
        )

    async def register(self, db: AsyncSession, data: RegisterRequest) -> tuple[User, str]:
        """회원가입 — Admin accounts need the registration key; emails are unique."""
        if data.role is Role.ADMIN and not self._admin_registration_allowed(data.admin_key):
            logger.warning("auth.register.admin_denied email=%s", data.email)
            raise ForbiddenError("Admin registration is not allowed. Please contact system administrator.")

        email = data.email.lower()
        if await user_repository.get_by_email(db, email) is not None:
            raise DuplicateError("User with this email already exists")

        user = await user_repository.create(
            db,
            {
                "name": data.name,
                "email": email,
                "password_hash": hash_password(data.password),
                "role": data.role,
                "department": data.department if data.role is Role.STAFF else None,
                "contact_info": data.contact_info,
            },
        )
        logger.info("auth.register user=%s role=%s", user.id, user.role.value)
        return user, self.issue_token(user)

    async def login(self, db: AsyncSession, data: LoginRequest) -> tuple[User, str]:
        user = await user_repository.get_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.warning("auth.login.failed email=%s", data.email)
            raise UnauthorizedError("Invalid email or password")
        logger.info("auth.login user=%s role=%s", user.id, user.role.value)
        return user, self.issue_token(user)

    async def resolve_actor(self, db: AsyncSession, token: str) -> Actor:
        """토큰 → Actor — Decode a bearer token and load the current user record."""
        try:
            payload = decode_token(token, self.config)
            if payload.get("type") != "access":
                raise UnauthorizedError("Invalid token type")
            user_id = int(payload["sub"])
        except (jwt.InvalidTokenError, KeyError, TypeError, ValueError):
            raise UnauthorizedError("Invalid or expired token")

        user = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise UnauthorizedError("User not found")
        return to_actor(user)

    async def get_profile(self, db: AsyncSession, actor: Actor) -> User:
        user = await user_repository.get_by_id(db, actor.id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(self, db: AsyncSession, actor: Actor, data: ProfileUpdate) -> User:
        user = await self.get_profile(db, actor)
        return await user_repository.update(db, user, data.model_dump(exclude_unset=True, exclude_none=True))

    async def change_password(self, db: AsyncSession, actor: Actor, data: ChangePasswordRequest) -> None:
        user = await self.get_profile(db, actor)
        if not verify_password(data.current_password, user.password_hash):
            raise ValidationError.for_field("current_password", "Current password is incorrect")
        await user_repository.update(db, user, {"password_hash": hash_password(data.new_password)})
        logger.info("auth.password_changed user=%s", user.id)


auth_service: AuthService = AuthService(settings)

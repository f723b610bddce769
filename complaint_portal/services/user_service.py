"""사용자 관리 서비스 — 관리자 전용.

User management service — Admin-only staff listing, role changes, and
account removal.
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.models.enums import Role
from complaint_portal.models.user import User
from complaint_portal.repositories.complaint_repository import complaint_repository
from complaint_portal.repositories.user_repository import user_repository
from complaint_portal.schemas.actor import Actor
from complaint_portal.schemas.auth import UserUpdate
from complaint_portal.services.access_policy import Operation, ensure_access
from complaint_portal.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UserService:

    async def list_staff(self, db: AsyncSession, actor: Actor | None) -> Sequence[User]:
        ensure_access(actor, None, Operation.MANAGE_USERS)
        return await user_repository.list_by_role(db, Role.STAFF)

    async def list_users(self, db: AsyncSession, actor: Actor | None) -> Sequence[User]:
        ensure_access(actor, None, Operation.MANAGE_USERS)
        return await user_repository.list_all(db)

    async def update_user(
        self,
        db: AsyncSession,
        actor: Actor | None,
        user_id: int,
        data: UserUpdate,
    ) -> User:
        """역할/부서 변경 — Staff must have a department; admins keep their own role."""
        actor = ensure_access(actor, None, Operation.MANAGE_USERS)
        if data.role is Role.STAFF and not data.department:
            raise ValidationError.for_field("department", "Staff members must have a department assigned")
        if user_id == actor.id and data.role is not Role.ADMIN:
            raise ValidationError.for_field("role", "You cannot change your own role")

        user = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")

        updated = await user_repository.update(
            db,
            user,
            {"role": data.role, "department": data.department if data.role is Role.STAFF else None},
        )
        logger.info("users.updated admin=%s user=%s role=%s", actor.id, user_id, data.role.value)
        return updated

    async def delete_user(self, db: AsyncSession, actor: Actor | None, user_id: int) -> None:
        """사용자 삭제 — Filed complaints go with the account; assignments are released."""
        actor = ensure_access(actor, None, Operation.MANAGE_USERS)
        if user_id == actor.id:
            raise ValidationError.for_field("id", "You cannot delete your own account")

        user = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        if user.role is Role.ADMIN:
            raise ValidationError.for_field("id", "Cannot delete admin users")

        removed = await complaint_repository.delete_for_submitter(db, user_id)
        released = await complaint_repository.release_assignee(db, user_id)
        await user_repository.delete(db, user)
        logger.info(
            "users.deleted admin=%s user=%s complaints_removed=%s complaints_released=%s",
            actor.id, user_id, removed, released,
        )


user_service: UserService = UserService()

"""사용자 레포지토리.

User repository — Handles users DB queries.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.models.enums import Role
from complaint_portal.models.user import User
from complaint_portal.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        result = await db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def list_by_role(self, db: AsyncSession, role: Role) -> Sequence[User]:
        query: Select = select(User).where(User.role == role).order_by(User.name)
        result = await db.execute(query)
        return result.scalars().all()

    async def list_all(self, db: AsyncSession) -> Sequence[User]:
        result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
        return result.scalars().all()

    async def get_contacts(self, db: AsyncSession, user_ids: set[int]) -> dict[int, tuple[str, str]]:
        """ID → (이름, 이메일) 매핑 — Names and emails for the given users."""
        if not user_ids:
            return {}
        result = await db.execute(select(User.id, User.name, User.email).where(User.id.in_(user_ids)))
        return {row.id: (row.name, row.email) for row in result}


user_repository: UserRepository = UserRepository()

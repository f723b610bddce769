"""FastAPI 의존성 주입 모듈 — 인증.

FastAPI dependency injection module — Authentication.
Resolves the bearer token into the Actor passed to every service call.
Authorization itself lives in ``services.access_policy``.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출 (HTTPBearer extracts the token)
    3. auth_service.resolve_actor()가 JWT를 검증하고 사용자를 조회
       (The token is verified and the user row is loaded)
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.database import get_db
from complaint_portal.schemas.actor import Actor
from complaint_portal.services.auth_service import auth_service
from complaint_portal.utils.exceptions import UnauthorizedError

# 헤더가 없어도 401을 직접 발생시키기 위해 auto_error=False
# (Missing headers are reported through UnauthorizedError, not HTTPBearer's 403)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_optional_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Actor | None:
    """토큰이 있으면 Actor, 없으면 None — Actor when a bearer token is present."""
    if credentials is None:
        return None
    return await auth_service.resolve_actor(db, credentials.credentials)


async def get_current_actor(
    actor: Annotated[Actor | None, Depends(get_optional_actor)],
) -> Actor:
    """인증된 Actor를 반환합니다.

    Raises:
        UnauthorizedError(401): 토큰 없음/유효하지 않음 (Missing or invalid token)
    """
    if actor is None:
        raise UnauthorizedError("Access denied. No token provided.")
    return actor

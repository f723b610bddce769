"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification.
Both helpers take the Settings instance explicitly instead of reading
process-wide configuration.

JWT Payload Structure:
    {
        "sub": "42",              # 사용자 ID (User identifier)
        "role": "Staff",          # 역할 (Role value)
        "email": "a@b.com",       # 이메일 (Email)
        "name": "Jane",           # 이름 (Display name)
        "exp": 1234567890,        # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"          # 토큰 유형 (Token type discriminator: access or upload)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from complaint_portal.config import Settings


def create_access_token(data: dict[str, Any], config: Settings) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Generate a JWT access token that expires after
    ``JWT_ACCESS_TOKEN_EXPIRE_MINUTES``.

    Args:
        data: JWT 페이로드 데이터 (Payload, typically sub/role/email/name)
        config: 애플리케이션 설정 (Application settings)

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=config.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str, config: Settings) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])


def create_upload_token(key: str, actor_id: int, config: Settings, expires_seconds: int = 3600) -> str:
    """로컬 업로드 서명 토큰 — Token binding one storage key to the actor who requested it."""
    expire: datetime = datetime.now(timezone.utc) + timedelta(seconds=expires_seconds)
    payload: dict[str, Any] = {"sub": str(actor_id), "key": key, "exp": expire, "type": "upload"}
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)

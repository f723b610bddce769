"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification using bcrypt directly.
"""

import bcrypt

# bcrypt cost factor (work factor 2^12)
BCRYPT_ROUNDS: int = 12


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Args:
        password: 평문 비밀번호 (Plain text password)
        rounds: bcrypt cost factor

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))

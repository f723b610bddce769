"""시간 유틸리티 — UTC 시각 헬퍼.

UTC time helpers. SQLite drops tzinfo on read-back, so values coming out of
the store are normalized with ``as_utc`` before comparison.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """현재 UTC 시각 — Current timezone-aware UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """naive 값은 UTC로 간주합니다 — Treat naive datetimes as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

"""페이지네이션 유틸리티 모듈.

Pagination utility module.
Normalizes raw ``page``/``limit`` parameters and builds the Page result
returned by scoped list queries.
"""

import math
from typing import Any

from pydantic import BaseModel

DEFAULT_PAGE: int = 1
DEFAULT_LIMIT: int = 10
MAX_LIMIT: int = 100


def _to_int(value: Any) -> int | None:
    """정수 변환 — Parse an int from query input, None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_pagination(page: Any = None, limit: Any = None) -> tuple[int, int]:
    """page/limit 값을 정규화합니다.

    Normalize pagination input. Missing or non-numeric values fall back to the
    defaults (page 1, limit 10); ``page`` is clamped to >= 1 and ``limit`` to
    [1, 100].

    Args:
        page: 요청 페이지 번호 (Requested page, any type)
        limit: 페이지당 항목 수 (Requested page size, any type)

    Returns:
        tuple[int, int]: (page, limit)
    """
    parsed_page = _to_int(page)
    parsed_limit = _to_int(limit)
    # parseInt(x) || default 와 같이 0은 기본값으로 취급 (0 falls back to the default)
    normalized_page = max(1, parsed_page or DEFAULT_PAGE)
    normalized_limit = min(MAX_LIMIT, max(1, parsed_limit or DEFAULT_LIMIT))
    return normalized_page, normalized_limit


class Page(BaseModel):
    """페이지네이션 결과 모델.

    Pagination result model.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total_count: 전체 항목 수 (Total count across all pages)
        total_pages: 전체 페이지 수 (ceil(total_count / limit))
        page: 현재 페이지 번호 (Current page number, 1-based)
        limit: 페이지당 항목 수 (Items per page)
        has_next: 다음 페이지 존재 여부 (page < total_pages)
        has_prev: 이전 페이지 존재 여부 (page > 1)
    """

    items: list[Any]
    total_count: int
    total_pages: int
    page: int
    limit: int
    has_next: bool
    has_prev: bool

    def pagination(self) -> dict[str, Any]:
        """응답용 메타데이터 — Pagination metadata for API responses."""
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total_count,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
        }


def build_page(items: list[Any], total_count: int, page: int, limit: int) -> Page:
    """Page 결과를 생성합니다 — Build a Page from one page of items and the total."""
    total_pages = math.ceil(total_count / limit) if limit else 0
    return Page(
        items=items,
        total_count=total_count,
        total_pages=total_pages,
        page=page,
        limit=limit,
        has_next=page < total_pages,
        has_prev=page > 1,
    )

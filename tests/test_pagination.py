"""페이지네이션 및 목록 필터 정규화 테스트.

Pagination normalization and list-filter parsing tests.
"""

import pytest

from complaint_portal.models.enums import ComplaintCategory, ComplaintStatus
from complaint_portal.schemas.common import validate_input
from complaint_portal.schemas.complaint import ComplaintFilters
from complaint_portal.utils.exceptions import ValidationError
from complaint_portal.utils.pagination import build_page, normalize_pagination


class TestNormalizePagination:

    @pytest.mark.parametrize(
        ("page", "limit", "expected"),
        [
            (None, None, (1, 10)),
            ("3", "20", (3, 20)),
            (0, 0, (1, 10)),
            (-2, -5, (1, 1)),
            (2, 500, (2, 100)),
            ("abc", "xyz", (1, 10)),
            (" 4 ", "25", (4, 25)),
        ],
    )
    def test_normalization(self, page, limit, expected):
        assert normalize_pagination(page, limit) == expected


class TestBuildPage:

    def test_metadata(self):
        page = build_page(list(range(10)), 25, 1, 10)
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_prev is False
        assert page.pagination() == {
            "page": 1,
            "limit": 10,
            "total": 25,
            "total_pages": 3,
            "has_next": True,
            "has_prev": False,
        }

    def test_last_page(self):
        page = build_page(list(range(5)), 25, 3, 10)
        assert page.has_next is False
        assert page.has_prev is True

    def test_empty(self):
        page = build_page([], 0, 1, 10)
        assert page.total_pages == 0
        assert page.has_next is False


class TestComplaintFilters:

    def test_blank_values_are_ignored(self):
        filters = validate_input(
            ComplaintFilters,
            {"status": "", "category": None, "search": "   ", "page": None, "limit": ""},
        )
        assert filters.status is None
        assert filters.category is None
        assert filters.search is None
        assert (filters.page, filters.limit) == (1, 10)

    def test_values_are_parsed(self):
        filters = validate_input(
            ComplaintFilters,
            {"status": "In-progress", "category": "plumbing", "search": " leak ", "limit": "500"},
        )
        assert filters.status is ComplaintStatus.IN_PROGRESS
        assert filters.category is ComplaintCategory.PLUMBING
        assert filters.search == "leak"
        assert filters.limit == 100

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_input(ComplaintFilters, {"status": "Closed"})
        assert exc_info.value.errors[0]["field"] == "status"

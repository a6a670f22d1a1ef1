"""Unit tests for the Page model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pagestream import Page, page_is_last, page_items, page_total_pages


class TestPage:
    """Test Page validation and helpers."""

    def test_valid_page(self):
        page = Page(items=[1, 2], page_index=0, page_size=2, total_pages=3, is_last=False)

        assert page_items(page) == [1, 2]
        assert page_total_pages(page) == 3
        assert page_is_last(page) is False

    def test_optional_fields_default_to_none(self):
        page = Page(page_index=0, page_size=10)

        assert page.items == []
        assert page_total_pages(page) is None
        assert page_is_last(page) is None

    def test_more_items_than_page_size_rejected(self):
        with pytest.raises(ValidationError, match="more than page_size"):
            Page(items=[1, 2, 3], page_index=0, page_size=2)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"page_index": -1, "page_size": 10},
            {"page_index": 0, "page_size": 0},
            {"page_index": 0, "page_size": 10, "total_pages": -1},
        ],
    )
    def test_invalid_fields(self, kwargs):
        with pytest.raises(ValidationError):
            Page(**kwargs)

    def test_frozen(self):
        page = Page(page_index=0, page_size=10)
        with pytest.raises(ValidationError):
            page.page_index = 1


class TestPageFromSequence:
    """Test slicing in-memory sequences into pages."""

    def test_middle_page(self):
        page = Page.from_sequence(list(range(25)), 1, 10)

        assert page.items == list(range(10, 20))
        assert page.total_items == 25
        assert page.total_pages == 3
        assert page.is_last is False

    def test_last_partial_page(self):
        page = Page.from_sequence(list(range(25)), 2, 10)

        assert page.items == [20, 21, 22, 23, 24]
        assert page.is_last is True

    def test_exactly_full_last_page(self):
        page = Page.from_sequence(list(range(20)), 1, 10)

        assert len(page.items) == 10
        assert page.is_last is True

    def test_empty_source_reports_one_page(self):
        page = Page.from_sequence([], 0, 10)

        assert page.items == []
        assert page.total_pages == 1
        assert page.is_last is True

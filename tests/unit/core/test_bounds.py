"""Unit tests for bound policies, capabilities and exceptions."""

from __future__ import annotations

import pytest

from pagestream import (
    Capability,
    ConfigurationError,
    Discover,
    ExactItemCount,
    ExactPageCount,
    ExtractionError,
    FetchError,
    LastPageSignal,
    LazyItemCount,
    PagingError,
    TraversalError,
    page_total_pages,
)
from pagestream.core.bounds import pages_for


class TestBoundPolicies:
    """Test bound validation."""

    def test_exact_item_count(self):
        assert ExactItemCount(0).count == 0
        with pytest.raises(ConfigurationError):
            ExactItemCount(-1)

    def test_exact_page_count(self):
        assert ExactPageCount(3).pages == 3
        with pytest.raises(ConfigurationError):
            ExactPageCount(-5)

    def test_lazy_item_count_requires_callable(self):
        with pytest.raises(ConfigurationError, match="callable"):
            LazyItemCount(10)

    def test_lazy_item_count_does_not_call_supplier(self):
        calls = []
        LazyItemCount(lambda: calls.append(1) or 3)
        assert calls == []

    def test_discover_requires_extractor(self):
        assert Discover(page_total_pages).total_pages_extractor is page_total_pages
        with pytest.raises(ConfigurationError, match="total pages extractor"):
            Discover()

    def test_bounds_are_frozen(self):
        bound = ExactItemCount(10)
        with pytest.raises(AttributeError):
            bound.count = 20

    @pytest.mark.parametrize(
        ("count", "page_size", "expected"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (1000, 100, 10), (1050, 100, 11)],
    )
    def test_pages_for(self, count, page_size, expected):
        assert pages_for(count, page_size) == expected


class TestCapability:
    """Test capability descriptors."""

    def test_cursor_capabilities(self):
        caps = Capability.cursor()
        for flag in Capability:
            assert flag in caps

    def test_child_capabilities(self):
        caps = Capability.child()
        assert caps == (
            Capability.ORDERED | Capability.IMMUTABLE | Capability.SIZED | Capability.SINGLE_PASS
        )

    def test_last_page_signal_values(self):
        assert LastPageSignal("short_page") is LastPageSignal.SHORT_PAGE
        assert LastPageSignal("backend_flag") is LastPageSignal.BACKEND_FLAG


class TestExceptions:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize(
        "error_type", [FetchError, ExtractionError, ConfigurationError, TraversalError]
    )
    def test_all_errors_derive_from_paging_error(self, error_type):
        assert issubclass(error_type, PagingError)

    def test_fetch_error_attributes(self):
        error = FetchError("boom", page_index=4, page_size=25)
        assert str(error) == "boom"
        assert error.page_index == 4
        assert error.page_size == 25

    def test_extraction_error_defaults(self):
        error = ExtractionError("bad page")
        assert error.page_index is None

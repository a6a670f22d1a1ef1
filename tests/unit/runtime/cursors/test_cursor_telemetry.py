"""Unit tests for cursor log records."""

from __future__ import annotations

import logging

import pytest

from pagestream import ExactItemCount, FetchError, page_items, page_total_pages
from pagestream.runtime.cursors import PageCursor, PrefetchingCursor

LOGGER = "pagestream.runtime.cursors.telemetry"


class TestCursorTelemetry:
    """Test structured log events emitted by cursors."""

    def test_page_fetched_records(self, make_repo, caplog):
        repo = make_repo(150)
        cursor = PageCursor(100, repo.fetch_page, page_items, ExactItemCount(150))

        with caplog.at_level(logging.DEBUG, logger=LOGGER):
            while cursor.advance_one(lambda item: None):
                pass

        fetched = [r for r in caplog.records if r.getMessage() == "page_fetched"]
        assert [r.page_index for r in fetched] == [0, 1]
        assert [r.items for r in fetched] == [100, 50]
        assert all(r.unit == "cursor" for r in fetched)

    def test_prefetch_and_split_records(self, repo, caplog):
        cursor = PrefetchingCursor(100, repo.fetch_page, page_items, page_total_pages)

        with caplog.at_level(logging.DEBUG, logger=LOGGER):
            cursor.split()

        messages = [r.getMessage() for r in caplog.records]
        assert messages == ["prefetch_completed", "cursor_split"]
        assert caplog.records[0].total_pages == 10
        assert caplog.records[1].prefetched is True

    def test_page_error_record(self, make_repo, caplog):
        repo = make_repo(100, fail_on={0})
        cursor = PageCursor(100, repo.fetch_page, page_items, ExactItemCount(100))

        with caplog.at_level(logging.ERROR, logger=LOGGER):
            with pytest.raises(FetchError):
                cursor.advance_one(lambda item: None)

        (record,) = caplog.records
        assert record.getMessage() == "page_error"
        assert record.stage == "fetch"
        assert record.error_type == "ConnectionError"

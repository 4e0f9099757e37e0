"""Tests for log masking."""

import logging

from src.core.logger import SensitiveDataFilter


def make_record(msg, *args):
    return logging.LogRecord("postscroll", logging.INFO, __file__, 1, msg, args, None)


class TestSensitiveDataFilter:
    def test_masks_email(self):
        record = make_record("comment by Eliseo@gardner.biz loaded")
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "comment by [EMAIL] loaded"

    def test_masks_query_string_keeps_path(self):
        record = make_record("GET https://example.org/posts?userId=1&x=2 failed")
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "GET https://example.org/posts?[QUERY] failed"

    def test_masks_formatted_args(self):
        record = make_record("author %s", "reader7@example.org")
        SensitiveDataFilter().filter(record)
        assert record.getMessage() == "author [EMAIL]"

    def test_plain_message_untouched(self):
        record = make_record("Fetched 100 posts")
        assert SensitiveDataFilter().filter(record) is True
        assert record.getMessage() == "Fetched 100 posts"

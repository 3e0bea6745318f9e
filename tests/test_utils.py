"""
Tests for dotted-path helpers, name normalisation, dates and headers.
"""

from datetime import datetime, timezone

import pytest

from base_api_client.utils import (
    as_datetime,
    dotted_get,
    dotted_set,
    format_datetime,
    merge_headers,
    snake_case,
)


class TestDotted:
    """Test dotted get/set."""

    def test_get_nested(self):
        assert dotted_get({"a": {"b": {"c": 1}}}, "a.b.c") == 1

    def test_verbatim_key_wins(self):
        assert dotted_get({"a.b": 1, "a": {"b": 2}}, "a.b") == 1

    def test_none_key_returns_data(self):
        data = {"a": 1}
        assert dotted_get(data, None) is data

    def test_missing_segment(self):
        assert dotted_get({"a": 1}, "a.b", "d") == "d"

    def test_set_creates_path(self):
        data = {}
        dotted_set(data, "x.y", 3)
        assert data == {"x": {"y": 3}}


@pytest.mark.parametrize("name,expected", [
    ("posts", "posts"),
    ("BlogPosts", "blog_posts"),
    ("blogPosts", "blog_posts"),
    ("blog-posts", "blog_posts"),
    ("HTTPLogs", "http_logs"),
])
def test_snake_case(name, expected):
    assert snake_case(name) == expected


class TestDates:
    """Test date coercion and formatting."""

    def test_numeric_string(self):
        assert as_datetime("86400") == datetime(1970, 1, 2, tzinfo=timezone.utc)

    def test_time_only_uses_today(self):
        value = as_datetime("13:45:00")
        assert value.date() == datetime.now().date()
        assert (value.hour, value.minute) == (13, 45)

    def test_iso_with_offset(self):
        value = as_datetime("2024-02-15T12:30:00+02:00")
        assert format_datetime(value) == "2024-02-15T10:30:00Z"

    def test_not_a_date(self):
        assert as_datetime(["x"]) == ["x"]
        assert as_datetime(True) is True


class TestMergeHeaders:
    """Test header merging."""

    def test_later_wins(self):
        assert merge_headers({"Accept": "a"}, {"accept": "b"}) == {"accept": "b"}

    def test_lines(self):
        assert merge_headers(["X-A: 1", "X-B:2", "garbage"]) == {"X-A": "1", "X-B": "2"}

    def test_none_sources(self):
        assert merge_headers(None, {}, {"A": "1"}) == {"A": "1"}

"""
Pytest fixtures for base_api_client tests.
"""

import json

import pytest

from base_api_client.models import Model, get_mutator, set_mutator
from base_api_client.request import Request


HOST = "https://api.example.com"


class FakeExecutor:
    """Scripted transport executor: replays queued results, records calls."""

    def __init__(self):
        self.headers = {}
        self.calls = []
        self._queue = []
        self._errors = None
        self._http_code = 200

    def queue(self, body="", status_code=200, headers=None, error=None):
        if not isinstance(body, str):
            body = json.dumps(body)
        self._queue.append((body, headers or {}, status_code, error))

    def set_header(self, key, value):
        self.headers[key] = value

    def execute(self, method, url, parameters=None, headers=None):
        self.calls.append({
            "method": method,
            "url": url,
            "parameters": parameters,
            "headers": headers,
        })
        body, response_headers, status_code, error = self._queue.pop(0)
        self._errors = error
        self._http_code = status_code
        if error is not None:
            return "", {}, status_code
        return body, response_headers, status_code

    def has_errors(self):
        return self._errors is not None

    def get_errors(self):
        return self._errors

    def get_http_code(self):
        return self._http_code


class Post(Model):
    """Model with one media field, one date field and mutators."""

    media_fields = ("cover",)
    date_fields = ("published_at",)

    @get_mutator("title")
    def title_upper(self, value):
        return value.upper() if value else value

    @set_mutator("tags")
    def split_tags(self, value):
        if isinstance(value, str):
            value = [tag.strip() for tag in value.split(",")]
        self.set_raw_attribute("tags", value)


# ─── Fixtures ────────────────────────────────────────────────

@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def executor_factory():
    """Builds extra executors for tests needing more than one client."""
    return FakeExecutor


@pytest.fixture
def request_(executor):
    """Request bound to the fake executor."""
    return Request(HOST, executor)


@pytest.fixture
def post_model():
    return Post


@pytest.fixture
def raw_post():
    """Raw post item as returned by the API."""
    return {
        "id": 1,
        "title": "Hello world",
        "cover": {
            "original": "https://cdn.example.com/1.jpg",
            "thumbnail": "https://cdn.example.com/1_t.jpg",
        },
        "published_at": "2024-02-15T10:30:00Z",
        "tags": "python, http",
        "draft": False,
    }


@pytest.fixture
def collection_body():
    """{data, meta} body of a paginated listing."""
    return {
        "data": [
            {"id": 1, "title": "first"},
            {"id": 2, "title": "second"},
        ],
        "meta": {
            "pagination": {
                "total": 25,
                "count": 2,
                "per_page": 2,
                "current_page": 1,
                "total_pages": 13,
            }
        },
    }

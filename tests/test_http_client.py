"""
Tests for CurlExecutor: headers, body encoding and error state.
"""

import base64
import json
from unittest.mock import MagicMock, patch

import pytest
from curl_cffi import requests as curl_requests

from base_api_client.config import DEFAULT_HEADERS
from base_api_client.http_client import CurlExecutor, FileUpload, build_json_body


def make_response(status_code=200, text="{}", headers=None):
    """Create mock curl_cffi response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.headers = headers or {"Content-Type": "application/json"}
    return resp


@pytest.fixture
def curl_session():
    with patch("base_api_client.http_client.curl_requests.Session") as session_cls:
        session = MagicMock()
        session.request.return_value = make_response()
        session_cls.return_value = session
        yield session


class TestHeaders:
    """Test persistent and per-call headers."""

    def test_default_headers(self):
        assert CurlExecutor().headers == DEFAULT_HEADERS

    def test_set_header(self):
        executor = CurlExecutor()
        executor.set_header("X-Client-Secret", "s3cr3t")
        assert executor.headers["X-Client-Secret"] == "s3cr3t"

    def test_set_header_replaces_case_insensitively(self):
        executor = CurlExecutor()
        executor.set_header("accept", "text/plain")
        assert executor.headers == {"Content-Type": "application/json", "accept": "text/plain"}

    def test_set_headers(self):
        executor = CurlExecutor()
        executor.set_headers({"A": "1", "B": "2"})
        assert executor.headers["A"] == "1"
        assert executor.headers["B"] == "2"

    def test_headers_sent(self, curl_session):
        executor = CurlExecutor()
        executor.set_header("X-Client-Secret", "s3cr3t")
        executor.execute("GET", "https://api.example.com/x", headers=["X-Trace: 42"])
        sent = curl_session.request.call_args.kwargs["headers"]
        assert sent["X-Client-Secret"] == "s3cr3t"
        assert sent["X-Trace"] == "42"
        assert sent["Accept"] == "application/json"

    def test_call_headers_override(self, curl_session):
        executor = CurlExecutor()
        executor.execute("GET", "https://api.example.com/x", headers={"Accept": "text/csv"})
        sent = curl_session.request.call_args.kwargs["headers"]
        assert sent["Accept"] == "text/csv"
        assert executor.headers["Accept"] == "application/json"


class TestExecute:
    """Test request dispatch and response unpacking."""

    def test_returns_body_headers_status(self, curl_session):
        curl_session.request.return_value = make_response(
            201, '{"data": {}}', {"X-Id": "9"},
        )
        body, headers, status = CurlExecutor().execute("POST", "https://api.example.com/x", {"a": 1})
        assert body == '{"data": {}}'
        assert headers == {"X-Id": "9"}
        assert status == 201

    @pytest.mark.parametrize("method", ["POST", "PUT", "PATCH"])
    def test_json_body(self, curl_session, method):
        CurlExecutor().execute(method, "https://api.example.com/x", {"name": "x"})
        args, kwargs = curl_session.request.call_args
        assert args == (method, "https://api.example.com/x")
        assert json.loads(kwargs["data"]) == {"name": "x"}

    def test_post_without_parameters_sends_empty_object(self, curl_session):
        CurlExecutor().execute("POST", "https://api.example.com/x")
        assert curl_session.request.call_args.kwargs["data"] == "{}"

    def test_get_has_no_body(self, curl_session):
        CurlExecutor().execute("GET", "https://api.example.com/x", {})
        assert "data" not in curl_session.request.call_args.kwargs

    def test_delete_body_only_with_parameters(self, curl_session):
        executor = CurlExecutor()
        executor.execute("DELETE", "https://api.example.com/x", {})
        assert "data" not in curl_session.request.call_args.kwargs
        executor.execute("DELETE", "https://api.example.com/x", {"force": True})
        assert json.loads(curl_session.request.call_args.kwargs["data"]) == {"force": True}

    def test_timeouts_in_seconds(self, curl_session):
        CurlExecutor(connect_timeout=1500, timeout=3000).execute("GET", "https://api.example.com/x")
        assert curl_session.request.call_args.kwargs["timeout"] == (1.5, 3.0)

    def test_verify_flag(self, curl_session):
        CurlExecutor(verify=False).execute("GET", "https://api.example.com/x")
        assert curl_session.request.call_args.kwargs["verify"] is False

    def test_status_recorded(self, curl_session):
        curl_session.request.return_value = make_response(404, '{"message": "nope"}')
        executor = CurlExecutor()
        executor.execute("GET", "https://api.example.com/x")
        assert executor.get_http_code() == 404
        assert executor.has_errors() is False

    def test_session_reused(self, curl_session):
        with patch("base_api_client.http_client.curl_requests.Session") as session_cls:
            session_cls.return_value = curl_session
            executor = CurlExecutor(impersonate="chrome")
            executor.execute("GET", "https://api.example.com/a")
            executor.execute("GET", "https://api.example.com/b")
            session_cls.assert_called_once_with(impersonate="chrome")


class TestTransportErrors:
    """Test curl failure reporting."""

    def test_error_recorded(self, curl_session):
        curl_session.request.side_effect = curl_requests.RequestsError("Operation timed out")
        executor = CurlExecutor()
        body, headers, status = executor.execute("GET", "https://api.example.com/x")
        assert (body, headers, status) == ("", {}, 0)
        assert executor.has_errors() is True
        assert "Operation timed out" in executor.get_errors()
        assert executor.get_http_code() == 0

    def test_error_with_response_code(self, curl_session):
        error = curl_requests.RequestsError("SSL handshake failed")
        error.response = make_response(525)
        curl_session.request.side_effect = error
        executor = CurlExecutor()
        executor.execute("GET", "https://api.example.com/x")
        assert executor.get_http_code() == 525

    def test_error_state_reset(self, curl_session):
        executor = CurlExecutor()
        curl_session.request.side_effect = curl_requests.RequestsError("boom")
        executor.execute("GET", "https://api.example.com/x")
        curl_session.request.side_effect = None
        executor.execute("GET", "https://api.example.com/x")
        assert executor.has_errors() is False
        assert executor.get_errors() is None


class TestFileUpload:
    """Test base64 file encoding in JSON bodies."""

    def test_encode(self, tmp_path):
        path = tmp_path / "avatar.png"
        path.write_bytes(b"\x89PNG data")
        encoded = FileUpload(str(path)).encode()
        assert encoded["name"] == "avatar.png"
        assert base64.b64decode(encoded["base64"]) == b"\x89PNG data"

    def test_custom_name(self, tmp_path):
        path = tmp_path / "tmp123"
        path.write_bytes(b"x")
        assert FileUpload(str(path), name="photo.jpg").encode()["name"] == "photo.jpg"

    def test_build_json_body(self, tmp_path):
        path = tmp_path / "doc.txt"
        path.write_bytes(b"hello")
        body = json.loads(build_json_body({"title": "t", "file": FileUpload(str(path))}))
        assert body["title"] == "t"
        assert body["file"] == {"name": "doc.txt", "base64": "aGVsbG8="}


class TestLifecycle:
    """Test close() and context manager."""

    def test_close(self, curl_session):
        executor = CurlExecutor()
        executor.execute("GET", "https://api.example.com/x")
        executor.close()
        curl_session.close.assert_called_once()

    def test_context_manager(self, curl_session):
        with CurlExecutor() as executor:
            executor.execute("GET", "https://api.example.com/x")
        curl_session.close.assert_called_once()

    def test_close_without_session(self):
        CurlExecutor().close()

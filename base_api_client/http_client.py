"""
HTTP Client
===========
Transport executor based on curl_cffi.
Performs exactly one HTTP exchange per call; no retries, no redirects
handling beyond curl's own, no response interpretation.
"""

import base64
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union

from curl_cffi import requests as curl_requests

from .config import CONNECT_TIMEOUT_MS, DEFAULT_HEADERS, TIMEOUT_MS
from .log_config import LogConfig
from .utils import merge_headers

logger = LogConfig.get_logger("http")

HeaderInput = Union[Dict[str, str], List[str], None]

# Methods that always carry a JSON body
BODY_METHODS = ("POST", "PUT", "PATCH")


class TransportExecutor(Protocol):
    """Contract between Request and the component doing the network exchange."""

    def set_header(self, key: str, value: str) -> None: ...

    def execute(
        self,
        method: str,
        url: str,
        parameters: Optional[Dict[str, Any]] = None,
        headers: HeaderInput = None,
    ) -> Tuple[str, Dict[str, str], int]: ...

    def has_errors(self) -> bool: ...

    def get_errors(self) -> Optional[str]: ...

    def get_http_code(self) -> int: ...


@dataclass
class FileUpload:
    """
    File sent inside a JSON body.

    Encoded as {"name": <file name>, "base64": <content>}.
    """

    path: str
    name: Optional[str] = None

    def encode(self) -> Dict[str, str]:
        with open(self.path, "rb") as fh:
            content = fh.read()
        return {
            "name": self.name or os.path.basename(self.path),
            "base64": base64.b64encode(content).decode("ascii"),
        }


def build_json_body(parameters: Optional[Dict[str, Any]]) -> str:
    """JSON-encode request parameters, inlining FileUpload values."""
    params = {
        key: value.encode() if isinstance(value, FileUpload) else value
        for key, value in (parameters or {}).items()
    }
    return json.dumps(params)


class CurlExecutor:
    """
    HTTP transport on a curl_cffi session.

    Keeps a persistent header set merged into every call and records the
    error state and status code of the last call for the caller to inspect.
    """

    def __init__(
        self,
        connect_timeout: int = CONNECT_TIMEOUT_MS,
        timeout: int = TIMEOUT_MS,
        verify: bool = True,
        impersonate: Optional[str] = None,
    ):
        """
        Args:
            connect_timeout: Connect timeout in milliseconds
            timeout: Request timeout in milliseconds
            verify: Verify TLS certificates
            impersonate: curl_cffi browser impersonation target (e.g. "chrome")
        """
        self.connect_timeout = connect_timeout
        self.timeout = timeout
        self.verify = verify
        self.impersonate = impersonate
        self._headers: Dict[str, str] = dict(DEFAULT_HEADERS)
        self._http_code = 200
        self._errors: Optional[str] = None
        self._curl_session: Optional[curl_requests.Session] = None

    def _get_curl_session(self) -> curl_requests.Session:
        """Get or create the curl_cffi session."""
        if self._curl_session is None:
            if self.impersonate:
                self._curl_session = curl_requests.Session(impersonate=self.impersonate)
            else:
                self._curl_session = curl_requests.Session()
        return self._curl_session

    # ─── Headers ──────────────────────────────────────────────

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def set_header(self, key: str, value: str) -> None:
        """Add a header sent with every request."""
        self._headers = merge_headers(self._headers, {key: value})

    def set_headers(self, values: Dict[str, str]) -> None:
        for key, value in values.items():
            self.set_header(key, value)

    # ─── Exchange ─────────────────────────────────────────────

    def execute(
        self,
        method: str,
        url: str,
        parameters: Optional[Dict[str, Any]] = None,
        headers: HeaderInput = None,
    ) -> Tuple[str, Dict[str, str], int]:
        """
        Perform one HTTP request.

        Args:
            method: HTTP verb
            url: Fully-qualified URL (query string already applied)
            parameters: Body parameters (JSON-encoded for POST/PUT/PATCH/DELETE)
            headers: Extra headers, dict or list of "Key: value" lines

        Returns:
            (raw body, response headers, status code). On a transport failure
            the body is empty and has_errors() reports True.
        """
        self._errors = None
        method = method.upper()

        kwargs: Dict[str, Any] = {
            "headers": merge_headers(self._headers, headers),
            "timeout": (self.connect_timeout / 1000, self.timeout / 1000),
            "verify": self.verify,
        }
        if method in BODY_METHODS or (method == "DELETE" and parameters):
            kwargs["data"] = build_json_body(parameters)

        try:
            response = self._get_curl_session().request(method, url, **kwargs)
        except curl_requests.RequestsError as e:
            failed = getattr(e, "response", None)
            self._http_code = getattr(failed, "status_code", 0) or 0
            self._errors = str(e)
            logger.debug(f"{method} {url} failed: {e}")
            return "", {}, self._http_code

        self._http_code = response.status_code
        response_headers = {k: v for k, v in response.headers.items()}
        return response.text, response_headers, self._http_code

    def has_errors(self) -> bool:
        """Check if the last request ended with a transport error."""
        return self._errors is not None

    def get_errors(self) -> Optional[str]:
        return self._errors

    def get_http_code(self) -> int:
        """Status code of the last request (0 if none was received)."""
        return self._http_code

    def close(self) -> None:
        """Clean up resources."""
        if self._curl_session is not None:
            self._curl_session.close()
            self._curl_session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

"""
Request
=======
Builds URLs, hands the exchange to the transport executor and turns the
result into a Response or an exception.
"""

import time
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from .exceptions import ApiError, TransportError
from .http_client import HeaderInput, TransportExecutor
from .log_config import DebugLogger, LogConfig, get_debug_logger
from .response import Response

logger = LogConfig.get_logger("request")


def build_query(parameters: Optional[Dict[str, Any]]) -> str:
    """
    Serialize query parameters in insertion order.

    Booleans become 1/0, None values are dropped, lists repeat the key.
    """
    pairs = []
    for key, value in (parameters or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = int(value)
        pairs.append((key, value))
    return urlencode(pairs, doseq=True)


class Request:
    """
    HTTP orchestrator shared by all endpoints of a client.

    Every call is one blocking round trip. The headers of the last successful
    response are kept for inspection and overwritten by the next call, so a
    Request shared between threads needs external locking around
    call + get_headers().
    """

    def __init__(
        self,
        host: str,
        executor: TransportExecutor,
        debug_logger: Optional[DebugLogger] = None,
    ):
        """
        Args:
            host: Base URL every path is appended to
            executor: Transport executor performing the exchange
            debug_logger: DebugLogger for this Request only (default: the global one)
        """
        self._host = host
        self._executor = executor
        self._debug_logger = debug_logger
        self._headers: Dict[str, str] = {}

    @property
    def host(self) -> str:
        return self._host

    @property
    def executor(self) -> TransportExecutor:
        return self._executor

    @property
    def debug_logger(self) -> DebugLogger:
        if self._debug_logger is not None:
            return self._debug_logger
        return get_debug_logger()

    def set_header(self, key: str, value: str) -> None:
        """Add a persistent header to every request."""
        self._executor.set_header(key, value)

    def get_headers(self) -> Dict[str, str]:
        """Headers from the last successful response."""
        return self._headers

    def url(self, path: str) -> str:
        return f"{self._host}{path}"

    # ─── Verbs ───────────────────────────────────────────────

    def get(self, path: str, parameters: Optional[Dict[str, Any]] = None) -> Response:
        """
        Send GET request.

        Args:
            path: Endpoint path (e.g., "/posts")
            parameters: Query parameters

        Returns:
            Response
        """
        url = self.url(path)
        query = build_query(parameters)
        if query:
            url = f"{url}?{query}"
        return self.execute("GET", url)

    def post(self, path: str, parameters: Optional[Dict[str, Any]] = None) -> Response:
        """Send POST request with a JSON body."""
        return self.execute("POST", self.url(path), parameters or {})

    def put(self, path: str, parameters: Optional[Dict[str, Any]] = None) -> Response:
        """Send PUT request with a JSON body."""
        return self.execute("PUT", self.url(path), parameters or {})

    def patch(self, path: str, parameters: Optional[Dict[str, Any]] = None) -> Response:
        """Send PATCH request with a JSON body."""
        return self.execute("PATCH", self.url(path), parameters or {})

    def delete(self, path: str, parameters: Optional[Dict[str, Any]] = None) -> Response:
        """Send DELETE request; parameters travel as a JSON body."""
        return self.execute("DELETE", self.url(path), parameters or {})

    # ─── Core ────────────────────────────────────────────────

    def execute(
        self,
        method: str,
        url: str,
        parameters: Optional[Dict[str, Any]] = None,
        headers: HeaderInput = None,
    ) -> Response:
        """
        Execute the HTTP request.

        Args:
            method: HTTP verb
            url: Fully-qualified URL
            parameters: Body parameters
            headers: Extra headers for this call only

        Returns:
            Response

        Raises:
            TransportError: The executor reported a failure
            ApiError: Status code >= 400
        """
        dbg = self.debug_logger
        dbg.request(method=method, url=url, has_body=bool(parameters), headers=headers or None)

        start_time = time.time()
        body, response_headers, status_code = self._executor.execute(
            method, url, parameters or {}, headers or {}
        )
        elapsed = time.time() - start_time

        if self._executor.has_errors():
            message = self._executor.get_errors() or "Transport error"
            code = self._executor.get_http_code()
            logger.warning(f"{method} {url} transport failure: {message}")
            dbg.error(
                error_type="TransportError",
                status_code=code,
                endpoint=url,
                message=message,
            )
            raise TransportError(message, status_code=code)

        response = Response(body, status_code, response_headers)
        dbg.response(
            status_code=status_code,
            elapsed_ms=elapsed * 1000,
            size_bytes=len(body) if isinstance(body, (str, bytes)) else 0,
            url=url,
        )

        if status_code >= 400:
            message = response.get("message") or f"HTTP {status_code}"
            logger.info(f"{method} {url} → {status_code}: {message}")
            dbg.error(
                error_type="ApiError",
                status_code=status_code,
                endpoint=url,
                message=str(message),
                response_preview=response.raw or "",
            )
            raise ApiError(
                message,
                status_code=status_code,
                response=response.body,
                headers=response_headers,
            )

        self._headers = response_headers
        logger.debug(f"{method} {url} → {status_code} ({elapsed * 1000:.0f}ms)")
        return response

"""
Response
========
Decoded HTTP response with existence-checked access to top-level keys.
"""

import json
from typing import Any, Dict, Optional

from .log_config import LogConfig

logger = LogConfig.get_logger("response")


class Response:
    """
    Wraps a raw body and status code.

    Textual bodies are JSON-decoded; a body that fails to decode is kept as
    the raw string, so every key lookup on it reports absent instead of
    raising.

    Usage:
        resp = Response('{"data": [], "meta": {}}', 200)
        resp.get("data")      # []
        resp.data             # same, attribute sugar
        resp["missing"]       # None
    """

    def __init__(
        self,
        body: Any,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ):
        if isinstance(body, (bytes, bytearray)):
            body = body.decode("utf-8", errors="replace")
        self._raw = body if isinstance(body, str) else None
        self._body = self.decode(body) if isinstance(body, str) else body
        self._status_code = status_code
        self._headers = headers or {}

    @staticmethod
    def decode(body: str) -> Any:
        """Decode a JSON body; the raw string is returned when decoding fails."""
        try:
            return json.loads(body)
        except ValueError:
            logger.debug(f"Body is not JSON, keeping raw text ({len(body)} chars)")
            return body

    # ─── Status / metadata ────────────────────────────────────

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def ok(self) -> bool:
        return self._status_code < 400

    @property
    def headers(self) -> Dict[str, str]:
        return self._headers

    @property
    def body(self) -> Any:
        """Decoded body (mapping, list, scalar) or the raw string."""
        return self._body

    @property
    def raw(self) -> Optional[str]:
        return self._raw

    # ─── Key access ──────────────────────────────────────────

    def has(self, key: str) -> bool:
        """Check whether a top-level key exists in the decoded body."""
        return isinstance(self._body, dict) and key in self._body

    def get(self, key: str, default: Any = None) -> Any:
        """Read a top-level key; absent keys return default."""
        return self._body[key] if self.has(key) else default

    def set(self, key: str, value: Any) -> None:
        """Overwrite an existing top-level key; unknown keys are ignored."""
        if self.has(key):
            self._body[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._body) if isinstance(self._body, dict) else {}

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __getattr__(self, key: str) -> Any:
        # Only reached for names that are not real attributes
        if key.startswith("_"):
            raise AttributeError(key)
        return self.get(key)

    def __repr__(self) -> str:
        return f"<Response [{self._status_code}]>"

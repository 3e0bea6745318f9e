"""
Logging Configuration + DebugLogger
====================================
Centralized logging setup for base_api_client.
Configures console + file handlers with custom formatting.

DebugLogger: structured, one-line debug output for every HTTP exchange.
Client(debug=True) gives its own Request an enabled instance.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, Optional


# Default log format
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Compact debug format
DEBUG_FORMAT = "%(asctime)s %(message)s"
DEBUG_DATE_FORMAT = "%H:%M:%S"

# Root logger name, inherited by all child loggers
ROOT_LOGGER = "base_api_client"

# Header names whose values never reach the log unmasked
SENSITIVE_HEADERS = {"x-client-secret", "authorization", "cookie"}


# Level names that switch package logging off entirely
OFF_LEVELS = {"OFF", "SILENT", "NONE"}


def _resolve_level(level: Any) -> int:
    """Level name or number → logging level (unknown names fall back to INFO)."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


class LogConfig:
    """
    Logging setup for the base_api_client namespace.

    Only the package logger is touched; the application's root logger and
    its handlers are left alone.

    Usage:
        LogConfig.configure(level="DEBUG", filename="client.log")
        LogConfig.apply_level("WARNING")     # from ClientConfig.log_level
        log = LogConfig.get_logger("request")
    """

    _configured: bool = False

    @classmethod
    def configure(
        cls,
        level: Any = "INFO",
        format: Optional[str] = None,
        date_format: Optional[str] = None,
        filename: Optional[str] = None,
        console: bool = True,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 3,
    ) -> logging.Logger:
        """
        Replace the package logger's handlers.

        Args:
            level: Level name or number
            format: Record format (default: time, level, logger, message)
            date_format: Timestamp format
            filename: Also write to this rotating log file
            console: Write to stderr
            max_bytes: Rotate the log file at this size
            backup_count: Rotated files kept

        Returns:
            The package logger
        """
        root = logging.getLogger(ROOT_LOGGER)
        root.setLevel(_resolve_level(level))
        root.handlers.clear()

        formatter = logging.Formatter(
            format or DEFAULT_FORMAT,
            datefmt=date_format or DEFAULT_DATE_FORMAT,
        )
        for handler in cls._handlers(filename, console, max_bytes, backup_count):
            handler.setFormatter(formatter)
            root.addHandler(handler)

        # Records stop at the package logger
        root.propagate = False

        cls._configured = True
        return root

    @staticmethod
    def _handlers(
        filename: Optional[str],
        console: bool,
        max_bytes: int,
        backup_count: int,
    ) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []
        if console:
            handlers.append(logging.StreamHandler(sys.stderr))
        if filename:
            handlers.append(RotatingFileHandler(
                filename,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            ))
        return handlers

    @classmethod
    def configure_debug(cls, filename: Optional[str] = None) -> logging.Logger:
        """DEBUG level with the compact one-line format used by DebugLogger."""
        return cls.configure(
            level="DEBUG",
            format=DEBUG_FORMAT,
            date_format=DEBUG_DATE_FORMAT,
            filename=filename,
        )

    @classmethod
    def apply_level(cls, level: str) -> None:
        """
        Apply a ClientConfig.log_level value.

        "OFF" silences the package, a first call installs handlers, later
        calls only change the level.
        """
        if str(level).upper() in OFF_LEVELS:
            cls.silence()
        elif cls.is_configured():
            cls.set_level(level)
        else:
            cls.configure(level=level)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Child logger under the package namespace.

        Args:
            name: e.g. 'request' → 'base_api_client.request'
        """
        if not name.startswith(ROOT_LOGGER):
            name = f"{ROOT_LOGGER}.{name}"
        return logging.getLogger(name)

    @classmethod
    def set_level(cls, level: Any) -> None:
        logging.getLogger(ROOT_LOGGER).setLevel(_resolve_level(level))

    @classmethod
    def silence(cls) -> None:
        """Drop every package record."""
        logging.getLogger(ROOT_LOGGER).setLevel(logging.CRITICAL + 1)

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured


class DebugLogger:
    """
    Structured debug logger for HTTP exchanges.

    Categories:
        REQUEST   : outgoing HTTP request details
        RESPONSE  : response status, timing and size
        ERROR     : transport failures and API errors

    Usage:
        dbg = DebugLogger(enabled=True)
        dbg.request("GET", "https://api.example.com/posts", params={"page": 2})
        dbg.response(200, elapsed_ms=245, size_bytes=12300)
        dbg.error("ApiError", status_code=404, endpoint="/posts/9")
    """

    def __init__(self, enabled: bool = False, log_file: Optional[str] = None):
        self.enabled = enabled
        self._logger = LogConfig.get_logger("debug")
        if enabled:
            LogConfig.configure_debug(filename=log_file)

    @staticmethod
    def _mask(value: str, show: int = 4) -> str:
        """Mask sensitive values, showing only first N chars."""
        if not value:
            return "<empty>"
        if len(value) <= show:
            return "***"
        return value[:show] + "***"

    @classmethod
    def _mask_headers(cls, headers: Dict[str, Any]) -> Dict[str, Any]:
        return {
            k: cls._mask(str(v)) if k.lower() in SENSITIVE_HEADERS else v
            for k, v in headers.items()
        }

    @staticmethod
    def _format_size(size_bytes: int) -> str:
        """Format bytes to human-readable size."""
        if size_bytes < 1024:
            return f"{size_bytes}B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.1f}KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f}MB"

    # ─── REQUEST ─────────────────────────────────────────────

    def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict] = None,
        has_body: bool = False,
        headers: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log outgoing HTTP request."""
        if not self.enabled:
            return

        parts = [f"REQUEST {method} {url}"]
        if params:
            safe_params = {
                k: (v[:30] + "..." if isinstance(v, str) and len(v) > 30 else v)
                for k, v in params.items()
            }
            parts.append(f"params={safe_params}")
        if has_body:
            parts.append("body=JSON")
        if headers:
            parts.append(f"headers={self._mask_headers(headers)}")

        self._logger.debug(" | ".join(parts))

    # ─── RESPONSE ────────────────────────────────────────────

    def response(
        self,
        status_code: int,
        elapsed_ms: float,
        size_bytes: int = 0,
        url: str = "",
    ) -> None:
        """Log HTTP response."""
        if not self.enabled:
            return

        parts = [f"RESPONSE {status_code}"]
        if url:
            parts.append(url)
        parts.append(f"{elapsed_ms:.0f}ms")
        if size_bytes:
            parts.append(self._format_size(size_bytes))

        self._logger.debug(" | ".join(parts))

    # ─── ERROR ───────────────────────────────────────────────

    def error(
        self,
        error_type: str,
        status_code: int = 0,
        endpoint: str = "",
        message: str = "",
        response_preview: str = "",
    ) -> None:
        """Log error with diagnostics."""
        if not self.enabled:
            return

        parts = [f"ERROR {error_type}"]
        if status_code:
            parts.append(f"HTTP {status_code}")
        if endpoint:
            parts.append(endpoint)
        if message:
            parts.append(f"msg={message[:120]}")
        if response_preview:
            parts.append(f"body={response_preview[:200]}")

        self._logger.debug(" | ".join(parts))


# ─── Global debug logger singleton ────────────────────────────
# Used by every Request built without its own DebugLogger.
_debug_logger: Optional[DebugLogger] = None


def get_debug_logger() -> DebugLogger:
    """Get the global DebugLogger instance."""
    global _debug_logger
    if _debug_logger is None:
        _debug_logger = DebugLogger(enabled=False)
    return _debug_logger


def set_debug_logger(logger: Optional[DebugLogger]) -> None:
    """Set the global DebugLogger instance (None resets it to a disabled one)."""
    global _debug_logger
    _debug_logger = logger

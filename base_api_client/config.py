"""
Client Configuration and Constants
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigurationError

# ============================================================
# Transport defaults
# ============================================================
DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Timeouts in milliseconds (converted to seconds for curl)
CONNECT_TIMEOUT_MS = 2500
TIMEOUT_MS = 4000

# Persistent header carrying the client secret
SECRET_HEADER = "X-Client-Secret"

# ============================================================
# Models
# ============================================================
DEFAULT_MEDIA_VARIANT = "original"

# Serialized form of date attributes
ZULU_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Fields added to date_fields when a model has timestamps enabled
TIMESTAMP_FIELDS = ("created_at", "updated_at")

# Environment variable prefix for ClientConfig.from_env()
ENV_PREFIX = "API_"


class ClientConfig(BaseModel):
    """
    Options recognised by Client.

    Fields:
        domain: Base host every endpoint path is appended to (required)
        secret: Sent as X-Client-Secret on every request
        connect_timeout: Connect timeout in milliseconds
        timeout: Total request timeout in milliseconds
        verify: Verify TLS certificates
        headers: Extra persistent headers
        debug: Enable structured debug logging
        log_level: Configure the package logger at construction (None = leave alone)
    """

    model_config = ConfigDict(extra="ignore")

    domain: str
    secret: Optional[str] = None
    connect_timeout: int = CONNECT_TIMEOUT_MS
    timeout: int = TIMEOUT_MS
    verify: bool = True
    headers: Dict[str, str] = {}
    debug: bool = False
    log_level: Optional[str] = None

    @field_validator("domain")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("domain must not be empty")
        return v.rstrip("/")

    @classmethod
    def load(cls, options: Any = None, **overrides: Any) -> "ClientConfig":
        """
        Build a config from a ClientConfig, a dict of options, or keywords.

        Raises:
            ConfigurationError: If the options do not validate
        """
        if isinstance(options, cls) and not overrides:
            return options
        if isinstance(options, cls):
            data = options.model_dump()
        elif options is None:
            data = {}
        elif isinstance(options, dict):
            data = dict(options)
        else:
            raise ConfigurationError(
                f"Client options must be a dict or ClientConfig, got {type(options).__name__}"
            )
        data.update(overrides)
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

    @classmethod
    def from_env(cls, env_path: str = ".env", prefix: str = ENV_PREFIX) -> "ClientConfig":
        """
        Load config from a .env file and the process environment.

        .env format:
            API_DOMAIN=https://api.example.com
            API_SECRET=...
            API_CONNECT_TIMEOUT=2500
            API_TIMEOUT=4000
            API_VERIFY=true
            API_DEBUG=false
            API_LOG_LEVEL=INFO
        """
        env_file = Path(env_path)
        if env_file.exists():
            load_dotenv(env_file, override=True)

        domain = os.getenv(f"{prefix}DOMAIN", "")
        if not domain:
            raise ConfigurationError(
                f"{prefix}DOMAIN is not set. Check {env_path} or the environment."
            )

        data: Dict[str, Any] = {"domain": domain}
        mapping = {
            "secret": "SECRET",
            "connect_timeout": "CONNECT_TIMEOUT",
            "timeout": "TIMEOUT",
            "verify": "VERIFY",
            "debug": "DEBUG",
            "log_level": "LOG_LEVEL",
        }
        for field, suffix in mapping.items():
            value = os.getenv(f"{prefix}{suffix}")
            if value not in (None, ""):
                data[field] = value
        return cls.load(data)

"""
Client - Main Class
===================
Entry point of an API client: owns the transport and the shared Request,
builds endpoints on first use and caches them.
"""

import threading
from typing import Any, ClassVar, Dict, Optional, Type

from .config import SECRET_HEADER, ClientConfig
from .endpoint import Endpoint
from .exceptions import InvalidEndpointError
from .http_client import CurlExecutor, TransportExecutor
from .log_config import DebugLogger, LogConfig
from .request import Request
from .utils import snake_case

logger = LogConfig.get_logger("client")


class Client:
    """
    Base API client.

    Subclass it and register endpoints:

        class BlogClient(Client):
            pass

        @BlogClient.register_endpoint("posts")
        class Posts(Endpoint):
            ...

        client = BlogClient({"domain": "https://api.example.com", "secret": "s3cr3t"})
        client.posts.find(1)
        client.get_endpoint("posts")   # same cached instance

    From .env:
        client = BlogClient.from_env(".env")
    """

    endpoints: ClassVar[Dict[str, Type[Endpoint]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Own copy with normalised keys
        cls.endpoints = {snake_case(k): v for k, v in cls.endpoints.items()}

    def __init__(
        self,
        config: Any = None,
        executor: Optional[TransportExecutor] = None,
        **options: Any,
    ):
        """
        Create a client.

        Args:
            config: ClientConfig or dict with domain, secret, connect_timeout, timeout, ...
            executor: Transport executor (default: CurlExecutor built from config)
            **options: Config fields given as keywords

        Raises:
            ConfigurationError: Missing domain or invalid options
        """
        self.config = ClientConfig.load(config, **options)

        # Debug output is scoped to this client's Request
        self._debug = DebugLogger(enabled=True) if self.config.debug else None
        if self.config.log_level and not self.config.debug:
            LogConfig.apply_level(self.config.log_level)

        self._executor = executor or CurlExecutor(
            connect_timeout=self.config.connect_timeout,
            timeout=self.config.timeout,
            verify=self.config.verify,
        )
        self.request = Request(self.config.domain, self._executor, debug_logger=self._debug)

        for key, value in self.config.headers.items():
            self.request.set_header(key, value)

        if self.config.secret:
            self.request.set_header(SECRET_HEADER, self.config.secret)

        self._cached_endpoints: Dict[str, Endpoint] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls, env_path: str = ".env", **kwargs: Any) -> "Client":
        """Create a client from API_* variables in a .env file / the environment."""
        return cls(ClientConfig.from_env(env_path), **kwargs)

    @classmethod
    def register_endpoint(cls, name: str):
        """
        Class decorator registering an Endpoint on this client class.
        """
        def decorator(endpoint_cls: Type[Endpoint]) -> Type[Endpoint]:
            cls.endpoints[snake_case(name)] = endpoint_cls
            return endpoint_cls
        return decorator

    def get_endpoint(self, name: str) -> Endpoint:
        """
        Get an API endpoint, building it on first access.

        Raises:
            InvalidEndpointError: No endpoint registered under name
        """
        key = snake_case(name)
        endpoint = self._cached_endpoints.get(key)
        if endpoint is not None:
            return endpoint

        with self._lock:
            endpoint = self._cached_endpoints.get(key)
            if endpoint is None:
                endpoint_cls = self.endpoints.get(key)
                if endpoint_cls is None:
                    raise InvalidEndpointError(f"Unknown endpoint '{name}'")
                endpoint = endpoint_cls(self.request)
                self._cached_endpoints[key] = endpoint
                logger.debug(f"Endpoint '{key}' → {endpoint_cls.__name__}")
        return endpoint

    def __getattr__(self, name: str) -> Endpoint:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get_endpoint(name)

    def close(self) -> None:
        """Clean up resources."""
        close = getattr(self._executor, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

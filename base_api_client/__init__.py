"""
base_api_client
===============
Base layer for typed clients of JSON REST APIs.

    from base_api_client import Client, Endpoint, Model, Collection
"""

from .client import Client
from .config import ClientConfig
from .endpoint import Endpoint
from .exceptions import (
    ApiError,
    BaseApiClientError,
    ConfigurationError,
    InvalidEndpointError,
    InvalidModelError,
    MalformedInputError,
    TransportError,
)
from .http_client import CurlExecutor, FileUpload, TransportExecutor
from .log_config import DebugLogger, LogConfig
from .models import (
    Collection,
    Media,
    Model,
    ModelRegistry,
    Pagination,
    get_mutator,
    models,
    register_model,
    set_mutator,
)
from .request import Request
from .response import Response

__version__ = "1.0.0"

__all__ = [
    "Client",
    "ClientConfig",
    "Endpoint",
    "ApiError",
    "BaseApiClientError",
    "ConfigurationError",
    "InvalidEndpointError",
    "InvalidModelError",
    "MalformedInputError",
    "TransportError",
    "CurlExecutor",
    "FileUpload",
    "TransportExecutor",
    "DebugLogger",
    "LogConfig",
    "Collection",
    "Media",
    "Model",
    "ModelRegistry",
    "Pagination",
    "get_mutator",
    "models",
    "register_model",
    "set_mutator",
    "Request",
    "Response",
]

"""Top level package for the API network helpers."""

from __future__ import annotations

from .client import APIClient
from .codec import APIResponse, JSONCodec, from_snake_case, to_snake_case
from .config import ClientConfig
from .errors import (
    APIError,
    ConstructionError,
    DecodingError,
    EncodingError,
    HTTPStatusError,
    TransportError,
)
from .executor import Executor, Transport, httpx_transport, is_valid_status, validate_status
from .factory import AccessTokenProvider, RequestFactory, env_token_provider
from .models import HTTPMethod, Request, Response

__all__ = [
    "APIClient",
    "APIError",
    "APIResponse",
    "AccessTokenProvider",
    "ClientConfig",
    "ConstructionError",
    "DecodingError",
    "EncodingError",
    "Executor",
    "HTTPMethod",
    "HTTPStatusError",
    "JSONCodec",
    "Request",
    "RequestFactory",
    "Response",
    "Transport",
    "TransportError",
    "env_token_provider",
    "from_snake_case",
    "httpx_transport",
    "is_valid_status",
    "to_snake_case",
    "validate_status",
]

"""Exceptions raised while building, sending and decoding API requests."""

from __future__ import annotations

from httpx import TransportError


class APIError(Exception):
    """Base error carrying a human readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConstructionError(APIError):
    """Raised when a request cannot be built (bad URL or unsupported method)."""


class EncodingError(APIError):
    """Raised when a request body cannot be serialised to JSON."""


class DecodingError(APIError):
    """Raised when a response body does not match the expected shape."""


class HTTPStatusError(APIError):
    """Raised when a response carries a status code outside ``200-299``."""

    def __init__(self, code: int) -> None:
        super().__init__(f"Invalid status code: {code}")
        self.code = code


__all__ = [
    "APIError",
    "ConstructionError",
    "DecodingError",
    "EncodingError",
    "HTTPStatusError",
    "TransportError",
]

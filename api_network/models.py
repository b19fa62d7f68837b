"""Request and response values passed between the factory, builders and executor."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import quote, urlsplit, urlunsplit

from .codec import JSONCodec
from .errors import ConstructionError

LOGGER = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class HTTPMethod(str, Enum):
    """HTTP methods accepted by the request builders."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def coerce(cls, method: "HTTPMethod | str") -> "HTTPMethod":
        """Return ``method`` as an :class:`HTTPMethod`, rejecting unknown names."""

        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError as exc:
            raise ConstructionError(f"Unsupported HTTP method: {method!r}") from exc


@dataclass(frozen=True)
class Request:
    """An outgoing request.

    Builder methods never mutate the instance they are called on; each returns
    a new request so a value shared between in-flight calls stays unchanged.
    """

    url: str
    method: str = HTTPMethod.GET.value
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    codec: JSONCodec = field(default_factory=JSONCodec, repr=False, compare=False)

    def header(self, name: str) -> Optional[str]:
        """Return the value of header ``name`` (case-insensitive) if present."""

        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def with_header(self, name: str, value: str) -> "Request":
        """Return a copy with ``name`` set to ``value``, replacing other spellings."""

        lowered = name.lower()
        headers = {key: item for key, item in self.headers.items() if key.lower() != lowered}
        headers[name] = value
        return replace(self, headers=headers)

    def with_query(self, name: str, value: str) -> "Request":
        """Append a query parameter, keeping any existing ones with the same name.

        A URL that cannot be parsed leaves the request unchanged.
        """

        try:
            parts = urlsplit(self.url)
        except ValueError:
            LOGGER.debug("Could not parse %r, query parameter %r not added", self.url, name)
            return self

        pair = f"{quote(name, safe='')}={quote(value, safe='')}"
        query = f"{parts.query}&{pair}" if parts.query else pair
        return replace(self, url=urlunsplit(parts._replace(query=query)), headers=dict(self.headers))

    def with_body(self, body: Any, method: HTTPMethod | str) -> "Request":
        """Attach ``body`` encoded as snake_case JSON and set ``method``."""

        resolved = HTTPMethod.coerce(method)
        payload = self.codec.encode(body)
        request = self.with_header("Content-Type", JSON_CONTENT_TYPE)
        return replace(request, method=resolved.value, body=payload)

    def with_method(self, method: HTTPMethod | str) -> "Request":
        """Set ``method`` and declare a JSON content type; the body is untouched.

        The ``Content-Type`` header is added even when there is no body.
        """

        resolved = HTTPMethod.coerce(method)
        request = self.with_header("Content-Type", JSON_CONTENT_TYPE)
        return replace(request, method=resolved.value)


@dataclass(frozen=True)
class Response:
    """What a transport hands back; ``status`` is ``None`` for non-HTTP responses."""

    status: Optional[int]
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


__all__ = ["HTTPMethod", "JSON_CONTENT_TYPE", "Request", "Response"]

"""Build authenticated requests against a fixed origin."""

from __future__ import annotations

import logging
import os
from typing import Callable, Optional
from urllib.parse import urlsplit

import httpx

from .codec import JSONCodec
from .errors import ConstructionError
from .models import Request

LOGGER = logging.getLogger(__name__)

AccessTokenProvider = Callable[[], Optional[str]]


def env_token_provider(var_name: str = "API_ACCESS_TOKEN") -> AccessTokenProvider:
    """Return an accessor that reads the bearer token from ``var_name`` on every call."""

    def provider() -> Optional[str]:
        return os.getenv(var_name)

    return provider


def is_well_formed_url(url: str) -> bool:
    """Return ``True`` when ``url`` is an absolute URL with a scheme and host."""

    if not url or any(char.isspace() or ord(char) < 0x20 or ord(char) == 0x7F for char in url):
        return False
    try:
        parts = urlsplit(url)
        httpx.URL(url)
    except (ValueError, httpx.InvalidURL):
        return False
    return bool(parts.scheme and parts.netloc)


class RequestFactory:
    """Create :class:`Request` values for paths relative to ``base_url``."""

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[AccessTokenProvider] = None,
        codec: Optional[JSONCodec] = None,
    ) -> None:
        self.base_url = base_url
        self.token_provider = token_provider
        self.codec = codec or JSONCodec()

    def build_request(self, path: str) -> Request:
        """Return a GET request for ``base_url + path``.

        The ``Authorization`` header is only set when the token accessor
        returns a non-empty token.
        """

        url = self.base_url + path
        if not is_well_formed_url(url):
            raise ConstructionError("Invalid network path")

        request = Request(url=url, codec=self.codec)
        token = self.token_provider() if self.token_provider else None
        if token:
            request = request.with_header("Authorization", f"Bearer {token}")
        else:
            LOGGER.debug("Building unauthenticated request for %s", url)
        return request


__all__ = ["AccessTokenProvider", "RequestFactory", "env_token_provider", "is_well_formed_url"]

"""High level client wiring the request factory to an httpx-backed executor."""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

import httpx

from .codec import JSONCodec
from .config import ClientConfig
from .executor import Executor, httpx_transport
from .factory import AccessTokenProvider, RequestFactory
from .models import Request

T = TypeVar("T")


class APIClient:
    """Build and send requests against a single API origin.

    The client owns the :class:`httpx.AsyncClient` it creates and closes it in
    :meth:`aclose`; an ``http_client`` passed in by the caller is left open.
    """

    def __init__(
        self,
        base_url: str,
        token_provider: Optional[AccessTokenProvider] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        codec: Optional[JSONCodec] = None,
    ) -> None:
        self.codec = codec or JSONCodec()
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient()
        self.factory = RequestFactory(base_url, token_provider=token_provider, codec=self.codec)
        self.executor = Executor(httpx_transport(self.http_client), codec=self.codec)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        token_provider: Optional[AccessTokenProvider] = None,
    ) -> "APIClient":
        """Create a client from ``config``.

        Without an explicit ``token_provider`` the configured access token, if
        any, is sent with every request.
        """

        if token_provider is None and config.access_token:
            token = config.access_token
            token_provider = lambda: token  # noqa: E731
        client_kwargs = {} if config.timeout is None else {"timeout": config.timeout}
        client = cls(
            config.base_url,
            token_provider=token_provider,
            http_client=httpx.AsyncClient(**client_kwargs),
        )
        client._owns_client = True
        return client

    def request(self, path: str) -> Request:
        """Return a request for ``path`` relative to the base URL."""

        return self.factory.build_request(path)

    async def run(self, request: Request) -> bytes:
        return await self.executor.run(request)

    async def run_and_decode(self, request: Request, type_: Type[T] | Any = Any) -> T:
        return await self.executor.run_and_decode(request, type_)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""

        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["APIClient"]

"""Send requests through a transport and validate the responses."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar

import httpx

from .codec import JSONCodec
from .errors import HTTPStatusError
from .models import Request, Response

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Transport = Callable[[Request], Awaitable[Response]]


def httpx_transport(client: httpx.AsyncClient) -> Transport:
    """Adapt an :class:`httpx.AsyncClient` to the :data:`Transport` signature.

    Transport failures raised by httpx propagate unchanged.
    """

    async def send(request: Request) -> Response:
        response = await client.request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body,
        )
        return Response(
            status=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    return send


def is_valid_status(code: int) -> bool:
    """Return ``True`` for status codes in the ``200-299`` range."""

    return 200 <= code <= 299


def validate_status(response: Response) -> None:
    """Raise :class:`HTTPStatusError` for a non-2xx status.

    Responses without an HTTP status are accepted as they are.
    """

    if response.status is None:
        return
    if not is_valid_status(response.status):
        raise HTTPStatusError(response.status)


class Executor:
    """Perform single request/response round trips without retries."""

    def __init__(self, transport: Transport, codec: Optional[JSONCodec] = None) -> None:
        self.transport = transport
        self.codec = codec or JSONCodec()

    async def run(self, request: Request) -> bytes:
        """Send ``request`` and return the raw body of a successful response."""

        LOGGER.debug("%s %s", request.method, request.url)
        response = await self.transport(request)
        try:
            validate_status(response)
        except HTTPStatusError:
            LOGGER.warning("%s %s returned status %s", request.method, request.url, response.status)
            raise
        return response.body

    async def run_and_decode(self, request: Request, type_: Type[T] | Any = Any) -> T:
        """Send ``request`` and return the ``data`` field of the response envelope."""

        body = await self.run(request)
        return self.codec.decode_envelope(body, type_).data


__all__ = ["Executor", "Transport", "httpx_transport", "is_valid_status", "validate_status"]

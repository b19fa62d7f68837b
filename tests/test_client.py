import asyncio
from dataclasses import dataclass

import httpx

from api_network.client import APIClient
from api_network.config import ClientConfig
from api_network.models import HTTPMethod


@dataclass
class User:
    user_id: int
    name: str


def test_client_builds_sends_and_decodes(mock_http_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": {"user_id": 3, "name": "Ada"}, "version": 2})

    async def scenario():
        http_client = mock_http_client(handler)
        async with APIClient("https://api.example.com", token_provider=lambda: "tok", http_client=http_client) as api:
            request = api.request("/users").with_query("id", "3").with_method(HTTPMethod.GET)
            user = await api.run_and_decode(request, User)
        assert not http_client.is_closed
        await http_client.aclose()
        return user

    assert asyncio.run(scenario()) == User(user_id=3, name="Ada")
    assert str(seen[0].url) == "https://api.example.com/users?id=3"
    assert seen[0].headers["authorization"] == "Bearer tok"


def test_from_config_uses_static_token():
    api = APIClient.from_config(ClientConfig(base_url="https://api.example.com", access_token="abc"))
    try:
        assert api.request("/me").headers["Authorization"] == "Bearer abc"
    finally:
        asyncio.run(api.aclose())
    assert api.http_client.is_closed


def test_from_config_prefers_explicit_provider():
    api = APIClient.from_config(ClientConfig(access_token="abc"), token_provider=lambda: None)
    try:
        assert "Authorization" not in api.request("/me").headers
    finally:
        asyncio.run(api.aclose())

"""Pytest fixtures for testing."""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from social_login.http import HttpClient
from social_login.oauth.registry import ProviderRegistry
from social_login.services.oauth import UserResolver

ALL_PROVIDERS = ["google", "facebook", "github", "vk", "odnoklassniki"]
REDIRECT_URI = "https://app.example.com/oauth/callback"
PROFILE_HOST = "profile.example.com"


def profile_url(name: str) -> str:
    return f"https://{PROFILE_HOST}/{name}?access_token="


class StubProvider:
    """Fake token and profile endpoints behind an httpx.MockTransport.

    POST requests hit the token endpoint, GET requests hit the profile
    endpoint. Every request is recorded.
    """

    def __init__(self):
        self.token_status = 200
        self.token_body: Any = {"access_token": "T"}
        self.profile_status = 200
        self.profile_body: Any = {}
        self.raise_on: str | None = None
        self.exception: Exception | None = None
        self.requests: list[httpx.Request] = []

    @staticmethod
    def _respond(status: int, body: Any) -> httpx.Response:
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_on == request.method and self.exception is not None:
            raise self.exception
        if request.method == "POST":
            return self._respond(self.token_status, self.token_body)
        return self._respond(self.profile_status, self.profile_body)

    @property
    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    @property
    def profile_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers whether it was closed."""

    def __init__(self, handler):
        super().__init__(handler)
        self.close_count = 0

    async def aclose(self) -> None:
        self.close_count += 1


@pytest.fixture
def environ() -> dict[str, str]:
    """Complete configuration for every supported provider."""
    values = {"oauth2.redirect-uri": REDIRECT_URI}
    for name in ALL_PROVIDERS:
        values[f"oauth2.{name}.client-id"] = f"{name}-client"
        values[f"oauth2.{name}.secret"] = f"{name}-secret"
        values[f"oauth2.{name}.data-url"] = profile_url(name)
    return values


@pytest.fixture
def registry(environ: dict[str, str]) -> ProviderRegistry:
    return ProviderRegistry.build(ALL_PROVIDERS, environ)


@pytest.fixture
def stub() -> StubProvider:
    return StubProvider()


@pytest.fixture
def transport(stub: StubProvider) -> RecordingTransport:
    return RecordingTransport(stub.handler)


@pytest_asyncio.fixture
async def http_client(transport: RecordingTransport) -> AsyncGenerator[HttpClient, None]:
    client = HttpClient(transport=transport)
    yield client
    await client.aclose()


@pytest.fixture
def resolver(http_client: HttpClient) -> UserResolver:
    return UserResolver(http_client)

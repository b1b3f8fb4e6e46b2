"""Shared HTTP client for all token exchanges and profile fetches."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from authlib.integrations.httpx_client import AsyncOAuth2Client

from social_login.oauth.schemas import ProviderConfig

DEFAULT_TIMEOUT = 5.0


class _BorrowedTransport(httpx.AsyncBaseTransport):
    """Hands requests to the shared transport without taking ownership of it."""

    def __init__(self, transport: httpx.AsyncBaseTransport):
        self._transport = transport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._transport.handle_async_request(request)

    async def aclose(self) -> None:
        # Closed by HttpClient.aclose()
        return None


class HttpClient:
    """Long-lived HTTP handle shared by every provider.

    Owns one connection pool and one fixed timeout. Each call borrows it
    through a short-lived OAuth2 session, so no per-call state is shared.

    ``timeout`` bounds every connect, read, write and pool wait; ``deadline``
    (the same number of seconds) bounds a whole round-trip, body included.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = httpx.Timeout(timeout)
        self.deadline = timeout
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    @asynccontextmanager
    async def oauth_session(self, config: ProviderConfig) -> AsyncIterator[AsyncOAuth2Client]:
        """Open an OAuth2 client for one provider call.

        Args:
            config: The provider whose credentials and redirect URI to use.

        Yields:
            An authlib client bound to the shared transport and timeout.
        """
        if self._closed:
            raise RuntimeError("HTTP client is closed")

        async with AsyncOAuth2Client(
            client_id=config.client_id,
            client_secret=config.client_secret,
            token_endpoint_auth_method="client_secret_post",
            scope=config.scope,
            redirect_uri=config.redirect_url,
            transport=_BorrowedTransport(self._transport),
            timeout=self.timeout,
        ) as session:
            yield session

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._transport.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

"""OAuth service for social authentication."""

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri

from social_login.config import Settings, get_settings
from social_login.errors import (
    profile_fetch_failed,
    provider_not_configured,
    token_exchange_failed,
    unknown_endpoint,
)
from social_login.http import HttpClient
from social_login.logging_config import bound_trace_id
from social_login.oauth.extractors import get_extractor
from social_login.oauth.registry import ProviderRegistry
from social_login.oauth.schemas import OAuthProvider, ProviderConfig, User

logger = logging.getLogger(__name__)

# Failures of one provider round-trip
_TRANSPORT_ERRORS = (httpx.HTTPError, AuthlibBaseError, ValueError, TypeError)


def _raise_for_status(response: httpx.Response) -> httpx.Response:
    """Reject non-2xx token responses before authlib parses them."""
    response.raise_for_status()
    return response


def _log_extra(provider_name: str) -> dict[str, Any]:
    return {"extra_fields": {"provider": provider_name}}


def _describe(e: Exception) -> str:
    # Never the URL: profile URLs end with the access token
    if isinstance(e, httpx.HTTPStatusError):
        return f"HTTP {e.response.status_code}"
    if isinstance(e, httpx.HTTPError):
        return type(e).__name__
    return str(e)


class UserResolver:
    """Turns an authorization code into a normalized User."""

    def __init__(self, http_client: HttpClient):
        self.http_client = http_client

    async def get_user(self, provider_name: str, config: ProviderConfig, code: str) -> User:
        """Exchange the code, fetch the profile and normalize it.

        Steps run strictly in order with a single attempt each. A failed
        token exchange means the profile endpoint is never called. Each
        network step must finish within the shared client's deadline.

        Log lines of one call share a trace id; a trace id already bound
        by the caller is kept.

        Args:
            provider_name: Selects the profile mapping.
            config: Credentials and endpoints of the provider.
            code: Authorization code from the OAuth callback.

        Returns:
            The normalized user.

        Raises:
            AuthError: If the exchange, the fetch or the mapping fails.
            MalformedProfileError: If a profile field has the wrong type.
        """
        with bound_trace_id():
            return await self._resolve(provider_name, config, code)

    async def _resolve(self, provider_name: str, config: ProviderConfig, code: str) -> User:
        if self.http_client.is_closed:
            logger.warning("Token exchange skipped: HTTP client is closed", extra=_log_extra(provider_name))
            raise token_exchange_failed(provider_name, "Token exchange failed: HTTP client is closed")

        async with self.http_client.oauth_session(config) as session:
            session.register_compliance_hook("access_token_response", _raise_for_status)
            access_token = await self._exchange_code(provider_name, session, config, code)
            data = await self._fetch_profile(provider_name, session, config, access_token)

        return self._normalize(provider_name, data)

    async def _exchange_code(
        self,
        provider_name: str,
        session: AsyncOAuth2Client,
        config: ProviderConfig,
        code: str,
    ) -> str:
        deadline = self.http_client.deadline
        try:
            token = await asyncio.wait_for(
                session.fetch_token(config.endpoint.token_url, code=code), deadline
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Token exchange exceeded {deadline}s", extra=_log_extra(provider_name))
            raise token_exchange_failed(
                provider_name, f"Token exchange exceeded the {deadline}s deadline"
            ) from e
        except _TRANSPORT_ERRORS as e:
            logger.warning(f"Token exchange failed: {e}", extra=_log_extra(provider_name))
            raise token_exchange_failed(provider_name, f"Token exchange failed: {e}") from e

        access_token = token.get("access_token") if isinstance(token, Mapping) else None
        if not access_token or not isinstance(access_token, str):
            logger.warning("Token response has no access_token", extra=_log_extra(provider_name))
            raise token_exchange_failed(provider_name, "Token response has no access_token")
        return access_token

    async def _fetch_profile(
        self,
        provider_name: str,
        session: AsyncOAuth2Client,
        config: ProviderConfig,
        access_token: str,
    ) -> dict[str, Any]:
        # Existing data-url values end in "?access_token=" or similar
        url = config.user_info_url + access_token
        deadline = self.http_client.deadline

        try:
            response = await asyncio.wait_for(session.get(url), deadline)
            response.raise_for_status()
            data = response.json()
        except asyncio.TimeoutError as e:
            logger.warning(f"Profile fetch exceeded {deadline}s", extra=_log_extra(provider_name))
            raise profile_fetch_failed(
                provider_name, f"Profile fetch exceeded the {deadline}s deadline"
            ) from e
        except _TRANSPORT_ERRORS as e:
            logger.warning(f"Profile fetch failed: {_describe(e)}", extra=_log_extra(provider_name))
            raise profile_fetch_failed(
                provider_name, f"Failed to fetch user profile: {_describe(e)}"
            ) from e

        if not isinstance(data, dict):
            logger.warning("Profile is not a JSON object", extra=_log_extra(provider_name))
            raise profile_fetch_failed(provider_name, "User profile is not a JSON object")
        return data

    def _normalize(self, provider_name: str, data: dict[str, Any]) -> User:
        provider = OAuthProvider.parse(provider_name)
        extractor = get_extractor(provider) if provider is not None else None
        if extractor is None:
            raise unknown_endpoint(provider_name)
        return extractor(data)

    def authorization_url(self, config: ProviderConfig, state: str) -> str:
        """Build the provider consent URL that starts the code flow."""
        return prepare_grant_uri(
            config.endpoint.auth_url,
            client_id=config.client_id,
            response_type="code",
            redirect_uri=config.redirect_url,
            scope=config.scope,
            state=state,
        )


class SocialLoginService:
    """Entry point for a hosting service: provider name and code in, User out."""

    def __init__(self, registry: ProviderRegistry, resolver: UserResolver):
        self.registry = registry
        self.resolver = resolver

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        environ: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "SocialLoginService":
        """Build the registry and the shared HTTP client once.

        Raises:
            ConfigError: If any enabled provider name is unknown.
        """
        settings = settings or get_settings()
        registry = ProviderRegistry.from_settings(settings, environ)
        http_client = HttpClient(timeout=settings.http_timeout, transport=transport)
        return cls(registry, UserResolver(http_client))

    def _get_config(self, provider_name: str) -> ProviderConfig:
        config = self.registry.get(provider_name)
        if config is None:
            raise provider_not_configured(provider_name)
        return config

    def configured_providers(self) -> list[str]:
        return self.registry.names()

    async def get_user(self, provider_name: str, code: str) -> User:
        config = self._get_config(provider_name)
        with bound_trace_id():
            user = await self.resolver.get_user(provider_name, config, code)
            logger.info("Resolved user", extra=_log_extra(provider_name))
        return user

    def authorization_url(self, provider_name: str, state: str) -> str:
        return self.resolver.authorization_url(self._get_config(provider_name), state)

    async def aclose(self) -> None:
        await self.resolver.http_client.aclose()

    async def __aenter__(self) -> "SocialLoginService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

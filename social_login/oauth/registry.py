"""OAuth provider registry.

Built once at startup from environment values, read-only afterwards.

Environment variable naming convention:
- oauth2.redirect-uri (shared by all providers)
- oauth2.{name}.client-id
- oauth2.{name}.secret
- oauth2.{name}.data-url (the access token is appended to this URL)
- oauth2.{name}.scopes (optional, comma-separated, defaults to openid and email)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from social_login.config import Settings
from social_login.oauth.endpoints import resolve_endpoint
from social_login.oauth.schemas import ProviderConfig

logger = logging.getLogger(__name__)

DEFAULT_SCOPES = ("openid", "email")


def _lookup(environ: Mapping[str, str], key: str, default: str = "") -> str:
    """Get a configuration value, falling back when the key is unset."""
    value = environ.get(key)
    if value is None:
        return default
    return value


def new_provider_config(name: str, environ: Mapping[str, str] | None = None) -> ProviderConfig:
    """Build the config for one provider from environment values.

    Raises:
        ConfigError: If the name is not a supported provider.
    """
    env = os.environ if environ is None else environ
    provider, endpoint = resolve_endpoint(name)

    raw_scopes = _lookup(env, f"oauth2.{name}.scopes")
    scopes = [scope.strip() for scope in raw_scopes.split(",") if scope.strip()]

    return ProviderConfig(
        provider_name=provider,
        client_id=_lookup(env, f"oauth2.{name}.client-id"),
        client_secret=_lookup(env, f"oauth2.{name}.secret"),
        redirect_url=_lookup(env, "oauth2.redirect-uri"),
        scopes=tuple(scopes) or DEFAULT_SCOPES,
        endpoint=endpoint,
        user_info_url=_lookup(env, f"oauth2.{name}.data-url"),
    )


class ProviderRegistry(Mapping[str, ProviderConfig]):
    """Immutable mapping from provider name to its config."""

    def __init__(self, configs: Mapping[str, ProviderConfig]):
        self._configs = MappingProxyType(dict(configs))

    @classmethod
    def build(
        cls,
        endpoint_names: Iterable[str],
        environ: Mapping[str, str] | None = None,
    ) -> "ProviderRegistry":
        """Build the registry for the enabled providers.

        Args:
            endpoint_names: Provider names in configuration order. A repeated
                name is registered again and the last config wins.
            environ: Source of configuration values, ``os.environ`` by default.

        Raises:
            ConfigError: If any name is not a supported provider. No partial
                registry is produced.
        """
        configs: dict[str, ProviderConfig] = {}
        for raw_name in endpoint_names:
            name = raw_name.strip()
            if not name:
                continue
            configs[name] = new_provider_config(name, environ)
            logger.info(f"Registered {name} OAuth provider")

        registry = cls(configs)
        logger.info(f"Initialized {len(registry)} OAuth providers: {registry.names()}")
        return registry

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        environ: Mapping[str, str] | None = None,
    ) -> "ProviderRegistry":
        return cls.build(settings.enabled_endpoint_names(), environ)

    def names(self) -> list[str]:
        return list(self._configs)

    def __getitem__(self, name: str) -> ProviderConfig:
        return self._configs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def __repr__(self) -> str:
        return f"ProviderRegistry({self.names()!r})"

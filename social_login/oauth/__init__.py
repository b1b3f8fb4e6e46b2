"""OAuth provider registry, endpoints and profile mapping."""

from social_login.oauth.registry import ProviderRegistry
from social_login.oauth.schemas import AuthEndpoint, OAuthProvider, ProviderConfig, User

__all__ = ["ProviderRegistry", "AuthEndpoint", "OAuthProvider", "ProviderConfig", "User"]

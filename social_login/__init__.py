"""OAuth2 authorization-code login for Google, Facebook, GitHub, VK and Odnoklassniki."""

from social_login.errors import AuthError, ConfigError, MalformedProfileError
from social_login.oauth import OAuthProvider, ProviderConfig, ProviderRegistry, User
from social_login.services import SocialLoginService, UserResolver

__all__ = [
    "AuthError",
    "ConfigError",
    "MalformedProfileError",
    "OAuthProvider",
    "ProviderConfig",
    "ProviderRegistry",
    "User",
    "SocialLoginService",
    "UserResolver",
]

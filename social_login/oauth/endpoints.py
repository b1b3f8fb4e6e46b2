"""Static OAuth2 endpoint table for the supported providers."""

from social_login.errors import unknown_endpoint
from social_login.oauth.schemas import AuthEndpoint, OAuthProvider

ENDPOINTS: dict[OAuthProvider, AuthEndpoint] = {
    OAuthProvider.GOOGLE: AuthEndpoint(
        auth_url="https://accounts.google.com/o/oauth2/auth",
        token_url="https://oauth2.googleapis.com/token",
    ),
    OAuthProvider.FACEBOOK: AuthEndpoint(
        auth_url="https://www.facebook.com/v3.2/dialog/oauth",
        token_url="https://graph.facebook.com/v3.2/oauth/access_token",
    ),
    OAuthProvider.GITHUB: AuthEndpoint(
        auth_url="https://github.com/login/oauth/authorize",
        token_url="https://github.com/login/oauth/access_token",
    ),
    OAuthProvider.VK: AuthEndpoint(
        auth_url="https://oauth.vk.com/authorize",
        token_url="https://oauth.vk.com/access_token",
    ),
    OAuthProvider.ODNOKLASSNIKI: AuthEndpoint(
        auth_url="https://connect.ok.ru/oauth/authorize",
        token_url="https://api.ok.ru/oauth/token.do",
    ),
}


def resolve_endpoint(name: str) -> tuple[OAuthProvider, AuthEndpoint]:
    """Look up the endpoint pair for a configured provider name.

    Raises:
        ConfigError: If the name is not one of the supported providers.
    """
    provider = OAuthProvider.parse(name)
    if provider is None:
        raise unknown_endpoint(name, at_startup=True)
    return provider, ENDPOINTS[provider]

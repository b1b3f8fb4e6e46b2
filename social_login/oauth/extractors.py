"""Provider-specific mapping of profile JSON into a User."""

from collections.abc import Callable
from typing import Any

from social_login.errors import malformed_profile
from social_login.oauth.schemas import OAuthProvider, User

ProfileExtractor = Callable[[dict[str, Any]], User]


def get_string(data: dict[str, Any], key: str) -> str:
    """Read a string field; absent or null values read as an empty string.

    Raises:
        MalformedProfileError: If the field holds a non-string value.
    """
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise malformed_profile(key, "a string", value)
    return value


def get_object(data: dict[str, Any], key: str) -> dict[str, Any]:
    """Read a nested object; absent or null values read as an empty object.

    Raises:
        MalformedProfileError: If the field holds a non-object value.
    """
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise malformed_profile(key, "an object", value)
    return value


def extract_google_user(data: dict[str, Any]) -> User:
    return User(
        name=get_string(data, "name"),
        email=get_string(data, "email"),
        picture=get_string(data, "picture"),
    )


def extract_facebook_user(data: dict[str, Any]) -> User:
    """Parse Facebook user info.

    The picture URL is nested as ``picture.data.url``.
    """
    picture = get_object(get_object(data, "picture"), "data")

    return User(
        name=get_string(data, "name"),
        email=get_string(data, "email"),
        picture=get_string(picture, "url"),
    )


def extract_github_user(data: dict[str, Any]) -> User:
    """Parse GitHub user info.

    The public profile does not reliably include an email, so it stays empty.
    """
    return User(
        name=get_string(data, "login"),
        picture=get_string(data, "avatar_url"),
    )


# No known profile mapping for vk and odnoklassniki yet
EXTRACTORS: dict[OAuthProvider, ProfileExtractor | None] = {
    OAuthProvider.GOOGLE: extract_google_user,
    OAuthProvider.FACEBOOK: extract_facebook_user,
    OAuthProvider.GITHUB: extract_github_user,
    OAuthProvider.VK: None,
    OAuthProvider.ODNOKLASSNIKI: None,
}


def get_extractor(provider: OAuthProvider) -> ProfileExtractor | None:
    return EXTRACTORS[provider]

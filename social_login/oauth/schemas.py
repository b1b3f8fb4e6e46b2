"""OAuth schemas and enums."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OAuthProvider(str, Enum):
    """Supported OAuth providers."""

    GOOGLE = "google"
    FACEBOOK = "facebook"
    GITHUB = "github"
    VK = "vk"
    ODNOKLASSNIKI = "odnoklassniki"

    @classmethod
    def parse(cls, name: str) -> "OAuthProvider | None":
        """Return the provider for a configured name, or None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


class AuthEndpoint(BaseModel):
    """OAuth2 authorization and token endpoint pair."""

    model_config = ConfigDict(frozen=True)

    auth_url: str
    token_url: str


class ProviderConfig(BaseModel):
    """Everything needed to talk to one identity provider."""

    model_config = ConfigDict(frozen=True)

    provider_name: OAuthProvider
    client_id: str = ""
    client_secret: str = Field(default="", repr=False)
    redirect_url: str = ""
    scopes: tuple[str, ...] = ("openid", "email")
    endpoint: AuthEndpoint
    # The access token is appended verbatim to this URL
    user_info_url: str = ""

    @property
    def scope(self) -> str:
        return " ".join(self.scopes)


class User(BaseModel):
    """Normalized user info from an OAuth provider."""

    name: str = ""
    email: str = ""
    picture: str = ""

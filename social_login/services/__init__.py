"""Business logic services."""

from social_login.services.oauth import SocialLoginService, UserResolver

__all__ = ["SocialLoginService", "UserResolver"]

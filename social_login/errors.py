"""Error codes and exceptions.

``ConfigError`` is raised while building the registry, ``AuthError`` by a
single ``get_user`` call. This package never serializes them itself:
``SocialLoginError.to_response()`` returns an ``ErrorResponse`` that a hosting
web layer can render as its error body.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class ErrorCode(str, Enum):
    UNKNOWN_ENDPOINT = "UNKNOWN_ENDPOINT"
    PROVIDER_NOT_CONFIGURED = "PROVIDER_NOT_CONFIGURED"
    TOKEN_EXCHANGE_FAILED = "TOKEN_EXCHANGE_FAILED"
    PROFILE_FETCH_FAILED = "PROFILE_FETCH_FAILED"
    MALFORMED_PROFILE = "MALFORMED_PROFILE"


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class SocialLoginError(Exception):
    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.error_code = code
        self.error_message = message
        self.error_details = details
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            code=self.error_code.value,
            message=self.error_message,
            details=self.error_details,
        )


class ConfigError(SocialLoginError):
    """Broken provider configuration. Raised at startup only."""


class AuthError(SocialLoginError):
    """A single get_user call failed."""


class MalformedProfileError(AuthError):
    """Profile JSON had a field of the wrong type."""


def unknown_endpoint(name: str, *, at_startup: bool = False) -> SocialLoginError:
    cls = ConfigError if at_startup else AuthError
    return cls(
        ErrorCode.UNKNOWN_ENDPOINT,
        f"unknown OAuth2.0 endpoint: {name}",
        details={"provider": name},
    )


def provider_not_configured(name: str) -> AuthError:
    return AuthError(
        ErrorCode.PROVIDER_NOT_CONFIGURED,
        f"OAuth provider '{name}' is not configured",
        details={"provider": name},
    )


def token_exchange_failed(name: str, message: str = "Token exchange failed") -> AuthError:
    return AuthError(
        ErrorCode.TOKEN_EXCHANGE_FAILED,
        message,
        details={"provider": name},
    )


def profile_fetch_failed(name: str, message: str = "Failed to fetch user profile") -> AuthError:
    return AuthError(
        ErrorCode.PROFILE_FETCH_FAILED,
        message,
        details={"provider": name},
    )


def malformed_profile(key: str, expected: str, actual: Any) -> MalformedProfileError:
    return MalformedProfileError(
        ErrorCode.MALFORMED_PROFILE,
        f"Profile field '{key}' is not {expected}",
        details={"field": key, "expected": expected, "actual": type(actual).__name__},
    )

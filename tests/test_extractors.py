"""Tests for provider profile mapping."""

import pytest
from pydantic import ValidationError

from social_login.errors import AuthError, ErrorCode, MalformedProfileError
from social_login.oauth.extractors import (
    extract_facebook_user,
    extract_github_user,
    extract_google_user,
    get_extractor,
    get_object,
    get_string,
)
from social_login.oauth.schemas import OAuthProvider, User


class TestAccessors:
    def test_get_string(self) -> None:
        assert get_string({"name": "Ann"}, "name") == "Ann"

    def test_get_string_missing(self) -> None:
        assert get_string({}, "name") == ""

    def test_get_string_null(self) -> None:
        assert get_string({"name": None}, "name") == ""

    def test_get_string_wrong_type(self) -> None:
        with pytest.raises(MalformedProfileError) as exc_info:
            get_string({"name": 42}, "name")

        err = exc_info.value
        assert err.error_code == ErrorCode.MALFORMED_PROFILE
        assert err.error_details == {"field": "name", "expected": "a string", "actual": "int"}

    def test_get_object(self) -> None:
        assert get_object({"picture": {"data": {}}}, "picture") == {"data": {}}

    def test_get_object_missing(self) -> None:
        assert get_object({}, "picture") == {}

    def test_get_object_wrong_type(self) -> None:
        with pytest.raises(MalformedProfileError):
            get_object({"picture": "http://p/b.png"}, "picture")

    def test_malformed_profile_is_auth_error(self) -> None:
        with pytest.raises(AuthError):
            get_string({"email": ["a@x.com"]}, "email")


class TestGoogle:
    def test_full_profile(self) -> None:
        user = extract_google_user(
            {"name": "Ann", "email": "ann@x.com", "picture": "http://p/a.png", "sub": "1"}
        )
        assert user == User(name="Ann", email="ann@x.com", picture="http://p/a.png")

    def test_missing_fields(self) -> None:
        assert extract_google_user({"email": "ann@x.com"}) == User(email="ann@x.com")


class TestFacebook:
    def test_nested_picture(self) -> None:
        user = extract_facebook_user(
            {
                "name": "Bo",
                "email": "bo@x.com",
                "picture": {"data": {"url": "http://p/b.png", "is_silhouette": False}},
            }
        )
        assert user == User(name="Bo", email="bo@x.com", picture="http://p/b.png")

    def test_picture_without_data(self) -> None:
        user = extract_facebook_user({"name": "Bo", "picture": {}})
        assert user.picture == ""

    def test_picture_missing(self) -> None:
        assert extract_facebook_user({"name": "Bo"}) == User(name="Bo")

    def test_picture_data_wrong_type(self) -> None:
        with pytest.raises(MalformedProfileError):
            extract_facebook_user({"picture": {"data": "http://p/b.png"}})


class TestGitHub:
    def test_login_and_avatar(self) -> None:
        user = extract_github_user({"login": "carl", "avatar_url": "http://p/c.png"})
        assert user == User(name="carl", email="", picture="http://p/c.png")

    def test_email_is_never_taken(self) -> None:
        user = extract_github_user({"login": "carl", "email": "carl@x.com", "name": "Carl"})
        assert user.email == ""
        assert user.name == "carl"

    def test_null_values(self) -> None:
        user = extract_github_user({"login": "carl", "avatar_url": None})
        assert user.picture == ""


class TestGetExtractor:
    def test_every_provider_has_an_entry(self) -> None:
        for provider in OAuthProvider:
            get_extractor(provider)

    def test_wired_providers(self) -> None:
        assert get_extractor(OAuthProvider.GOOGLE) is extract_google_user
        assert get_extractor(OAuthProvider.FACEBOOK) is extract_facebook_user
        assert get_extractor(OAuthProvider.GITHUB) is extract_github_user

    @pytest.mark.parametrize("provider", [OAuthProvider.VK, OAuthProvider.ODNOKLASSNIKI])
    def test_unmapped_providers(self, provider: OAuthProvider) -> None:
        assert get_extractor(provider) is None


class TestUser:
    def test_defaults_are_empty(self) -> None:
        assert User() == User(name="", email="", picture="")

    def test_rejects_null(self) -> None:
        # Extractors turn nulls into "" before building a User
        with pytest.raises(ValidationError):
            User(name=None)

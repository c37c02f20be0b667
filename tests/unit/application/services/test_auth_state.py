"""Tests for the credential-cookie state machine."""

import pytest

from raagriff.application.services.auth_state import (
    AuthAction,
    build_refresh_url,
    redirect_location,
    resolve_auth_action,
    safe_redirect_target,
)


class TestResolveAuthAction:
    """Cookie presence -> next step."""

    @pytest.mark.parametrize(
        ("access_token", "refresh_token", "expected"),
        [
            (None, None, AuthAction.LOGIN),
            ("access", None, AuthAction.AUTHORIZE),
            (None, "refresh", AuthAction.REFRESH),
            ("access", "refresh", AuthAction.PROCEED),
        ],
    )
    def test_cookie_table(self, access_token, refresh_token, expected):
        assert resolve_auth_action(access_token, refresh_token) is expected

    def test_empty_strings_count_as_missing(self):
        """A cookie cleared to "" must not let the user through."""
        assert resolve_auth_action("", "") is AuthAction.LOGIN
        assert resolve_auth_action("", "refresh") is AuthAction.REFRESH


class TestRedirectLocation:
    """Where each action sends the browser."""

    def test_login(self):
        assert redirect_location(AuthAction.LOGIN, "/profile") == "/login"

    def test_authorize(self):
        assert redirect_location(AuthAction.AUTHORIZE, "/profile") == "/auth"

    def test_refresh_carries_original_url(self):
        assert (
            redirect_location(AuthAction.REFRESH, "/profile")
            == "/auth/refresh_tokens?redirect_to=%2Fprofile"
        )

    def test_proceed_has_no_location(self):
        assert redirect_location(AuthAction.PROCEED, "/profile") is None


class TestBuildRefreshUrl:
    """redirect_to is encoded like encodeURIComponent."""

    def test_path_only(self):
        assert build_refresh_url("/profile") == "/auth/refresh_tokens?redirect_to=%2Fprofile"

    def test_path_with_query_and_spaces(self):
        assert (
            build_refresh_url("/search/all/daft punk?x=1")
            == "/auth/refresh_tokens?redirect_to=%2Fsearch%2Fall%2Fdaft%20punk%3Fx%3D1"
        )

    def test_uri_component_safe_characters_kept(self):
        assert build_refresh_url("/a(b)!*'") == "/auth/refresh_tokens?redirect_to=%2Fa(b)!*'"


class TestSafeRedirectTarget:
    """Only same-site relative paths survive."""

    @pytest.mark.parametrize(
        "target",
        ["/", "/profile", "/artists/123/albums/pages/2", "/search/all/a%20b?x=1"],
    )
    def test_relative_paths_accepted(self, target):
        assert safe_redirect_target(target) == target

    @pytest.mark.parametrize(
        "target",
        [
            None,
            "",
            "profile",
            "https://evil.example.com/",
            "//evil.example.com/path",
            "/\\evil.example.com",
            "javascript:alert(1)",
        ],
    )
    def test_everything_else_falls_back(self, target):
        assert safe_redirect_target(target) == "/"

    def test_custom_default(self):
        assert safe_redirect_target(None, default="/profile") == "/profile"

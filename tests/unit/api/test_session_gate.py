"""Tests for the protected-page auth gate and the upstream failure handler."""

from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient


class TestAuthGate:
    """Which credential cookies a protected page needs."""

    def test_no_cookies_goes_to_login(
        self, client: TestClient, spotify_stub: MagicMock
    ):
        response = client.get("/profile")

        assert response.status_code == 302
        assert response.headers["location"] == "/login"
        assert response.headers.get_list("set-cookie") == []
        spotify_stub.get_current_user.assert_not_awaited()

    def test_access_only_restarts_authorization(self, client: TestClient):
        client.cookies.set("access_token", "access-123")

        response = client.get("/profile")

        assert response.headers["location"] == "/auth"

    def test_refresh_only_refreshes_and_returns(self, client: TestClient):
        client.cookies.set("refresh_token", "refresh-123")

        response = client.get("/profile")

        assert response.headers["location"] == "/auth/refresh_tokens?redirect_to=%2Fprofile"

    def test_refresh_keeps_query_string(self, client: TestClient):
        client.cookies.set("refresh_token", "refresh-123")

        response = client.get("/albums/pages/2?x=1")

        assert response.headers["location"] == (
            "/auth/refresh_tokens?redirect_to=%2Falbums%2Fpages%2F2%3Fx%3D1"
        )

    def test_both_cookies_render(self, logged_in_client: TestClient, spotify_stub: MagicMock):
        response = logged_in_client.get("/profile")

        assert response.status_code == 200
        spotify_stub.get_current_user.assert_awaited_once_with("access-123")


class TestSessionFailure:
    """Upstream errors on a protected page end in a cookie-clearing redirect."""

    def test_expired_access_token_goes_through_refresh(
        self,
        logged_in_client: TestClient,
        spotify_stub: MagicMock,
        status_error,
        cookie_headers,
    ):
        spotify_stub.get_current_user.side_effect = status_error(401)

        response = logged_in_client.get("/profile")

        assert response.status_code == 302
        assert response.headers["location"] == "/auth/refresh_tokens?redirect_to=%2Fprofile"
        cookies = cookie_headers(response)
        assert "Max-Age=0" in cookies["access_token"]
        assert "refresh_token" not in cookies

    @pytest.mark.parametrize("status_code", [400, 403, 404, 429, 500, 503])
    def test_other_statuses_clear_everything(
        self,
        logged_in_client: TestClient,
        spotify_stub: MagicMock,
        status_error,
        cookie_headers,
        status_code,
    ):
        spotify_stub.get_current_user.side_effect = status_error(status_code)

        response = logged_in_client.get("/profile")

        assert response.headers["location"] == "/login"
        cookies = cookie_headers(response)
        assert "Max-Age=0" in cookies["access_token"]
        assert "Max-Age=0" in cookies["refresh_token"]

    def test_transport_error_clears_everything(
        self, logged_in_client: TestClient, spotify_stub: MagicMock, cookie_headers
    ):
        spotify_stub.get_track.side_effect = httpx.ConnectError("connection refused")

        response = logged_in_client.get("/tracks/track-1")

        assert response.headers["location"] == "/login"
        cookies = cookie_headers(response)
        assert "Max-Age=0" in cookies["access_token"]
        assert "Max-Age=0" in cookies["refresh_token"]

    def test_recommended_artists_failure_surfaces(
        self,
        logged_in_client: TestClient,
        spotify_stub: MagicMock,
        status_error,
    ):
        """Albums and playlists swallow errors, recommended artists does not."""
        spotify_stub.search.side_effect = status_error(401)

        response = logged_in_client.get("/")

        assert response.headers["location"] == "/auth/refresh_tokens?redirect_to=%2F"

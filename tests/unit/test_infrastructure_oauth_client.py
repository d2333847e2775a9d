"""Unit tests for OAuth2Client.

Tests cover:
- exchange_code_for_tokens: success, request format, 400, 429, 5xx, bad body
- refresh_access_token: with and without rotation
- Connection errors
- Unconfigured client
- Authorization URL
"""

import base64
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from pytest_httpx import HTTPXMock

from finsync.core.result import Failure, Success
from finsync.domain.errors import (
    ProviderAuthenticationError,
    ProviderConfigurationError,
    ProviderInvalidResponseError,
    ProviderRateLimitError,
    ProviderUnavailableError,
)
from finsync.domain.protocols import OAuthTokens
from finsync.infrastructure.providers.oauth_client import OAuth2Client, ProviderOAuthConfig

TOKEN_URL = "https://auth.hotmart.test/oauth/token"


def build_client(client_id="client_id", client_secret="client_secret") -> OAuth2Client:
    return OAuth2Client(
        config=ProviderOAuthConfig(
            provider_slug="hotmart",
            token_url=TOKEN_URL,
            authorize_url="https://auth.hotmart.test/oauth/authorize",
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri="https://app.test/oauth/hotmart/callback",
        ),
        timeout=5.0,
    )


@pytest.mark.unit
class TestExchangeCode:
    """Authorization code grant."""

    async def test_exchange_returns_tokens(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=TOKEN_URL,
            json={
                "access_token": "at_123",
                "refresh_token": "rt_456",
                "expires_in": 172800,
                "token_type": "bearer",
                "scope": "read",
                "jti": "ignored",
            },
        )

        result = await build_client().exchange_code_for_tokens("code_xyz")

        assert result == Success(
            value=OAuthTokens(
                access_token="at_123",
                refresh_token="rt_456",
                expires_in=172800,
                token_type="bearer",
                scope="read",
            )
        )

    async def test_exchange_sends_basic_auth_and_form_body(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=TOKEN_URL,
            json={"access_token": "at", "expires_in": 60},
        )

        await build_client().exchange_code_for_tokens("code_xyz")

        request = httpx_mock.get_request()
        expected = base64.b64encode(b"client_id:client_secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        body = parse_qs(request.content.decode())
        assert body == {
            "grant_type": ["authorization_code"],
            "code": ["code_xyz"],
            "redirect_uri": ["https://app.test/oauth/hotmart/callback"],
        }

    async def test_rejected_code(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST", url=TOKEN_URL, status_code=400, json={"error": "invalid_grant"}
        )

        result = await build_client().exchange_code_for_tokens("bad")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderAuthenticationError)

    async def test_rate_limited(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST", url=TOKEN_URL, status_code=429, headers={"Retry-After": "12"}
        )

        result = await build_client().exchange_code_for_tokens("code")

        assert isinstance(result.error, ProviderRateLimitError)
        assert result.error.retry_after == 12

    async def test_server_error(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, status_code=503)

        result = await build_client().exchange_code_for_tokens("code")

        assert isinstance(result.error, ProviderUnavailableError)

    async def test_unexpected_status(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, status_code=302)

        result = await build_client().exchange_code_for_tokens("code")

        assert isinstance(result.error, ProviderInvalidResponseError)

    @pytest.mark.parametrize(
        "body",
        [
            {"refresh_token": "rt", "expires_in": 60},
            {"access_token": "at", "expires_in": 0},
            {"access_token": "", "expires_in": 60},
        ],
    )
    async def test_invalid_token_body(self, httpx_mock: HTTPXMock, body):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, json=body)

        result = await build_client().exchange_code_for_tokens("code")

        assert isinstance(result.error, ProviderInvalidResponseError)

    async def test_malformed_json_body(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, text="not json")

        result = await build_client().exchange_code_for_tokens("code")

        assert isinstance(result.error, ProviderInvalidResponseError)

    async def test_connection_error(self, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=TOKEN_URL)

        result = await build_client().exchange_code_for_tokens("code")

        assert isinstance(result.error, ProviderUnavailableError)

    async def test_timeout(self, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ReadTimeout("slow"), url=TOKEN_URL)

        result = await build_client().exchange_code_for_tokens("code")

        assert isinstance(result.error, ProviderUnavailableError)


@pytest.mark.unit
class TestRefreshToken:
    """Refresh token grant."""

    async def test_refresh_with_rotation(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=TOKEN_URL,
            json={"access_token": "at_new", "refresh_token": "rt_new", "expires_in": 3600},
        )

        result = await build_client().refresh_access_token("rt_old")

        assert isinstance(result, Success)
        assert result.value.refresh_token == "rt_new"
        body = parse_qs(httpx_mock.get_request().content.decode())
        assert body == {"grant_type": ["refresh_token"], "refresh_token": ["rt_old"]}

    async def test_refresh_without_rotation(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST", url=TOKEN_URL, json={"access_token": "at_new", "expires_in": 3600}
        )

        result = await build_client().refresh_access_token("rt_old")

        assert isinstance(result, Success)
        assert result.value.refresh_token is None

    async def test_refresh_rejected(self, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=TOKEN_URL,
            status_code=401,
            json={"error": "invalid_token", "error_description": "refresh token expired"},
        )

        result = await build_client().refresh_access_token("rt_old")

        assert isinstance(result.error, ProviderAuthenticationError)
        assert result.error.is_token_expired is True


@pytest.mark.unit
class TestConfiguration:
    """Client credentials and authorization URL."""

    async def test_unconfigured_client_makes_no_request(self, httpx_mock: HTTPXMock):
        client = build_client(client_id=None)

        result = await client.refresh_access_token("rt")

        assert client.is_configured is False
        assert isinstance(result.error, ProviderConfigurationError)
        assert httpx_mock.get_requests() == []

    def test_authorization_url(self):
        url = build_client().authorization_url("state_abc")

        parsed = urlparse(url)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == (
            "https://auth.hotmart.test/oauth/authorize"
        )
        assert parse_qs(parsed.query) == {
            "response_type": ["code"],
            "client_id": ["client_id"],
            "state": ["state_abc"],
            "redirect_uri": ["https://app.test/oauth/hotmart/callback"],
        }

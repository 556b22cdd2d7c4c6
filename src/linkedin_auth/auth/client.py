"""Minimal async OAuth2 authorization-code client."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

import httpx

logger = logging.getLogger(__name__)

# Token response keys that map onto OAuth2Token attributes
_TOKEN_KEYS = ("access_token", "refresh_token", "expires_in", "expires_at", "token_type")


class OAuth2Error(Exception):
    """Transport or protocol failure talking to the provider."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class OAuth2Token:
    """Access token returned by the provider's token endpoint."""

    access_token: str | None = None
    refresh_token: str | None = None
    expires_at: int | None = None
    token_type: str = "Bearer"
    other_params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "OAuth2Token":
        """
        Build a token from a decoded token endpoint response.

        `expires_in` is converted to an absolute unix timestamp. Keys that
        aren't part of the token (e.g. `error`) are kept in `other_params`.
        """
        expires_at = data.get("expires_at")
        try:
            if data.get("expires_in") is not None:
                expires_at = int(time.time()) + int(data["expires_in"])
            if expires_at is not None:
                expires_at = int(expires_at)
        except (TypeError, ValueError) as e:
            raise OAuth2Error("Invalid token response: non-numeric expiry") from e

        return cls(
            access_token=data.get("access_token") or None,
            refresh_token=data.get("refresh_token") or None,
            expires_at=expires_at,
            token_type=data.get("token_type") or "Bearer",
            other_params={k: v for k, v in data.items() if k not in _TOKEN_KEYS},
        )


@dataclass(frozen=True)
class OAuth2Response:
    """Response from an authenticated resource request."""

    status_code: int
    headers: dict[str, str]
    body: Any


class OAuth2Client:
    """OAuth2 client bound to a single provider."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        site: str,
        authorize_url: str,
        token_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            site: Base URL of the provider's REST API
            authorize_url: Provider authorization endpoint
            token_url: Provider token endpoint
            transport: Optional httpx transport (used by tests)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.site = site.rstrip("/")
        self._authorize_url = authorize_url
        self.token_url = token_url
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport)

    def authorize_url(self, **params: str) -> str:
        """Build the provider authorization URL for the code grant."""
        query = dict(params)
        query["response_type"] = "code"
        query["client_id"] = self.client_id
        return f"{self._authorize_url}?{urlencode(query)}"

    async def get_token(self, code: str, redirect_uri: str) -> OAuth2Token:
        """
        Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the callback
            redirect_uri: Same redirect_uri used in the authorization request

        Returns:
            Token parsed from the response. The access token is None when the
            provider answered with an error payload.

        Raises:
            OAuth2Error: On transport failure or an unparseable response
        """
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }

        async with self._http() as client:
            try:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                )
            except httpx.HTTPError as e:
                logger.error(f"Token exchange request failed: {e}")
                raise OAuth2Error(str(e)) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Token exchange returned non-JSON body: {response.status_code}")
            raise OAuth2Error(f"Invalid token response: {response.status_code}") from e

        if not isinstance(payload, dict):
            raise OAuth2Error(f"Invalid token response: {response.status_code}")

        if response.status_code >= 400:
            logger.warning(f"Token endpoint returned {response.status_code}")

        return OAuth2Token.from_response(payload)

    async def get(self, token: OAuth2Token, path: str) -> OAuth2Response:
        """
        Perform an authenticated GET against the provider API.

        The path is passed to httpx as a literal string rather than through
        `params=`, so projection syntax like `(id,firstName)` is sent as-is.

        Raises:
            OAuth2Error: On transport failure
        """
        headers = {
            "Authorization": f"{token.token_type or 'Bearer'} {token.access_token}",
            "Accept": "application/json",
        }

        async with self._http() as client:
            try:
                response = await client.get(f"{self.site}{path}", headers=headers)
            except httpx.HTTPError as e:
                logger.error(f"Request to {path.split('?')[0]} failed: {e}")
                raise OAuth2Error(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = response.text

        return OAuth2Response(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=body,
        )

"""Shared fixtures: a strategy wired to a fake LinkedIn API."""

from typing import Any

import httpx
import pytest

from linkedin_auth.auth.client import OAuth2Client
from linkedin_auth.auth.config import StrategyConfig, get_strategy_config
from linkedin_auth.auth.providers.linkedin import LinkedInStrategy
from linkedin_auth.auth.providers.linkedin_schemas import STILL_IMAGE_KEY

TOKEN_PATH = "/oauth/v2/accessToken"
PROFILE_PATH = "/v2/me"
EMAIL_PATH = "/v2/clientAwareMemberHandles"


def image_element(width: int | None, *identifiers: str) -> dict[str, Any]:
    """Build a displayImage~ element as LinkedIn returns it."""
    element: dict[str, Any] = {
        "identifiers": [{"identifier": i, "identifierType": "EXTERNAL_URL"} for i in identifiers],
    }
    if width is not None:
        element["data"] = {STILL_IMAGE_KEY: {"storageSize": {"width": width, "height": width}}}
    return element


PROFILE = {
    "id": "REDACTED123",
    "localizedFirstName": "Ada",
    "localizedLastName": "Lovelace",
    "profilePicture": {
        "displayImage": "urn:li:digitalmediaAsset:C4D03AQ",
        "displayImage~": {
            "elements": [
                image_element(100, "https://media.licdn.com/100.jpg"),
                image_element(800, "https://media.licdn.com/800.jpg"),
                image_element(400, "https://media.licdn.com/400.jpg"),
            ]
        },
    },
}

EMAILS = {
    "elements": [
        {
            "type": "EMAIL",
            "primary": True,
            "handle": "urn:li:emailAddress:123",
            "handle~": {"emailAddress": "ada@example.com"},
        }
    ]
}


class FakeLinkedIn:
    """
    Stand-in for the LinkedIn token and REST endpoints.

    Each route maps to (status, json body) or an exception instance to raise.
    """

    def __init__(self):
        self.routes: dict[str, Any] = {
            TOKEN_PATH: (200, {"access_token": "access-123", "expires_in": 5184000}),
            PROFILE_PATH: (200, PROFILE),
            EMAIL_PATH: (200, EMAILS),
        }
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, json=body)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def config() -> StrategyConfig:
    return StrategyConfig(
        enabled=True,
        client_id="client-id",
        client_secret="client-secret",
        state_secret="test-state-secret",
    )


@pytest.fixture
def fake_linkedin() -> FakeLinkedIn:
    return FakeLinkedIn()


@pytest.fixture
def strategy(config: StrategyConfig, fake_linkedin: FakeLinkedIn) -> LinkedInStrategy:
    client = OAuth2Client(
        client_id=config.client_id,
        client_secret=config.client_secret,
        site=config.site,
        authorize_url=config.authorize_url,
        token_url=config.token_url,
        transport=httpx.MockTransport(fake_linkedin.handler),
    )
    return LinkedInStrategy(config=config, client=client)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    get_strategy_config.cache_clear()
    yield
    get_strategy_config.cache_clear()

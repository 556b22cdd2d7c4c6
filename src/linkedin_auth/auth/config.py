"""LinkedIn strategy configuration."""

import os
import secrets
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_SCOPE = "r_liteprofile r_emailaddress"


@dataclass
class StrategyConfig:
    """LinkedIn OAuth2 strategy configuration."""

    # Whether the /auth/linkedin routes are served
    enabled: bool = False

    # LinkedIn OAuth client credentials
    client_id: str = ""
    client_secret: str = ""

    # Profile field used as the Auth uid
    uid_field: str = "id"

    # Scope requested when the incoming request doesn't name one
    default_scope: str = DEFAULT_SCOPE

    # Provider endpoints
    site: str = "https://api.linkedin.com"
    authorize_url: str = "https://www.linkedin.com/oauth/v2/authorization"
    token_url: str = "https://www.linkedin.com/oauth/v2/accessToken"

    # State cookie signing
    state_secret: str = ""
    state_max_age: int = 600

    # Base URL for the callback (auto-detected if not set)
    base_url: str = ""

    def __post_init__(self):
        """Validate configuration."""
        if self.enabled:
            if not self.client_id:
                raise ValueError("LINKEDIN_CLIENT_ID required when LinkedIn auth enabled")
            if not self.client_secret:
                raise ValueError("LINKEDIN_CLIENT_SECRET required when LinkedIn auth enabled")
        if not self.state_secret:
            # Cookies signed with a per-process secret don't survive restarts
            self.state_secret = secrets.token_urlsafe(32)


def _read_secret_file(path: str) -> str:
    """Read a secret from a file path."""
    try:
        return Path(path).read_text().strip()
    except (FileNotFoundError, PermissionError):
        return ""


def _secret_from_env(name: str) -> str:
    """Read NAME from the environment, falling back to the file named by NAME_FILE."""
    value = os.environ.get(name, "")
    if not value:
        secret_file = os.environ.get(f"{name}_FILE", "")
        if secret_file:
            value = _read_secret_file(secret_file)
    return value


@lru_cache
def get_strategy_config() -> StrategyConfig:
    """Load strategy configuration from environment variables."""

    enabled = os.environ.get("LINKEDIN_AUTH_ENABLED", "").lower() in ("true", "1", "yes")

    if not enabled:
        return StrategyConfig(enabled=False)

    defaults = StrategyConfig()

    return StrategyConfig(
        enabled=enabled,
        client_id=os.environ.get("LINKEDIN_CLIENT_ID", ""),
        client_secret=_secret_from_env("LINKEDIN_CLIENT_SECRET"),
        uid_field=os.environ.get("LINKEDIN_UID_FIELD", defaults.uid_field),
        default_scope=os.environ.get("LINKEDIN_DEFAULT_SCOPE", defaults.default_scope),
        site=os.environ.get("LINKEDIN_SITE", defaults.site),
        authorize_url=os.environ.get("LINKEDIN_AUTHORIZE_URL", defaults.authorize_url),
        token_url=os.environ.get("LINKEDIN_TOKEN_URL", defaults.token_url),
        state_secret=_secret_from_env("LINKEDIN_STATE_SECRET"),
        state_max_age=int(os.environ.get("LINKEDIN_STATE_MAX_AGE", "600")),
        base_url=os.environ.get("LINKEDIN_BASE_URL", ""),
    )

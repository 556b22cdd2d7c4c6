"""OAuth2 authentication for LinkedIn."""

from .client import OAuth2Client, OAuth2Error, OAuth2Token
from .config import StrategyConfig, get_strategy_config
from .conn import AuthError, Conn, SessionState
from .router import create_router

__all__ = [
    "OAuth2Client",
    "OAuth2Error",
    "OAuth2Token",
    "StrategyConfig",
    "get_strategy_config",
    "AuthError",
    "Conn",
    "SessionState",
    "create_router",
]

"""LinkedIn OAuth2 authentication strategy."""

__version__ = "0.1.0"

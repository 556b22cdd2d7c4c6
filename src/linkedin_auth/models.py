"""Pydantic models for the normalized auth result."""

from typing import Any

from pydantic import BaseModel, Field


class Info(BaseModel):
    """User details normalized from the provider profile."""

    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    image_url: str | None = None


class Credentials(BaseModel):
    """Provider credentials obtained during the callback."""

    token: str | None = None
    refresh_token: str | None = None
    token_type: str | None = None
    expires: bool = False
    expires_at: int | None = None


class Extra(BaseModel):
    """Raw provider data kept alongside the normalized fields."""

    raw_info: dict[str, Any] = Field(default_factory=dict)


class Auth(BaseModel):
    """Result of a successful authentication."""

    provider: str
    strategy: str
    uid: str | None = None
    info: Info = Field(default_factory=Info)
    credentials: Credentials = Field(default_factory=Credentials)
    extra: Extra = Field(default_factory=Extra)


class ErrorDetail(BaseModel):
    """A single authentication error."""

    kind: str | None = None
    message: str | None = None


class Failure(BaseModel):
    """Result of a failed authentication."""

    provider: str
    errors: list[ErrorDetail] = Field(default_factory=list)

"""Immutable request context threaded through the strategy hooks."""

from dataclasses import dataclass, field, replace
from typing import Any

from .client import OAuth2Token


@dataclass(frozen=True)
class AuthError:
    """A single authentication failure reported back to the host."""

    kind: str | None
    message: str | None


@dataclass(frozen=True)
class SessionState:
    """Request-scoped values collected during the callback."""

    state: str | None = None
    token: OAuth2Token | None = None
    raw_profile: dict[str, Any] | None = None
    raw_email: str | None = None


@dataclass(frozen=True)
class Conn:
    """
    Snapshot of an auth request and the response being built for it.

    Every method returns a new Conn; hooks never mutate the one they are given.
    """

    params: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)
    callback_url: str = ""
    session: SessionState = field(default_factory=SessionState)
    errors: tuple[AuthError, ...] = ()
    resp_cookies: dict[str, str] = field(default_factory=dict)
    deleted_cookies: tuple[str, ...] = ()
    redirect_to: str | None = None

    @property
    def failed(self) -> bool:
        """True once any step has reported an error."""
        return bool(self.errors)

    def put_resp_cookie(self, name: str, value: str) -> "Conn":
        return replace(self, resp_cookies={**self.resp_cookies, name: value})

    def delete_resp_cookie(self, name: str) -> "Conn":
        resp_cookies = {k: v for k, v in self.resp_cookies.items() if k != name}
        return replace(
            self,
            resp_cookies=resp_cookies,
            deleted_cookies=self.deleted_cookies + (name,),
        )

    def redirect(self, url: str) -> "Conn":
        return replace(self, redirect_to=url)

    def set_errors(self, *errors: AuthError) -> "Conn":
        return replace(self, errors=self.errors + tuple(errors))

    def put_session(self, **changes: Any) -> "Conn":
        return replace(self, session=replace(self.session, **changes))

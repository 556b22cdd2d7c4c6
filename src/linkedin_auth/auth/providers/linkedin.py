"""LinkedIn OAuth2 strategy."""

import dataclasses
import logging
from typing import Any

from ...models import Credentials, Extra, Info
from ..client import OAuth2Client, OAuth2Error, OAuth2Token
from ..config import StrategyConfig, get_strategy_config
from ..conn import AuthError, Conn
from ..state import STATE_COOKIE_NAME, generate_state, load_state, sign_state
from .base import Strategy
from .linkedin_schemas import (
    HandleKind,
    ImageElement,
    MemberHandle,
    MemberHandles,
    ProfilePicture,
    SizedImage,
    decode,
)

logger = logging.getLogger(__name__)

# LinkedIn v2 API queries. Projection syntax is sent literally.
USER_QUERY = (
    "/v2/me?projection=(id,localizedFirstName,localizedLastName,"
    "profilePicture(displayImage~:playableStreams))"
)
EMAIL_QUERY = "/v2/clientAwareMemberHandles?q=members&projection=(elements*(primary,type,handle~))"


def _image_width(raw: Any) -> int:
    sized = decode(SizedImage, raw)
    return sized.width if sized is not None else 0


def extract_image(profile_picture: Any) -> str | None:
    """
    Pick the widest display image from a profile's `profilePicture`.

    Elements without a readable width count as 0 wide. On a tie the first
    widest element in provider order wins. Only the chosen element has to
    carry a usable identifier.
    """
    picture = decode(ProfilePicture, profile_picture)
    if picture is None or picture.display_image is None or not picture.display_image.elements:
        return None

    chosen = max(picture.display_image.elements, key=_image_width)

    element = decode(ImageElement, chosen)
    if element is None or not element.identifiers:
        return None
    return element.identifiers[0].identifier


def extract_email(body: Any) -> str | None:
    """
    Pick the email address out of a member handles response.

    Only EMAIL handles are considered. With several, the primary one is
    preferred, otherwise the first listed. Only the chosen handle has to
    carry an email address.
    """
    handles = decode(MemberHandles, body)
    if handles is None:
        return None

    emails: list[tuple[Any, HandleKind]] = []
    for raw in handles.elements:
        kind = decode(HandleKind, raw)
        if kind is not None and kind.type == "EMAIL":
            emails.append((raw, kind))

    if not emails:
        return None

    chosen = next((raw for raw, kind in emails if kind.primary), emails[0][0])

    element = decode(MemberHandle, chosen)
    if element is None or element.handle is None:
        return None
    return element.handle.email_address


class LinkedInStrategy(Strategy):
    """LinkedIn OAuth2 strategy (authorization code grant)."""

    def __init__(
        self,
        config: StrategyConfig | None = None,
        client: OAuth2Client | None = None,
    ):
        self.config = config or get_strategy_config()
        self.client = client or OAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            site=self.config.site,
            authorize_url=self.config.authorize_url,
            token_url=self.config.token_url,
        )

    @property
    def name(self) -> str:
        return "linkedin"

    # =========================================================================
    # Lifecycle hooks
    # =========================================================================

    def on_begin_auth(self, conn: Conn) -> Conn:
        """Redirect to LinkedIn's authorization page."""
        scope = conn.params.get("scope") or self.config.default_scope
        state = conn.params.get("state") or generate_state()

        auth_url = self.client.authorize_url(
            scope=scope,
            state=state,
            redirect_uri=conn.callback_url,
        )

        logger.info(f"Redirecting to LinkedIn authorization (scope={scope})")

        return (
            conn.put_session(state=state)
            .put_resp_cookie(STATE_COOKIE_NAME, sign_state(state, self.config.state_secret))
            .redirect(auth_url)
        )

    async def on_callback(self, conn: Conn) -> Conn:
        """Validate the callback, exchange the code and load the member."""
        code = conn.params.get("code")
        state = conn.params.get("state")

        conn = conn.delete_resp_cookie(STATE_COOKIE_NAME)

        if not code or not state:
            return self._fail(conn, "missing_code", "No code received")

        try:
            token = await self.client.get_token(code, conn.callback_url)
        except OAuth2Error as e:
            return self._fail(conn, "OAuth2", e.reason)

        if not token.access_token:
            return self._fail(
                conn,
                token.other_params.get("error"),
                token.other_params.get("error_description"),
            )

        cookie_state = load_state(
            conn.cookies.get(STATE_COOKIE_NAME),
            self.config.state_secret,
            self.config.state_max_age,
        )
        if cookie_state != state:
            return self._fail(conn, "csrf", "CSRF token mismatch")

        conn = conn.put_session(state=state)
        conn = await self._fetch_user(conn, token)
        if conn.failed:
            return conn
        conn = await self._fetch_email(conn, token)

        if not conn.failed:
            logger.info(f"LinkedIn login successful: {self.uid(conn)}")
        return conn

    def on_cleanup(self, conn: Conn) -> Conn:
        return conn.put_session(state=None, token=None, raw_profile=None, raw_email=None)

    # =========================================================================
    # Accessors
    # =========================================================================

    def uid(self, conn: Conn) -> str | None:
        """Read the configured uid field from the raw profile."""
        profile = conn.session.raw_profile or {}
        return profile.get(str(self.config.uid_field))

    def info(self, conn: Conn) -> Info:
        profile = conn.session.raw_profile or {}
        first_name = profile.get("localizedFirstName")
        last_name = profile.get("localizedLastName")
        name = " ".join(part for part in (first_name, last_name) if part)

        return Info(
            name=name or None,
            first_name=first_name,
            last_name=last_name,
            email=conn.session.raw_email,
            image_url=extract_image(profile.get("profilePicture")),
        )

    def credentials(self, conn: Conn) -> Credentials:
        token = conn.session.token
        if token is None:
            return Credentials()

        return Credentials(
            token=token.access_token,
            refresh_token=token.refresh_token,
            token_type=token.token_type,
            expires=token.expires_at is not None,
            expires_at=token.expires_at,
        )

    def extra(self, conn: Conn) -> Extra:
        """Raw token and profile as returned by LinkedIn."""
        token = conn.session.token
        return Extra(
            raw_info={
                "token": dataclasses.asdict(token) if token else None,
                "user": conn.session.raw_profile,
            }
        )

    # =========================================================================
    # LinkedIn API calls
    # =========================================================================

    async def _fetch_user(self, conn: Conn, token: OAuth2Token) -> Conn:
        conn = conn.put_session(token=token)
        conn, body = await self._get(conn, token, USER_QUERY)
        if conn.failed:
            return conn

        if not isinstance(body, dict):
            return self._fail(conn, "OAuth2", "Invalid profile response")

        return conn.put_session(raw_profile=body)

    async def _fetch_email(self, conn: Conn, token: OAuth2Token) -> Conn:
        conn, body = await self._get(conn, token, EMAIL_QUERY)
        if conn.failed:
            return conn

        return conn.put_session(raw_email=extract_email(body))

    async def _get(self, conn: Conn, token: OAuth2Token, path: str) -> tuple[Conn, Any]:
        """GET a LinkedIn resource, mapping failures onto conn errors."""
        try:
            response = await self.client.get(token, path)
        except OAuth2Error as e:
            return self._fail(conn, "OAuth2", e.reason), None

        if response.status_code == 401:
            return self._fail(conn, "token", "unauthorized"), None

        if 200 <= response.status_code < 400:
            return conn, response.body

        return self._fail(conn, "OAuth2", f"HTTP {response.status_code}"), None

    def _fail(self, conn: Conn, kind: str | None, message: str | None) -> Conn:
        logger.warning(f"LinkedIn auth failed: {kind} - {message}")
        return conn.set_errors(AuthError(kind, message))

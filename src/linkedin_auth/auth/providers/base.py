"""Base auth strategy interface."""

from abc import ABC, abstractmethod

from ...models import Auth, Credentials, Extra, Info
from ..config import StrategyConfig
from ..conn import Conn


class Strategy(ABC):
    """
    Abstract base class for auth strategies.

    The host calls `on_begin_auth` for the initial request, `on_callback`
    when the provider redirects back, then reads the accessors (via `auth`)
    if the callback reported no errors, and finally `on_cleanup`.
    """

    config: StrategyConfig

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name (e.g., 'linkedin')."""
        pass

    @abstractmethod
    def on_begin_auth(self, conn: Conn) -> Conn:
        """
        Start the flow.

        Args:
            conn: Incoming request context

        Returns:
            Context carrying the redirect and any cookies to set
        """
        pass

    @abstractmethod
    async def on_callback(self, conn: Conn) -> Conn:
        """
        Handle the provider callback.

        Errors are recorded on the returned context, never raised.
        """
        pass

    @abstractmethod
    def on_cleanup(self, conn: Conn) -> Conn:
        """Drop request-scoped data once the host has read the result."""
        pass

    @abstractmethod
    def uid(self, conn: Conn) -> str | None:
        pass

    @abstractmethod
    def info(self, conn: Conn) -> Info:
        pass

    @abstractmethod
    def credentials(self, conn: Conn) -> Credentials:
        pass

    @abstractmethod
    def extra(self, conn: Conn) -> Extra:
        pass

    def auth(self, conn: Conn) -> Auth:
        """Assemble the accessor outputs into an Auth result."""
        uid = self.uid(conn)
        return Auth(
            provider=self.name,
            strategy=type(self).__name__,
            uid=str(uid) if uid is not None else None,
            info=self.info(conn),
            credentials=self.credentials(conn),
            extra=self.extra(conn),
        )

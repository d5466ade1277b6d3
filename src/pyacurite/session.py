"""Session state management for authenticated API calls."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from pyacurite._api.login import login
from pyacurite._transport import Transport
from pyacurite.config import Credentials
from pyacurite.exceptions import AcuriteAuthenticationError, AcuriteConfigError

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Session(BaseModel):
    """Session state after a successful login.

    Parameters
    ----------
    token_id : str
        Token sent as ``X-One-Vue-Token`` on every data request.
    account_id : str or None
        Account id from the first ``account_users`` entry of the login
        response, if the response carried one.
    obtained_at : datetime
        UTC time of the login.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    token_id: str
    account_id: str | None = None
    obtained_at: datetime = Field(default_factory=_utcnow)

    @property
    def age(self) -> float:
        """Seconds since the session was obtained."""
        return (_utcnow() - self.obtained_at).total_seconds()


class SessionManager:
    """Owns the single live :class:`Session`.

    The session is created lazily by :meth:`ensure_session` and dropped by
    :meth:`invalidate` whenever the API rejects the token. It only lives in
    memory.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        account_id: str | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._transport = transport
        self._configured_account_id = account_id
        self._clock = clock
        self._session: Session | None = None

    @property
    def session(self) -> Session | None:
        return self._session

    async def ensure_session(self, credentials: Credentials) -> Session:
        """Return the live session, logging in first if there is none.

        Raises
        ------
        AcuriteAuthenticationError
            If the login is rejected or cannot reach the API. Any previous
            session is cleared.
        """
        if self._session is not None:
            return self._session

        try:
            response = await login(self._transport, credentials)
        except AcuriteAuthenticationError:
            self._session = None
            raise

        self._session = Session(
            token_id=response.token_id,
            account_id=response.account_id,
            obtained_at=self._clock(),
        )
        _logger.info("Logged in to MyAcuRite (account id from login: %s)", response.account_id or "none")
        return self._session

    def invalidate(self) -> None:
        """Force re-authentication on the next :meth:`ensure_session`."""
        if self._session is not None:
            _logger.debug("Invalidating session obtained at %s", self._session.obtained_at.isoformat())
        self._session = None

    def resolve_account_id(self, session: Session) -> str:
        """Pick the account id: configured override first, then the login response.

        Raises
        ------
        AcuriteConfigError
            If neither source yields a value.
        """
        if self._configured_account_id:
            return str(self._configured_account_id)
        if session.account_id:
            return session.account_id
        raise AcuriteConfigError("Account id not resolvable; set account_id in the configuration")

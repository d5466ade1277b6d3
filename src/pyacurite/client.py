"""High-level async client for the MyAcuRite API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import aiohttp

from pyacurite._api.hubs import fetch_hub_devices, fetch_hubs
from pyacurite._transport import HttpTransport, Transport
from pyacurite.config import AcuriteConfig
from pyacurite.exceptions import AcuriteAuthenticationError, AcuriteError
from pyacurite.models.device import RawDevice
from pyacurite.models.hub import HubSummary
from pyacurite.session import Session, SessionManager

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class AcuriteClient:
    """Async client for the MyAcuRite dashboard API.

    Usage::

        async with AcuriteClient(config) as client:
            for hub in await client.list_hubs():
                devices = await client.get_hub_devices(hub.id)

    The client never retries. An authentication failure drops the session
    so that the next call logs in again; everything else propagates.
    """

    def __init__(
        self,
        config: AcuriteConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._sessions: SessionManager | None = (
            SessionManager(transport, account_id=config.account_id) if transport is not None else None
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AcuriteClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(
            self._config.base_url,
            self._http_session,
            timeout=self._config.request_timeout,
        )
        self._sessions = SessionManager(self._transport, account_id=self._config.account_id)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._external_transport:
            return
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._sessions = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session | None:
        return self._sessions.session if self._sessions is not None else None

    async def ensure_session(self) -> Session:
        """Return the live session, logging in if there is none."""
        return await self._require_sessions().ensure_session(self._config.credentials)

    def invalidate_session(self) -> None:
        """Force session invalidation (next call will re-authenticate)."""
        if self._sessions is not None:
            self._sessions.invalidate()

    async def resolve_account_id(self) -> str:
        session = await self.ensure_session()
        return self._require_sessions().resolve_account_id(session)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise AcuriteError("Client not initialized. Use 'async with AcuriteClient(...) as client:'")
        return self._transport

    def _require_sessions(self) -> SessionManager:
        if self._sessions is None:
            raise AcuriteError("Client not initialized. Use 'async with AcuriteClient(...) as client:'")
        return self._sessions

    async def _call_invalidating_on_auth(self, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fn()
        except AcuriteAuthenticationError:
            self.invalidate_session()
            raise

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_hubs(self) -> list[HubSummary]:
        """List the hubs of the account."""

        async def _fetch() -> list[HubSummary]:
            session = await self.ensure_session()
            account_id = self._require_sessions().resolve_account_id(session)
            return await fetch_hubs(self._require_transport(), session, account_id)

        return await self._call_invalidating_on_auth(_fetch)

    async def get_hub_devices(self, hub_id: int | str) -> list[RawDevice]:
        """Fetch the raw devices attached to *hub_id*."""

        async def _fetch() -> list[RawDevice]:
            session = await self.ensure_session()
            account_id = self._require_sessions().resolve_account_id(session)
            return await fetch_hub_devices(self._require_transport(), session, account_id, hub_id)

        return await self._call_invalidating_on_auth(_fetch)

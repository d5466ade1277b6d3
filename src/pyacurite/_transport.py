"""HTTP transport for the MyAcuRite JSON API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyacurite._constants import AUTH_FAILURE_STATUSES
from pyacurite._redact import redact_for_log
from pyacurite.exceptions import AcuriteApiError, AcuriteAuthenticationError, AcuriteTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Tests pass simple doubles implementing this; production code uses
    :class:`HttpTransport`.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        ...


def _error_detail(text: str) -> str:
    """Pull ``message``/``error`` out of a JSON error body, else the raw text."""
    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        return text[:200]
    if isinstance(body, dict):
        detail = body.get("message") or body.get("error")
        if detail:
            return str(detail)
    return text[:200]


class HttpTransport:
    """aiohttp-backed transport returning decoded JSON bodies.

    Non-2xx answers raise :class:`AcuriteApiError` (or
    :class:`AcuriteAuthenticationError` for 401/403). Connection problems
    and timeouts raise :class:`AcuriteTransportError`.
    """

    def __init__(
        self,
        base_url: str,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        url = f"{self._base_url}{endpoint}"
        _logger.debug("%s %s headers=%s", method, url, redact_for_log(dict(headers or {})))

        try:
            async with self._http.request(
                method,
                url,
                json=dict(json_body) if json_body is not None else None,
                headers=dict(headers or {}),
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                status = resp.status
        except asyncio.TimeoutError as exc:
            raise AcuriteTransportError(f"Request to {endpoint} timed out", endpoint=endpoint) from exc
        except aiohttp.ClientError as exc:
            raise AcuriteTransportError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc

        if not 200 <= status < 300:
            detail = _error_detail(text)
            error_cls = AcuriteAuthenticationError if status in AUTH_FAILURE_STATUSES else AcuriteApiError
            raise error_cls(
                f"HTTP {status} from {endpoint}: {detail}",
                status=status,
                detail=detail,
                endpoint=endpoint,
            )

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise AcuriteApiError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status=status,
                detail="invalid_json",
                endpoint=endpoint,
            ) from exc

"""Hub endpoints.

Endpoints:
  - GET /accounts/{account_id}/dashboard/hubs
  - GET /accounts/{account_id}/dashboard/hubs/{hub_id}
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import ValidationError

from pyacurite._constants import TOKEN_HEADER
from pyacurite._transport import Transport
from pyacurite.exceptions import AcuriteApiError
from pyacurite.models._base import AcuriteBaseModel
from pyacurite.models.device import HubDetailResponse, RawDevice
from pyacurite.models.hub import HubListResponse, HubSummary
from pyacurite.session import Session

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=AcuriteBaseModel)


def _auth_headers(session: Session) -> dict[str, str]:
    return {TOKEN_HEADER: session.token_id}


def _validate(model_cls: type[TModel], body: Any, endpoint: str) -> TModel:
    if not isinstance(body, dict):
        raise AcuriteApiError(
            f"{endpoint} returned {type(body).__name__}, expected an object",
            detail="invalid_payload",
            endpoint=endpoint,
        )
    try:
        return model_cls.model_validate(body)
    except ValidationError as exc:
        raise AcuriteApiError(
            f"{endpoint} payload not understood: {exc.error_count()} validation errors",
            detail="invalid_payload",
            endpoint=endpoint,
        ) from exc


async def fetch_hubs(transport: Transport, session: Session, account_id: str) -> list[HubSummary]:
    """List the hubs registered under *account_id*."""
    endpoint = f"/accounts/{account_id}/dashboard/hubs"
    body = await transport.request("GET", endpoint, headers=_auth_headers(session))
    hubs = _validate(HubListResponse, body, endpoint).account_hubs
    _logger.debug("Account %s has %d hubs", account_id, len(hubs))
    return hubs


async def fetch_hub_devices(
    transport: Transport,
    session: Session,
    account_id: str,
    hub_id: int | str,
) -> list[RawDevice]:
    """Fetch the devices (and their sensors) attached to one hub."""
    endpoint = f"/accounts/{account_id}/dashboard/hubs/{hub_id}"
    body = await transport.request("GET", endpoint, headers=_auth_headers(session))
    return _validate(HubDetailResponse, body, endpoint).devices

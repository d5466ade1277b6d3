"""Login endpoint.

Endpoint:
  - POST /users/login
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyacurite._constants import LOGIN_ENDPOINT
from pyacurite._redact import redact_for_log
from pyacurite._transport import Transport
from pyacurite.config import Credentials
from pyacurite.exceptions import AcuriteApiError, AcuriteAuthenticationError, AcuriteTransportError
from pyacurite.models.login import LoginResponse

_logger = logging.getLogger(__name__)


def build_login_request(credentials: Credentials) -> dict[str, Any]:
    return {
        "remember": True,
        "email": credentials.email,
        "password": credentials.password,
    }


def parse_login_response(body: Any) -> LoginResponse:
    """Validate the login body.

    Raises
    ------
    AcuriteAuthenticationError
        If the body carries no token.
    """
    _logger.debug("Login response parsed=%s", redact_for_log(body))
    if not isinstance(body, dict) or not body.get("token_id"):
        raise AcuriteAuthenticationError(
            "Login response missing token_id",
            detail="missing_token",
            endpoint=LOGIN_ENDPOINT,
        )
    try:
        return LoginResponse.model_validate(body)
    except ValidationError as exc:
        raise AcuriteAuthenticationError(
            f"Login response not understood: {exc.error_count()} validation errors",
            detail="invalid_payload",
            endpoint=LOGIN_ENDPOINT,
        ) from exc


async def login(transport: Transport, credentials: Credentials) -> LoginResponse:
    """Authenticate and return the parsed login response.

    Any failure, including network errors, surfaces as
    :class:`AcuriteAuthenticationError`.
    """
    try:
        body = await transport.request("POST", LOGIN_ENDPOINT, json_body=build_login_request(credentials))
    except AcuriteAuthenticationError:
        raise
    except AcuriteApiError as exc:
        raise AcuriteAuthenticationError(
            f"Login failed: {exc}",
            status=exc.status,
            detail=exc.detail,
            endpoint=LOGIN_ENDPOINT,
        ) from exc
    except AcuriteTransportError as exc:
        raise AcuriteAuthenticationError(
            f"Login failed: {exc}",
            detail="network",
            endpoint=LOGIN_ENDPOINT,
        ) from exc
    return parse_login_response(body)

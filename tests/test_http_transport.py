from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils

from pyacurite._transport import HttpTransport
from pyacurite.exceptions import AcuriteApiError, AcuriteAuthenticationError, AcuriteTransportError


async def _login(request: web.Request) -> web.Response:
    body = await request.json()
    if body.get("password") != "secret":
        return web.json_response({"message": "Invalid email or password"}, status=401)
    return web.json_response({"token_id": "tok-1", "user": {"account_users": [{"account_id": 1}]}})


async def _hubs(request: web.Request) -> web.Response:
    return web.json_response({"account_hubs": [{"id": 7}], "token": request.headers.get("X-One-Vue-Token")})


async def _broken(_request: web.Request) -> web.Response:
    return web.Response(status=502, text="<html>bad gateway</html>")


async def _not_json(_request: web.Request) -> web.Response:
    return web.Response(status=200, text="definitely not json")


async def _slow(_request: web.Request) -> web.Response:
    await asyncio.sleep(1.0)
    return web.json_response({})


@pytest_asyncio.fixture
async def base_url() -> AsyncIterator[str]:
    app = web.Application()
    app.router.add_post("/users/login", _login)
    app.router.add_get("/accounts/1/dashboard/hubs", _hubs)
    app.router.add_get("/broken", _broken)
    app.router.add_get("/not-json", _not_json)
    app.router.add_get("/slow", _slow)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        yield f"http://{server.host}:{server.port}"
    finally:
        await server.close()


@pytest_asyncio.fixture
async def http() -> AsyncIterator[aiohttp.ClientSession]:
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.mark.asyncio
async def test_post_json_and_decode(base_url: str, http: aiohttp.ClientSession) -> None:
    transport = HttpTransport(base_url, http, timeout=5)

    body = await transport.request("POST", "/users/login", json_body={"email": "a", "password": "secret"})

    assert body["token_id"] == "tok-1"


@pytest.mark.asyncio
async def test_headers_are_sent(base_url: str, http: aiohttp.ClientSession) -> None:
    transport = HttpTransport(f"{base_url}/", http, timeout=5)

    body = await transport.request("GET", "/accounts/1/dashboard/hubs", headers={"X-One-Vue-Token": "tok-1"})

    assert body == {"account_hubs": [{"id": 7}], "token": "tok-1"}


@pytest.mark.asyncio
async def test_401_raises_authentication_error_with_detail(base_url: str, http: aiohttp.ClientSession) -> None:
    transport = HttpTransport(base_url, http, timeout=5)

    with pytest.raises(AcuriteAuthenticationError) as exc_info:
        await transport.request("POST", "/users/login", json_body={"password": "wrong"})

    assert exc_info.value.status == 401
    assert exc_info.value.detail == "Invalid email or password"
    assert exc_info.value.endpoint == "/users/login"


@pytest.mark.asyncio
async def test_server_error_raises_api_error(base_url: str, http: aiohttp.ClientSession) -> None:
    transport = HttpTransport(base_url, http, timeout=5)

    with pytest.raises(AcuriteApiError) as exc_info:
        await transport.request("GET", "/broken")

    assert not isinstance(exc_info.value, AcuriteAuthenticationError)
    assert exc_info.value.status == 502
    assert "bad gateway" in exc_info.value.detail


@pytest.mark.asyncio
async def test_invalid_json_raises_api_error(base_url: str, http: aiohttp.ClientSession) -> None:
    transport = HttpTransport(base_url, http, timeout=5)

    with pytest.raises(AcuriteApiError, match="Invalid JSON"):
        await transport.request("GET", "/not-json")


@pytest.mark.asyncio
async def test_timeout_raises_transport_error(base_url: str, http: aiohttp.ClientSession) -> None:
    transport = HttpTransport(base_url, http, timeout=0.1)

    with pytest.raises(AcuriteTransportError, match="timed out"):
        await transport.request("GET", "/slow")


@pytest.mark.asyncio
async def test_connection_refused_raises_transport_error(http: aiohttp.ClientSession) -> None:
    transport = HttpTransport("http://127.0.0.1:1", http, timeout=5)

    with pytest.raises(AcuriteTransportError):
        await transport.request("GET", "/anything")

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from dealerportal._transport import RestTransport
from dealerportal.config import PortalConfig
from dealerportal.exceptions import DirectoryTransportError

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


class _Backend:
    def __init__(self) -> None:
        self.seen: list[dict[str, Any]] = []
        self.handler: Handler | None = None

    async def dispatch(self, request: web.Request) -> web.StreamResponse:
        body = await request.text()
        self.seen.append(
            {
                "method": request.method,
                "path": request.path,
                "query": dict(request.query),
                "headers": request.headers.copy(),
                "body": body,
            }
        )
        assert self.handler is not None
        return await self.handler(request)


@pytest_asyncio.fixture
async def backend() -> AsyncIterator[tuple[_Backend, RestTransport]]:
    state = _Backend()
    app = web.Application()
    app.router.add_route("*", "/rest/v1/{table}", state.dispatch)
    server = test_utils.TestServer(app)
    await server.start_server()
    config = PortalConfig(base_url=str(server.make_url("/")), api_key="anon-key", request_timeout=5.0)
    async with aiohttp.ClientSession() as http:
        yield state, RestTransport(config, http)
    await server.close()


@pytest.mark.asyncio
async def test_single_object_request_sends_auth_and_accept(backend: tuple[_Backend, RestTransport]) -> None:
    state, transport = backend

    async def _handler(_request: web.Request) -> web.StreamResponse:
        return web.json_response({"id": 42, "name": "Acme Motors"})

    state.handler = _handler

    response = await transport.request(
        "GET",
        "/dealers",
        params={"select": "id,name", "id": "eq.42"},
        single=True,
    )

    assert response.ok
    assert response.body == {"id": 42, "name": "Acme Motors"}
    seen = state.seen[0]
    assert seen["path"] == "/rest/v1/dealers"
    assert seen["query"] == {"select": "id,name", "id": "eq.42"}
    assert seen["headers"]["apikey"] == "anon-key"
    assert seen["headers"]["Authorization"] == "Bearer anon-key"
    assert seen["headers"]["Accept"] == "application/vnd.pgrst.object+json"


@pytest.mark.asyncio
async def test_patch_sends_json_and_accepts_empty_reply(backend: tuple[_Backend, RestTransport]) -> None:
    state, transport = backend

    async def _handler(_request: web.Request) -> web.StreamResponse:
        return web.Response(status=204)

    state.handler = _handler

    response = await transport.request("PATCH", "/cars", params={"id": "eq.1"}, json_body={"is_sold": True})

    assert response.status == 204
    assert response.body is None
    assert state.seen[0]["body"] == '{"is_sold":true}'
    assert state.seen[0]["headers"]["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_error_reply_is_returned_not_raised(backend: tuple[_Backend, RestTransport]) -> None:
    state, transport = backend

    async def _handler(_request: web.Request) -> web.StreamResponse:
        return web.json_response({"code": "PGRST116", "message": "no rows"}, status=406)

    state.handler = _handler

    response = await transport.request("GET", "/dealers", params={"id": "eq.0"}, single=True)

    assert not response.ok
    assert response.body["code"] == "PGRST116"


@pytest.mark.asyncio
async def test_invalid_json_raises_transport_error(backend: tuple[_Backend, RestTransport]) -> None:
    state, transport = backend

    async def _handler(_request: web.Request) -> web.StreamResponse:
        return web.Response(status=502, text="<html>bad gateway</html>")

    state.handler = _handler

    with pytest.raises(DirectoryTransportError) as exc_info:
        await transport.request("GET", "/cars")

    assert exc_info.value.status_code == 502
    assert exc_info.value.endpoint == "/cars"


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error() -> None:
    config = PortalConfig(base_url="http://127.0.0.1:9", api_key="anon-key", request_timeout=2.0)
    async with aiohttp.ClientSession() as http:
        with pytest.raises(DirectoryTransportError, match="failed"):
            await RestTransport(config, http).request("GET", "/cars")

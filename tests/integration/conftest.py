"""Fixtures for integration tests: a local stub of the news API."""

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer


@pytest.fixture
def stub_routes():
    """Path -> (status, body) served by the stub; tests fill it in."""
    return {}


@pytest.fixture
async def stub_server(stub_routes):
    """Local HTTP server answering from ``stub_routes``.

    Every request is recorded on ``server.requests`` so tests can
    assert on the exact query string that was sent.
    """
    requests = []

    async def handler(request: web.Request) -> web.StreamResponse:
        requests.append(request)
        status, body = stub_routes.get(request.path, (404, {"detail": "Not found."}))
        if isinstance(body, bytes):
            return web.Response(
                status=status, body=body, content_type="application/json"
            )
        if isinstance(body, str):
            return web.Response(status=status, text=body, content_type="text/html")
        return web.json_response(body, status=status)

    app = web.Application()
    app.router.add_get("/{tail:.*}", handler)

    server = TestServer(app)
    server.requests = requests
    await server.start_server()
    yield server
    await server.close()

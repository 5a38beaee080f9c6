"""Tests for the transport library."""

import asyncio
from collections.abc import AsyncGenerator, AsyncIterator

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from artifact_resolver.auth import Auth
from artifact_resolver.exceptions import TransportError
from artifact_resolver.transport import (
    ByteStream,
    FileTransport,
    HttpTransport,
    SchemeTransport,
)

from .conftest import HELM_REPO_DIR

CHUNK = b"x" * 1024


class StreamingServer:
    """Serves a payload in two parts, pausing until released."""

    def __init__(self) -> None:
        self.release = asyncio.Event()
        self.second_part_sent = False

    async def handle_stream(self, request: web.Request) -> web.StreamResponse:
        response = web.StreamResponse()
        await response.prepare(request)
        await response.write(CHUNK)
        await asyncio.wait_for(self.release.wait(), timeout=5)
        await response.write(CHUNK)
        self.second_part_sent = True
        await response.write_eof()
        return response

    async def handle_auth(self, request: web.Request) -> web.Response:
        if request.headers.get("Authorization") != "Basic dXNlcjpwYXNz":
            raise web.HTTPUnauthorized()
        return web.Response(body=b"secret contents")

    async def handle_missing(self, request: web.Request) -> web.Response:
        raise web.HTTPNotFound()


@pytest.fixture(name="server_state")
def server_state_fixture() -> StreamingServer:
    return StreamingServer()


@pytest.fixture(name="server")
async def server_fixture(
    server_state: StreamingServer,
) -> AsyncGenerator[TestServer, None]:
    """Run a local http server for the tests."""
    app = web.Application()
    app.add_routes(
        [
            web.get("/stream", server_state.handle_stream),
            web.get("/auth", server_state.handle_auth),
            web.get("/missing", server_state.handle_missing),
        ]
    )
    server = TestServer(app)
    await server.start_server()
    yield server
    server_state.release.set()
    await server.close()


@pytest.fixture(name="http_transport")
async def http_transport_fixture() -> AsyncGenerator[HttpTransport, None]:
    transport = HttpTransport(timeout=5.0)
    yield transport
    await transport.close()


async def test_http_stream_is_incremental(
    server: TestServer, server_state: StreamingServer, http_transport: HttpTransport
) -> None:
    """Test the first chunk is readable before the server sends the rest."""
    stream = await http_transport.open(str(server.make_url("/stream")))
    async with stream:
        chunks = aiter(stream)
        first = b""
        while len(first) < len(CHUNK):
            first += await anext(chunks)
        assert first == CHUNK
        assert not server_state.second_part_sent

        server_state.release.set()
        rest = b"".join([chunk async for chunk in chunks])
        assert rest == CHUNK
    assert stream.closed


async def test_http_basic_auth(server: TestServer, http_transport: HttpTransport) -> None:
    """Test credentials are sent with the request."""
    url = str(server.make_url("/auth"))
    async with await http_transport.open(url, Auth("user", "pass")) as stream:
        assert await stream.read() == b"secret contents"

    with pytest.raises(TransportError, match="status 401"):
        await http_transport.open(url)


async def test_http_error_status(
    server: TestServer, http_transport: HttpTransport
) -> None:
    """Test an error status is reported as a transport failure."""
    with pytest.raises(TransportError, match="status 404"):
        await http_transport.open(str(server.make_url("/missing")))


async def test_http_connection_refused(http_transport: HttpTransport) -> None:
    """Test a connection failure is reported as a transport failure."""
    with pytest.raises(TransportError, match="Failed to fetch"):
        await http_transport.open("http://127.0.0.1:1/index.yaml")


async def test_file_transport() -> None:
    """Test reading a local file in chunks."""
    transport = FileTransport(chunk_size=16)
    path = HELM_REPO_DIR / "index.yaml"
    stream = await transport.open(path.as_uri())
    async with stream:
        chunks = [chunk async for chunk in stream]
    assert len(chunks) > 1
    assert all(len(chunk) <= 16 for chunk in chunks)
    assert b"".join(chunks) == path.read_bytes()
    assert stream.closed


async def test_file_transport_missing() -> None:
    """Test opening a file that does not exist."""
    transport = FileTransport()
    with pytest.raises(TransportError, match="Failed to open"):
        await transport.open((HELM_REPO_DIR / "missing.yaml").as_uri())


async def test_scheme_transport(transport: SchemeTransport) -> None:
    """Test dispatching on the scheme of the location."""
    path = HELM_REPO_DIR / "podinfo-6.5.0.tgz"
    async with await transport.open(path.as_uri()) as stream:
        assert await stream.read() == b"podinfo 6.5.0 chart archive\n"

    with pytest.raises(TransportError, match="Unsupported scheme 'ftp'"):
        await transport.open("ftp://example.com/chart.tgz")


async def test_byte_stream_release() -> None:
    """Test a stream releases its resources once, even if partially read."""
    released = []

    async def chunks() -> AsyncIterator[bytes]:
        for i in range(3):
            yield bytes([i])

    async def release() -> None:
        released.append(True)

    stream = ByteStream(chunks(), release, location="memory")
    async with stream:
        async for chunk in stream:
            assert chunk == b"\x00"
            break
    await stream.close()
    assert released == [True]

    with pytest.raises(TransportError, match="already closed"):
        await stream.read()

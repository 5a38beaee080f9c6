"""Library for fetching bytes from a remote location as an incremental stream.

A Transport opens a location and returns a ByteStream. The stream is owned
by the caller, which must close it on every exit path. The easiest way to
do that is to use the stream as an async context manager:

```python
from artifact_resolver.transport import SchemeTransport

transport = SchemeTransport()
async with await transport.open("https://charts.example.com/index.yaml") as stream:
    async for chunk in stream:
        ...
await transport.close()
```

Chunks are produced as the payload arrives so callers never need the whole
artifact in memory.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, AsyncIterator, Awaitable, Callable
import logging
from types import TracebackType
from urllib.parse import unquote, urlparse

import aiofiles
import aiohttp

from .auth import Auth
from .exceptions import TransportError

__all__ = [
    "ByteStream",
    "Transport",
    "HttpTransport",
    "FileTransport",
    "SchemeTransport",
]

_LOGGER = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
_TIMEOUT = 60.0


class ByteStream:
    """An incremental stream of bytes read from a location.

    The stream wraps an async iterator of chunks and an optional callback
    that releases the underlying connection or file handle.
    """

    def __init__(
        self,
        chunks: AsyncIterator[bytes],
        release: Callable[[], Awaitable[None]] | None = None,
        location: str = "",
    ) -> None:
        """Initialize ByteStream."""
        self._chunks = chunks
        self._release = release
        self._closed = False
        self.location = location

    @property
    def closed(self) -> bool:
        """Return True once the stream has been released."""
        return self._closed

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[bytes]:
        if self._closed:
            raise TransportError(f"Stream for {self.location} is already closed")
        async for chunk in self._chunks:
            yield chunk

    async def read(self) -> bytes:
        """Read the remainder of the stream into memory.

        This is meant for small documents such as repository indexes.
        """
        return b"".join([chunk async for chunk in self])

    async def close(self) -> None:
        """Release the resources held by the stream."""
        if self._closed:
            return
        self._closed = True
        if isinstance(self._chunks, AsyncGenerator):
            await self._chunks.aclose()
        if self._release is not None:
            await self._release()

    async def __aenter__(self) -> "ByteStream":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()


class Transport(ABC):
    """The capability to open a remote location as a byte stream."""

    @abstractmethod
    async def open(self, url: str, auth: Auth | None = None) -> ByteStream:
        """Open the location, raising TransportError on failure."""

    async def close(self) -> None:
        """Release any resources held by the transport."""


class HttpTransport(Transport):
    """A Transport for http and https locations using aiohttp."""

    def __init__(
        self, timeout: float = _TIMEOUT, chunk_size: int = CHUNK_SIZE
    ) -> None:
        """Initialize HttpTransport.

        The timeout applies to connecting and to each socket read rather
        than to the whole transfer, so that large artifacts may take longer
        as long as bytes keep arriving.
        """
        self._timeout = aiohttp.ClientTimeout(
            total=None, sock_connect=timeout, sock_read=timeout
        )
        self._chunk_size = chunk_size
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def open(self, url: str, auth: Auth | None = None) -> ByteStream:
        """Send a GET request and stream the response body."""
        _LOGGER.debug("Opening %s", url)
        basic_auth = (
            aiohttp.BasicAuth(auth.username, auth.password) if auth else None
        )
        try:
            response = await self._get_session().get(url, auth=basic_auth)
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise TransportError(f"Failed to fetch {url}: {err}") from err
        if response.status >= 400:
            response.release()
            raise TransportError(
                f"Failed to fetch {url}: status {response.status} {response.reason}"
            )

        async def chunks() -> AsyncIterator[bytes]:
            try:
                async for chunk in response.content.iter_chunked(self._chunk_size):
                    yield chunk
            except (aiohttp.ClientError, asyncio.TimeoutError) as err:
                raise TransportError(f"Failed reading {url}: {err}") from err

        async def release() -> None:
            response.release()

        return ByteStream(chunks(), release, location=url)

    async def close(self) -> None:
        """Close the underlying client session."""
        if self._session is not None:
            await self._session.close()
            self._session = None


class FileTransport(Transport):
    """A Transport for file:// locations using aiofiles."""

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        """Initialize FileTransport."""
        self._chunk_size = chunk_size

    async def open(self, url: str, auth: Auth | None = None) -> ByteStream:
        """Open the local file and stream its contents."""
        path = unquote(urlparse(url).path)
        _LOGGER.debug("Opening local file %s", path)
        try:
            handle = await aiofiles.open(path, mode="rb")
        except OSError as err:
            raise TransportError(f"Failed to open {url}: {err}") from err

        async def chunks() -> AsyncIterator[bytes]:
            try:
                while chunk := await handle.read(self._chunk_size):
                    yield chunk
            except OSError as err:
                raise TransportError(f"Failed reading {url}: {err}") from err

        return ByteStream(chunks(), handle.close, location=url)


class SchemeTransport(Transport):
    """A Transport that dispatches on the scheme of the location."""

    def __init__(self, timeout: float = _TIMEOUT) -> None:
        """Initialize SchemeTransport."""
        http = HttpTransport(timeout=timeout)
        self._transports: dict[str, Transport] = {
            "http": http,
            "https": http,
            "file": FileTransport(),
        }

    async def open(self, url: str, auth: Auth | None = None) -> ByteStream:
        """Open the location with the transport registered for its scheme."""
        scheme = urlparse(url).scheme
        if not (transport := self._transports.get(scheme)):
            raise TransportError(f"Unsupported scheme '{scheme}' for {url}")
        return await transport.open(url, auth)

    async def close(self) -> None:
        """Close all the transports."""
        for transport in set(self._transports.values()):
            await transport.close()

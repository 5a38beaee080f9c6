"""HTTP endpoints for listing, resolving and fetching artifacts.

Routes:
  - GET /artifacts/credentials
  - PUT /artifacts/fetch
  - GET /artifacts/{type}/account/{account}/names
  - GET /artifacts/{type}/account/{account}/names/{artifact}/versions

The fetch endpoint uses PUT because the artifact reference is sent as a
request body. Errors from the core are mapped to status codes by a
middleware so that a disabled feature (501) can be told apart from an
unknown account or artifact (404).
"""

from collections.abc import Awaitable, Callable
import json
import logging

from aiohttp import web

from .downloader import ArtifactDownloader, download
from .exceptions import (
    ArtifactException,
    ArtifactNotFoundError,
    CredentialNotFoundError,
    IndexParseError,
    IndexUnavailableError,
    InputException,
    NotConfiguredError,
    ResolutionNotFoundError,
    TransportError,
    UnsupportedTypeError,
)
from .reference import ArtifactReference
from .repository import CredentialsRepository, list_credentials
from .resolution import ResolutionService

__all__ = [
    "ArtifactController",
    "create_app",
]

_LOGGER = logging.getLogger(__name__)

_STATUS: list[tuple[type[ArtifactException], type[web.HTTPException]]] = [
    (NotConfiguredError, web.HTTPNotImplemented),
    (InputException, web.HTTPBadRequest),
    (UnsupportedTypeError, web.HTTPNotFound),
    (ResolutionNotFoundError, web.HTTPNotFound),
    (CredentialNotFoundError, web.HTTPNotFound),
    (ArtifactNotFoundError, web.HTTPNotFound),
    (IndexUnavailableError, web.HTTPBadGateway),
    (IndexParseError, web.HTTPBadGateway),
    (TransportError, web.HTTPBadGateway),
]

_STREAMING = "artifact_streaming"

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _error_response(err: ArtifactException) -> web.HTTPException:
    for exc_type, http_exc in _STATUS:
        if isinstance(err, exc_type):
            return http_exc(
                text=json.dumps({"error": str(err)}), content_type="application/json"
            )
    return web.HTTPInternalServerError(
        text=json.dumps({"error": str(err)}), content_type="application/json"
    )


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Translate library errors into http errors."""
    try:
        return await handler(request)
    except ArtifactException as err:
        if request.get(_STREAMING):
            # Headers are already sent so the connection can only be aborted
            _LOGGER.error(
                "%s %s failed while streaming: %s", request.method, request.path, err
            )
            raise
        _LOGGER.info("%s %s failed: %s", request.method, request.path, err)
        raise _error_response(err) from err


class ArtifactController:
    """Request handlers backed by the artifact core.

    Both the repository and downloader are None when artifacts are disabled.
    """

    def __init__(
        self,
        repository: CredentialsRepository | None,
        downloader: ArtifactDownloader | None,
        resolution: ResolutionService | None = None,
    ) -> None:
        """Initialize ArtifactController."""
        self._repository = repository
        self._downloader = downloader
        self._resolution = resolution or ResolutionService(repository)

    def routes(self) -> list[web.RouteDef]:
        """Return the route table for the controller."""
        return [
            web.get("/artifacts/credentials", self.list_credentials),
            web.put("/artifacts/fetch", self.fetch),
            web.get("/artifacts/{type}/account/{account}/names", self.names),
            web.get(
                "/artifacts/{type}/account/{account}/names/{artifact}/versions",
                self.versions,
            ),
        ]

    async def list_credentials(self, request: web.Request) -> web.Response:
        """List the public metadata of the configured credentials."""
        return web.json_response(
            [creds.public_dict() for creds in list_credentials(self._repository)]
        )

    async def fetch(self, request: web.Request) -> web.StreamResponse:
        """Stream the contents of the artifact in the request body."""
        try:
            body = await request.json()
        except ValueError as err:
            # JSONDecodeError and UnicodeDecodeError
            raise InputException(f"Invalid request body: {err}") from err
        reference = ArtifactReference.parse_doc(body)

        stream = await download(self._downloader, reference)
        async with stream:
            response = web.StreamResponse(
                headers={"Content-Type": "application/octet-stream"}
            )
            await response.prepare(request)
            request[_STREAMING] = True
            async for chunk in stream:
                await response.write(chunk)
            await response.write_eof()
        return response

    async def names(self, request: web.Request) -> web.Response:
        """List the artifact names published by an account."""
        names = await self._resolution.list_names(
            request.match_info["type"], request.match_info["account"]
        )
        return web.json_response(names)

    async def versions(self, request: web.Request) -> web.Response:
        """List the versions of an artifact published by an account."""
        versions = await self._resolution.list_versions(
            request.match_info["type"],
            request.match_info["account"],
            request.match_info["artifact"],
        )
        return web.json_response(versions)


def create_app(controller: ArtifactController) -> web.Application:
    """Create the web application serving the controller."""
    app = web.Application(middlewares=[error_middleware])
    app.add_routes(controller.routes())
    return app

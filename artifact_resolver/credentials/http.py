"""Credentials for artifacts addressed directly by url."""

import logging

from artifact_resolver.auth import Auth
from artifact_resolver.exceptions import InputException
from artifact_resolver.reference import ArtifactReference
from artifact_resolver.transport import ByteStream, Transport

from .base import ArtifactCredentials

_LOGGER = logging.getLogger(__name__)

HTTP_FILE_TYPE = "http/file"


class HttpArtifactCredentials(ArtifactCredentials):
    """Fetches the file at the location of the reference."""

    types = (HTTP_FILE_TYPE,)

    def __init__(
        self, name: str, transport: Transport, auth: Auth | None = None
    ) -> None:
        """Initialize HttpArtifactCredentials."""
        super().__init__(name)
        self._transport = transport
        self._auth = auth

    async def fetch_bytes(self, reference: ArtifactReference) -> ByteStream:
        if not reference.location:
            raise InputException(f"Artifact reference {reference} is missing a location")
        _LOGGER.info("Fetching %s with account %s", reference.location, self.name)
        return await self._transport.open(reference.location, self._auth)

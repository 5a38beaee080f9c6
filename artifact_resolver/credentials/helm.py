"""Credentials for Helm chart repositories."""

import logging
from urllib.parse import urljoin

from artifact_resolver.auth import Auth
from artifact_resolver.exceptions import (
    IndexUnavailableError,
    InputException,
    TransportError,
)
from artifact_resolver.index import HelmIndexParser
from artifact_resolver.reference import ArtifactReference
from artifact_resolver.transport import ByteStream, Transport

from .base import IndexedArtifactCredentials

_LOGGER = logging.getLogger(__name__)

HELM_CHART_TYPE = "helm/chart"
INDEX_FILE = "index.yaml"


class HelmArtifactCredentials(IndexedArtifactCredentials):
    """Fetches charts and the chart index from a Helm repository."""

    types = (HELM_CHART_TYPE,)

    def __init__(
        self,
        name: str,
        repository: str,
        transport: Transport,
        auth: Auth | None = None,
        parser: HelmIndexParser | None = None,
    ) -> None:
        """Initialize HelmArtifactCredentials."""
        super().__init__(name)
        if not repository:
            raise InputException(f"Helm account {name} is missing a repository url")
        self._repository = repository.rstrip("/") + "/"
        self._transport = transport
        self._auth = auth
        self._parser = parser or HelmIndexParser()

    @property
    def repository(self) -> str:
        """Return the base url of the repository."""
        return self._repository

    @property
    def index_url(self) -> str:
        """Return the url of the repository index."""
        return urljoin(self._repository, INDEX_FILE)

    async def download_index(self) -> ByteStream:
        """Open a stream over the repository index.yaml."""
        _LOGGER.info("Downloading index for helm account %s", self.name)
        try:
            return await self._transport.open(self.index_url, self._auth)
        except TransportError as err:
            raise IndexUnavailableError(
                f"Failed to download index for helm account {self.name}: {err}"
            ) from err

    async def _read_index(self) -> bytes:
        stream = await self.download_index()
        async with stream:
            try:
                return await stream.read()
            except TransportError as err:
                raise IndexUnavailableError(
                    f"Failed to read index for helm account {self.name}: {err}"
                ) from err

    def find_names(self, document: bytes) -> list[str]:
        return self._parser.find_names(document)

    def find_versions(self, document: bytes, name: str) -> list[str]:
        return self._parser.find_versions(document, name)

    async def fetch_bytes(self, reference: ArtifactReference) -> ByteStream:
        """Resolve the chart through the index and stream the chart archive."""
        if not reference.name:
            raise InputException(f"Helm chart reference {reference} is missing a name")
        document = await self._read_index()
        urls = self._parser.find_urls(document, reference.name, reference.version)
        url = urljoin(self._repository, urls[0])
        _LOGGER.info("Fetching chart %s from %s", reference, url)
        return await self._transport.open(url, self._auth)

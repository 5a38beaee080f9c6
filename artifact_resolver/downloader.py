"""Downloads the contents of any referenced artifact."""

import logging

from .exceptions import NotConfiguredError
from .reference import ArtifactReference
from .repository import CredentialsRepository
from .transport import ByteStream

__all__ = [
    "ArtifactDownloader",
    "download",
]

_LOGGER = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = (
    "Artifacts have not been enabled. Enable them with 'enabled: true' "
    "in the artifacts configuration"
)


class ArtifactDownloader:
    """Resolves a reference to its credentials and streams its contents."""

    def __init__(self, repository: CredentialsRepository) -> None:
        """Initialize ArtifactDownloader."""
        self._repository = repository

    async def download(self, reference: ArtifactReference) -> ByteStream:
        """Open a stream over the referenced artifact.

        The caller owns the returned stream and must close it.
        """
        credentials = self._repository.find(reference.type, reference.account)
        _LOGGER.info("Downloading %s", reference)
        return await credentials.fetch_bytes(reference)


async def download(
    downloader: ArtifactDownloader | None, reference: ArtifactReference
) -> ByteStream:
    """Download the artifact, failing if downloading has not been enabled."""
    if downloader is None:
        raise NotConfiguredError(NOT_CONFIGURED_MESSAGE)
    return await downloader.download(reference)

"""Base classes for artifact credentials."""

from abc import ABC, abstractmethod
from typing import Any

from artifact_resolver.reference import ArtifactReference
from artifact_resolver.transport import ByteStream


class ArtifactCredentials(ABC):
    """A configured, named source for one or more artifact types.

    Credentials are created once from configuration and are read-only
    afterwards, so a single instance may serve concurrent requests.
    """

    types: tuple[str, ...] = ()
    """The artifact types handled by these credentials."""

    def __init__(self, name: str) -> None:
        """Initialize ArtifactCredentials."""
        self._name = name

    @property
    def name(self) -> str:
        """Return the name of the account."""
        return self._name

    def handles_type(self, artifact_type: str) -> bool:
        """Return True if these credentials can fetch the artifact type."""
        return artifact_type in self.types

    @abstractmethod
    async def fetch_bytes(self, reference: ArtifactReference) -> ByteStream:
        """Open a stream over the contents of the referenced artifact.

        The caller owns the returned stream and must close it.
        """

    def supports_index(self) -> bool:
        """Return True if the source publishes an index of names and versions."""
        return self.as_index_source() is not None

    def as_index_source(self) -> "IndexedArtifactCredentials | None":
        """Return these credentials as an index source if supported."""
        return None

    def public_dict(self) -> dict[str, Any]:
        """Return the metadata that is safe to expose, without secrets."""
        return {
            "name": self.name,
            "types": list(self.types),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class IndexedArtifactCredentials(ArtifactCredentials):
    """Credentials for a source that publishes an index document."""

    @abstractmethod
    async def download_index(self) -> ByteStream:
        """Open a stream over the index document of the source.

        Raises IndexUnavailableError if the index cannot be fetched.
        """

    @abstractmethod
    def find_names(self, document: bytes) -> list[str]:
        """Return the artifact names listed in the index document."""

    @abstractmethod
    def find_versions(self, document: bytes, name: str) -> list[str]:
        """Return the versions of the named artifact listed in the index document."""

    def as_index_source(self) -> "IndexedArtifactCredentials | None":
        return self

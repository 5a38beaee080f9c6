"""Registry of the configured artifact credentials."""

from collections.abc import Iterable
import logging

from .credentials import ArtifactCredentials
from .exceptions import CredentialNotFoundError, InputException

__all__ = [
    "CredentialsRepository",
    "list_credentials",
]

_LOGGER = logging.getLogger(__name__)


class CredentialsRepository:
    """Holds all configured credentials, looked up by type and name.

    The repository is populated once at startup and only read afterwards.
    """

    def __init__(self, credentials: Iterable[ArtifactCredentials] = ()) -> None:
        """Initialize CredentialsRepository."""
        self._credentials: list[ArtifactCredentials] = []
        for creds in credentials:
            self._add(creds)

    def _add(self, credentials: ArtifactCredentials) -> None:
        for artifact_type in credentials.types:
            if any(
                existing.name == credentials.name
                and existing.handles_type(artifact_type)
                for existing in self._credentials
            ):
                raise InputException(
                    f"Duplicate credentials '{credentials.name}' for type '{artifact_type}'"
                )
        _LOGGER.debug("Registering credentials %s", credentials)
        self._credentials.append(credentials)

    def list_all(self) -> list[ArtifactCredentials]:
        """Return all credentials in registration order."""
        return list(self._credentials)

    def find(self, artifact_type: str, name: str) -> ArtifactCredentials:
        """Return the credentials with the given name that handle the type."""
        for credentials in self._credentials:
            if credentials.handles_type(artifact_type) and credentials.name == name:
                return credentials
        raise CredentialNotFoundError(artifact_type, name)

    def __len__(self) -> int:
        return len(self._credentials)


def list_credentials(
    repository: CredentialsRepository | None,
) -> list[ArtifactCredentials]:
    """Return all credentials, or an empty list when artifacts are disabled."""
    if repository is None:
        return []
    return repository.list_all()

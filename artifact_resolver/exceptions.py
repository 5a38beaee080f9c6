"""Exceptions related to artifact-resolver."""

__all__ = [
    "ArtifactException",
    "InputException",
    "NotConfiguredError",
    "CredentialNotFoundError",
    "UnsupportedTypeError",
    "TransportError",
    "IndexUnavailableError",
    "IndexParseError",
    "ArtifactNotFoundError",
    "ResolutionNotFoundError",
]


class ArtifactException(Exception):
    """Generic base exception used for this library."""


class InputException(ArtifactException):
    """Raised when configuration or request values are not formatted as expected."""


class NotConfiguredError(ArtifactException):
    """Raised when artifact support has not been enabled for the process."""


class CredentialNotFoundError(ArtifactException):
    """Raised when no credentials match the requested type and name."""

    def __init__(self, artifact_type: str, name: str) -> None:
        super().__init__(
            f"No credentials with name '{name}' could be found for type '{artifact_type}'"
        )
        self.artifact_type = artifact_type
        self.name = name


class UnsupportedTypeError(ArtifactException):
    """Raised when an artifact type has no registered handler."""

    def __init__(self, artifact_type: str) -> None:
        super().__init__(f"Could not find artifact of type {artifact_type}")
        self.artifact_type = artifact_type


class TransportError(ArtifactException):
    """Raised when fetching bytes from a remote location fails."""


class IndexUnavailableError(ArtifactException):
    """Raised when a repository index could not be downloaded."""


class IndexParseError(ArtifactException):
    """Raised when a repository index document cannot be decoded."""


class ArtifactNotFoundError(ArtifactException):
    """Raised when an artifact or version is not listed by its source."""


class ResolutionNotFoundError(ArtifactException):
    """Raised when names or versions could not be resolved for an account."""

    def __init__(self, account: str, what: str = "names") -> None:
        super().__init__(f"Failed to download artifact {what} for {account} account")
        self.account = account

"""Resolution of artifact names and versions from repository indexes.

The service answers "what names exist" and "what versions exist for a name"
for sources that publish an index, without downloading any artifact. A
query names the kind of source (e.g. `helm`) which is mapped to the type of
credentials that can answer it:

```python
service = ResolutionService(repository)
names = await service.list_names("helm", "stable")
versions = await service.list_versions("helm", "stable", "podinfo")
```

Failures to find the account or to read its index are reported as a single
ResolutionNotFoundError naming the account.
"""

from collections.abc import Callable
import logging

from .credentials import HELM_CHART_TYPE, IndexedArtifactCredentials
from .downloader import NOT_CONFIGURED_MESSAGE
from .exceptions import (
    CredentialNotFoundError,
    IndexParseError,
    IndexUnavailableError,
    NotConfiguredError,
    ResolutionNotFoundError,
    TransportError,
    UnsupportedTypeError,
)
from .repository import CredentialsRepository

__all__ = [
    "ResolutionService",
]

_LOGGER = logging.getLogger(__name__)


DEFAULT_INDEX_TYPES: dict[str, str] = {
    "helm": HELM_CHART_TYPE,
}


class ResolutionService:
    """Answers name and version queries for index based sources."""

    def __init__(
        self,
        repository: CredentialsRepository | None,
        index_types: dict[str, str] | None = None,
    ) -> None:
        """Initialize ResolutionService.

        Args:
            repository: The configured credentials, or None when disabled
            index_types: Map of query type to the artifact type of credentials
        """
        self._repository = repository
        self._index_types = dict(
            index_types if index_types is not None else DEFAULT_INDEX_TYPES
        )

    def register(self, query_type: str, artifact_type: str) -> None:
        """Register credentials of artifact_type to answer queries of query_type."""
        self._index_types[query_type] = artifact_type

    @property
    def supported_types(self) -> list[str]:
        """Return the query types that may be resolved."""
        return list(self._index_types)

    async def list_names(self, query_type: str, account: str) -> list[str]:
        """Return the artifact names published by the account."""
        return await self._resolve(
            query_type, account, "names", lambda creds, doc: creds.find_names(doc)
        )

    async def list_versions(
        self, query_type: str, account: str, artifact_name: str
    ) -> list[str]:
        """Return the versions of the named artifact published by the account."""
        return await self._resolve(
            query_type,
            account,
            "versions",
            lambda creds, doc: creds.find_versions(doc, artifact_name),
        )

    def _find_index_source(
        self, query_type: str, account: str
    ) -> IndexedArtifactCredentials:
        if not (artifact_type := self._index_types.get(query_type)):
            raise UnsupportedTypeError(query_type)
        if self._repository is None:
            raise NotConfiguredError(NOT_CONFIGURED_MESSAGE)
        credentials = self._repository.find(artifact_type, account)
        if (index_source := credentials.as_index_source()) is None:
            raise UnsupportedTypeError(query_type)
        return index_source

    async def _resolve(
        self,
        query_type: str,
        account: str,
        what: str,
        query: Callable[[IndexedArtifactCredentials, bytes], list[str]],
    ) -> list[str]:
        try:
            index_source = self._find_index_source(query_type, account)
            stream = await index_source.download_index()
            async with stream:
                document = await stream.read()
            return query(index_source, document)
        except (
            CredentialNotFoundError,
            IndexUnavailableError,
            IndexParseError,
            TransportError,
        ) as err:
            _LOGGER.info("Unable to resolve %s for %s: %s", what, account, err)
            raise ResolutionNotFoundError(account, what) from err

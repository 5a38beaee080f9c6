"""Representation of a reference to a remote artifact.

An ArtifactReference is the request body of a fetch. It is decoded from the
JSON document sent by a caller, for example:

```json
{
  "type": "helm/chart",
  "artifactAccount": "stable",
  "name": "podinfo",
  "version": "6.5.0"
}
```
"""

from dataclasses import dataclass, field
from typing import Any

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig
from mashumaro.exceptions import MissingField, InvalidFieldValue

from .exceptions import InputException

__all__ = [
    "ArtifactReference",
]


@dataclass(frozen=True, kw_only=True)
class ArtifactReference(DataClassDictMixin):
    """A typed identifier for a remote artifact."""

    type: str
    """The kind of source holding the artifact (e.g. helm/chart)."""

    account: str = field(metadata=field_options(alias="artifactAccount"))
    """The name of the credentials used to fetch the artifact."""

    name: str | None = None
    """The name of the artifact within the source (e.g. the chart name)."""

    location: str | None = field(
        default=None, metadata=field_options(alias="reference")
    )
    """The URL or path of the artifact, for sources addressed directly."""

    version: str | None = None
    """The version of the artifact, or None for the latest."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "ArtifactReference":
        """Parse an ArtifactReference from a request document."""
        if not isinstance(doc, dict):
            raise InputException(f"Invalid artifact reference: {doc}")
        try:
            return cls.from_dict(doc)
        except (MissingField, InvalidFieldValue) as err:
            raise InputException(f"Invalid artifact reference {doc}: {err}") from err

    def __str__(self) -> str:
        """Return a short identifier for logging."""
        target = self.name or self.location or ""
        if self.version:
            target = f"{target}@{self.version}"
        return f"{self.type}/{self.account}/{target}"

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True
        allow_deserialization_not_by_alias = True

"""Library for reading the index of a Helm chart repository.

A chart repository publishes an `index.yaml` that lists every chart and,
per chart, every packaged version:

```yaml
apiVersion: v1
entries:
  podinfo:
    - name: podinfo
      version: 6.5.1
      urls:
        - podinfo-6.5.1.tgz
    - name: podinfo
      version: 6.5.0
      urls:
        - podinfo-6.5.0.tgz
```

The parser is stateless and works on the raw bytes of the document. Names
and versions are returned in the order the document lists them.
"""

import logging
from typing import Any

import yaml

from .exceptions import ArtifactNotFoundError, IndexParseError

__all__ = [
    "HelmIndexParser",
]

_LOGGER = logging.getLogger(__name__)

ENTRIES = "entries"


def _load_entries(document: bytes | str) -> dict[str, Any]:
    """Decode the document and return the chart entries.

    Scalars are kept as the strings written in the document so that versions
    such as 1.10 or chart names such as on are not reinterpreted.
    """
    try:
        doc = yaml.load(document, Loader=yaml.BaseLoader)
    except yaml.YAMLError as err:
        raise IndexParseError(f"Unable to decode repository index: {err}") from err
    if doc is None:
        raise IndexParseError("Repository index is empty")
    if not isinstance(doc, dict):
        raise IndexParseError(
            f"Repository index must be a mapping, got {type(doc).__name__}"
        )
    entries = doc.get(ENTRIES)
    if not entries:
        return {}
    if not isinstance(entries, dict):
        raise IndexParseError(
            f"Repository index '{ENTRIES}' must be a mapping, got {type(entries).__name__}"
        )
    return entries


def _chart_versions(name: str, charts: Any) -> list[dict[str, Any]]:
    """Return the well formed version entries of a chart."""
    if charts is None:
        return []
    if not isinstance(charts, list):
        _LOGGER.debug("Skipping chart %s with invalid entries: %s", name, charts)
        return []
    result = []
    for chart in charts:
        if not isinstance(chart, dict) or not isinstance(chart.get("version"), str):
            _LOGGER.debug("Skipping invalid entry for chart %s: %s", name, chart)
            continue
        result.append(chart)
    return result


class HelmIndexParser:
    """Answers name and version queries against a Helm repository index."""

    def find_names(self, document: bytes | str) -> list[str]:
        """Return the names of all charts in the index."""
        entries = _load_entries(document)
        names = []
        for name, charts in entries.items():
            if not isinstance(charts, list):
                _LOGGER.debug("Skipping chart %s with invalid entries", name)
                continue
            names.append(name)
        return names

    def find_versions(self, document: bytes | str, name: str) -> list[str]:
        """Return all versions of the named chart, or empty if not present."""
        entries = _load_entries(document)
        return [chart["version"] for chart in _chart_versions(name, entries.get(name))]

    def find_urls(
        self, document: bytes | str, name: str, version: str | None = None
    ) -> list[str]:
        """Return the download urls for a version of the named chart.

        When no version is requested the first entry in the index is used.
        """
        entries = _load_entries(document)
        charts = _chart_versions(name, entries.get(name))
        if not charts:
            raise ArtifactNotFoundError(f"Chart {name} not found in repository index")
        if version is None:
            chart = charts[0]
        elif not (
            chart := next((c for c in charts if c["version"] == version), None)
        ):
            raise ArtifactNotFoundError(
                f"Version {version} of chart {name} not found in repository index"
            )
        urls = chart.get("urls")
        if not isinstance(urls, list) or not urls:
            raise ArtifactNotFoundError(
                f"Chart {name} version {chart['version']} has no download urls"
            )
        return [url for url in urls if isinstance(url, str)]

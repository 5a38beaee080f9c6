"""The credentials module.

Each credentials object is a configured, named instance of an artifact
source. All of them can stream the bytes of an artifact. Sources that
publish an index (such as Helm chart repositories) also answer name and
version queries, which callers discover with `as_index_source()`.
"""

from .base import ArtifactCredentials, IndexedArtifactCredentials
from .helm import HelmArtifactCredentials, HELM_CHART_TYPE
from .http import HttpArtifactCredentials, HTTP_FILE_TYPE

__all__ = [
    "ArtifactCredentials",
    "IndexedArtifactCredentials",
    "HelmArtifactCredentials",
    "HttpArtifactCredentials",
    "HELM_CHART_TYPE",
    "HTTP_FILE_TYPE",
]

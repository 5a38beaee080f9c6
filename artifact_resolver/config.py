"""Configuration objects for artifact-resolver.

The configuration lists the accounts to materialize as credentials when the
process starts. Each kind of source is enabled separately and artifacts as a
whole may be disabled, in which case no repository is created at all:

```yaml
enabled: true
timeout: 60
helm:
  enabled: true
  accounts:
    - name: stable
      repository: https://charts.example.com
http:
  enabled: true
  accounts:
    - name: public
```
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path

import aiofiles
from mashumaro import DataClassDictMixin
from mashumaro.codecs.yaml import yaml_decode
from mashumaro.config import BaseConfig
from mashumaro.exceptions import MissingField
import yaml

from .auth import load_auth
from .credentials import (
    ArtifactCredentials,
    HelmArtifactCredentials,
    HttpArtifactCredentials,
)
from .downloader import ArtifactDownloader
from .exceptions import InputException
from .repository import CredentialsRepository
from .transport import Transport

__all__ = [
    "ArtifactsConfig",
    "HelmAccount",
    "HttpAccount",
    "read_config",
    "build_repository",
    "build_downloader",
]

_LOGGER = logging.getLogger(__name__)


@dataclass
class BaseAccount(DataClassDictMixin):
    """Settings shared by all accounts."""

    name: str
    """The name used to look up the account."""

    username: str | None = None
    """Username for basic authentication."""

    password: str | None = None
    """Password for basic authentication."""

    username_password_file: str | None = None
    """Path to a file containing `username:password`."""

    class Config(BaseConfig):
        omit_none = True


@dataclass
class HelmAccount(BaseAccount):
    """A Helm chart repository account."""

    repository: str = ""
    """The base url of the chart repository."""


@dataclass
class HttpAccount(BaseAccount):
    """An account for files fetched directly by url."""


@dataclass
class HelmConfig(DataClassDictMixin):
    """Configuration for Helm chart repositories."""

    enabled: bool = False
    accounts: list[HelmAccount] = field(default_factory=list)


@dataclass
class HttpConfig(DataClassDictMixin):
    """Configuration for files fetched by url."""

    enabled: bool = False
    accounts: list[HttpAccount] = field(default_factory=list)


@dataclass
class ArtifactsConfig(DataClassDictMixin):
    """Configuration for all artifact sources."""

    enabled: bool = False
    """Artifact support is disabled for the whole process unless set."""

    timeout: float = 60.0
    """Seconds to wait when connecting or between reads of a remote source."""

    helm: HelmConfig = field(default_factory=HelmConfig)
    http: HttpConfig = field(default_factory=HttpConfig)


def parse_config(content: str) -> ArtifactsConfig:
    """Parse the contents of a configuration file."""
    if not content.strip():
        return ArtifactsConfig()
    try:
        return yaml_decode(content, ArtifactsConfig)
    except (yaml.YAMLError, MissingField, ValueError, TypeError) as err:
        raise InputException(f"Invalid artifacts configuration: {err}") from err


async def read_config(config_path: Path) -> ArtifactsConfig:
    """Return the contents of a configuration file."""
    try:
        async with aiofiles.open(str(config_path)) as config_file:
            content = await config_file.read()
    except OSError as err:
        raise InputException(
            f"Unable to read artifacts configuration {config_path}: {err}"
        ) from err
    return parse_config(content)


def _build_credentials(
    config: ArtifactsConfig, transport: Transport
) -> list[ArtifactCredentials]:
    credentials: list[ArtifactCredentials] = []
    if config.helm.enabled:
        for helm in config.helm.accounts:
            auth = load_auth(helm.username, helm.password, helm.username_password_file)
            credentials.append(
                HelmArtifactCredentials(
                    helm.name, helm.repository, transport, auth=auth
                )
            )
    if config.http.enabled:
        for http in config.http.accounts:
            auth = load_auth(http.username, http.password, http.username_password_file)
            credentials.append(HttpArtifactCredentials(http.name, transport, auth=auth))
    return credentials


def build_repository(
    config: ArtifactsConfig, transport: Transport
) -> CredentialsRepository | None:
    """Create the credentials repository, or None when artifacts are disabled."""
    if not config.enabled:
        _LOGGER.info("Artifacts are not enabled")
        return None
    repository = CredentialsRepository(_build_credentials(config, transport))
    _LOGGER.info("Configured %d artifact accounts", len(repository))
    return repository


def build_downloader(
    repository: CredentialsRepository | None,
) -> ArtifactDownloader | None:
    """Create the downloader, or None when artifacts are disabled."""
    if repository is None:
        return None
    return ArtifactDownloader(repository)

"""Test fixtures for artifact-resolver."""

from collections.abc import AsyncGenerator
import pathlib

import pytest

from artifact_resolver.credentials import HelmArtifactCredentials
from artifact_resolver.transport import SchemeTransport

TESTDATA_DIR = pathlib.Path(__file__).parent / "testdata"
HELM_REPO_DIR = TESTDATA_DIR / "helm-repo"


@pytest.fixture(name="helm_repo_url")
def helm_repo_url_fixture() -> str:
    """Url of the local Helm repository used for tests."""
    return HELM_REPO_DIR.as_uri()


@pytest.fixture(name="transport")
async def transport_fixture() -> AsyncGenerator[SchemeTransport, None]:
    """Create a transport and release its connections after the test."""
    transport = SchemeTransport(timeout=5.0)
    yield transport
    await transport.close()


@pytest.fixture(name="helm_credentials")
def helm_credentials_fixture(
    helm_repo_url: str, transport: SchemeTransport
) -> HelmArtifactCredentials:
    """Credentials for the local Helm repository."""
    return HelmArtifactCredentials("stable", helm_repo_url, transport)


@pytest.fixture(name="config_file")
def config_file_fixture(tmp_path: pathlib.Path, helm_repo_url: str) -> pathlib.Path:
    """Write a configuration file that enables the local Helm repository."""
    config_file = tmp_path / "artifacts.yaml"
    config_file.write_text(
        f"""
enabled: true
timeout: 5
helm:
  enabled: true
  accounts:
    - name: stable
      repository: {helm_repo_url}
http:
  enabled: true
  accounts:
    - name: files
"""
    )
    return config_file

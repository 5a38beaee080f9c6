"""Tests for the artifact http endpoints."""

from collections.abc import AsyncGenerator

import pytest
from aiohttp.test_utils import TestClient, TestServer

from artifact_resolver.controller import ArtifactController, create_app
from artifact_resolver.credentials import (
    HelmArtifactCredentials,
    HttpArtifactCredentials,
)
from artifact_resolver.downloader import ArtifactDownloader
from artifact_resolver.repository import CredentialsRepository
from artifact_resolver.transport import SchemeTransport

from .conftest import HELM_REPO_DIR


async def _client(controller: ArtifactController) -> TestClient:
    client = TestClient(TestServer(create_app(controller)))
    await client.start_server()
    return client


@pytest.fixture(name="client")
async def client_fixture(
    helm_credentials: HelmArtifactCredentials, transport: SchemeTransport
) -> AsyncGenerator[TestClient, None]:
    """Serve the endpoints backed by the local repository."""
    repository = CredentialsRepository(
        [helm_credentials, HttpArtifactCredentials("files", transport)]
    )
    client = await _client(
        ArtifactController(repository, ArtifactDownloader(repository))
    )
    yield client
    await client.close()


@pytest.fixture(name="disabled_client")
async def disabled_client_fixture() -> AsyncGenerator[TestClient, None]:
    """Serve the endpoints with artifacts disabled."""
    client = await _client(ArtifactController(None, None))
    yield client
    await client.close()


async def test_list_credentials(client: TestClient) -> None:
    """Test listing the configured credentials."""
    resp = await client.get("/artifacts/credentials")
    assert resp.status == 200
    assert await resp.json() == [
        {"name": "stable", "types": ["helm/chart"]},
        {"name": "files", "types": ["http/file"]},
    ]


async def test_list_credentials_disabled(disabled_client: TestClient) -> None:
    """Test listing credentials when artifacts are disabled."""
    resp = await disabled_client.get("/artifacts/credentials")
    assert resp.status == 200
    assert await resp.json() == []


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (
            {"type": "helm/chart", "artifactAccount": "stable", "name": "podinfo"},
            b"podinfo 6.5.1 chart archive\n",
        ),
        (
            {
                "type": "helm/chart",
                "artifactAccount": "stable",
                "name": "weave-gitops",
                "version": "4.0.36",
            },
            b"weave-gitops 4.0.36 chart archive\n",
        ),
        (
            {
                "type": "http/file",
                "artifactAccount": "files",
                "reference": (HELM_REPO_DIR / "podinfo-6.5.0.tgz").as_uri(),
            },
            b"podinfo 6.5.0 chart archive\n",
        ),
    ],
)
async def test_fetch(client: TestClient, body: dict[str, str], expected: bytes) -> None:
    """Test streaming the contents of an artifact."""
    resp = await client.put("/artifacts/fetch", json=body)
    assert resp.status == 200
    assert resp.headers["Content-Type"] == "application/octet-stream"
    assert await resp.read() == expected


async def test_fetch_disabled(disabled_client: TestClient) -> None:
    """Test fetching when artifacts are disabled."""
    resp = await disabled_client.put(
        "/artifacts/fetch",
        json={"type": "helm/chart", "artifactAccount": "stable", "name": "podinfo"},
    )
    assert resp.status == 501
    assert "Artifacts have not been enabled" in (await resp.json())["error"]


@pytest.mark.parametrize(
    "data",
    [
        "not json",
        '{"type": "helm/chart"}',
        '["helm/chart"]',
    ],
)
async def test_fetch_invalid_body(client: TestClient, data: str) -> None:
    """Test fetching with a request body that is not a reference."""
    resp = await client.put("/artifacts/fetch", data=data)
    assert resp.status == 400


async def test_fetch_body_not_utf8(client: TestClient) -> None:
    """Test fetching with a request body that cannot be decoded."""
    resp = await client.put(
        "/artifacts/fetch",
        data=b"\xff\xfe{",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status == 400
    assert "Invalid request body" in (await resp.json())["error"]


@pytest.mark.parametrize(
    ("body", "status"),
    [
        ({"type": "helm/chart", "artifactAccount": "other", "name": "podinfo"}, 404),
        ({"type": "git/repo", "artifactAccount": "stable", "name": "podinfo"}, 404),
        ({"type": "helm/chart", "artifactAccount": "stable", "name": "missing"}, 404),
        (
            {
                "type": "helm/chart",
                "artifactAccount": "stable",
                "name": "podinfo",
                "version": "0.0.1",
            },
            404,
        ),
        ({"type": "helm/chart", "artifactAccount": "stable"}, 400),
        (
            {
                "type": "http/file",
                "artifactAccount": "files",
                "reference": "ftp://example.com/chart.tgz",
            },
            502,
        ),
    ],
)
async def test_fetch_failure(
    client: TestClient, body: dict[str, str], status: int
) -> None:
    """Test errors fetching an artifact are reported before any content."""
    resp = await client.put("/artifacts/fetch", json=body)
    assert resp.status == status
    assert "error" in await resp.json()


async def test_names(client: TestClient) -> None:
    """Test listing the names in the index of an account."""
    resp = await client.get("/artifacts/helm/account/stable/names")
    assert resp.status == 200
    assert await resp.json() == ["podinfo", "weave-gitops"]


async def test_versions(client: TestClient) -> None:
    """Test listing the versions of a chart."""
    resp = await client.get("/artifacts/helm/account/stable/names/podinfo/versions")
    assert resp.status == 200
    assert await resp.json() == ["6.5.1", "6.5.0"]

    resp = await client.get("/artifacts/helm/account/stable/names/missing/versions")
    assert resp.status == 200
    assert await resp.json() == []


@pytest.mark.parametrize(
    "path",
    [
        "/artifacts/git/account/stable/names",
        "/artifacts/helm/account/other/names",
        "/artifacts/helm/account/other/names/podinfo/versions",
    ],
)
async def test_resolution_not_found(client: TestClient, path: str) -> None:
    """Test listing from an unknown type or account."""
    resp = await client.get(path)
    assert resp.status == 404
    assert "error" in await resp.json()


async def test_names_disabled(disabled_client: TestClient) -> None:
    """Test listing names when artifacts are disabled."""
    resp = await disabled_client.get("/artifacts/helm/account/stable/names")
    assert resp.status == 501

"""Shared setup for artifact-resolver commands."""

from argparse import ArgumentParser
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
import logging
import pathlib

from artifact_resolver.config import build_downloader, build_repository, read_config
from artifact_resolver.downloader import ArtifactDownloader
from artifact_resolver.repository import CredentialsRepository
from artifact_resolver.resolution import ResolutionService
from artifact_resolver.transport import SchemeTransport

_LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG = "artifacts.yaml"


def add_config_flags(args: ArgumentParser) -> None:
    """Add the flag for the configuration file."""
    args.add_argument(
        "--config",
        "-c",
        help="Path to the artifacts configuration file",
        type=pathlib.Path,
        default=pathlib.Path(DEFAULT_CONFIG),
    )


@dataclass
class Artifacts:
    """The artifact services created from the configuration."""

    repository: CredentialsRepository | None
    downloader: ArtifactDownloader | None
    resolution: ResolutionService


@asynccontextmanager
async def create_artifacts(config: pathlib.Path) -> AsyncGenerator[Artifacts, None]:
    """Create the artifact services, releasing connections on exit."""
    artifacts_config = await read_config(config)
    transport = SchemeTransport(timeout=artifacts_config.timeout)
    try:
        repository = build_repository(artifacts_config, transport)
        yield Artifacts(
            repository=repository,
            downloader=build_downloader(repository),
            resolution=ResolutionService(repository),
        )
    finally:
        await transport.close()

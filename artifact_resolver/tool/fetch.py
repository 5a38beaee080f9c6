"""Artifact-resolver fetch action."""

import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import pathlib
import sys
from typing import cast

import aiofiles

from artifact_resolver.downloader import download
from artifact_resolver.reference import ArtifactReference
from artifact_resolver.transport import ByteStream

from .common import add_config_flags, create_artifacts

_LOGGER = logging.getLogger(__name__)


async def _write_file(stream: ByteStream, output_file: pathlib.Path) -> int:
    size = 0
    async with aiofiles.open(str(output_file), mode="wb") as out:
        async for chunk in stream:
            await out.write(chunk)
            size += len(chunk)
    return size


async def _write_stdout(stream: ByteStream) -> int:
    size = 0
    async for chunk in stream:
        sys.stdout.buffer.write(chunk)
        size += len(chunk)
    sys.stdout.buffer.flush()
    return size


class FetchAction:
    """Artifact-resolver fetch action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "fetch",
                help="Download the contents of an artifact",
                description="Stream the contents of an artifact to a file or stdout",
            ),
        )
        args.add_argument(
            "--type", required=True, help="The artifact type (e.g. helm/chart)"
        )
        args.add_argument(
            "--account", required=True, help="The account used to fetch the artifact"
        )
        args.add_argument("--name", help="The artifact name (e.g. the chart name)")
        args.add_argument("--location", help="The url of the artifact")
        args.add_argument("--version", help="The artifact version, default latest")
        args.add_argument(
            "--output-file",
            type=pathlib.Path,
            default=None,
            help="File to write, or stdout when not set",
        )
        add_config_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        type: str,  # pylint: disable=redefined-builtin
        account: str,
        name: str | None,
        location: str | None,
        version: str | None,
        output_file: pathlib.Path | None,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        reference = ArtifactReference(
            type=type,
            account=account,
            name=name,
            location=location,
            version=version,
        )
        async with create_artifacts(config) as artifacts:
            async with await download(artifacts.downloader, reference) as stream:
                if output_file is None:
                    size = await _write_stdout(stream)
                else:
                    size = await _write_file(stream, output_file)
        _LOGGER.info("Fetched %s (%d bytes)", reference, size)

"""Artifact-resolver serve action."""

import asyncio
import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import pathlib
from typing import cast

from aiohttp import web

from artifact_resolver.controller import ArtifactController, create_app

from .common import add_config_flags, create_artifacts

_LOGGER = logging.getLogger(__name__)


class ServeAction:
    """Artifact-resolver serve action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "serve",
                help="Serve the artifacts http endpoints",
                description="Run an http server for listing, resolving and fetching artifacts",
            ),
        )
        args.add_argument("--host", default="127.0.0.1", help="Address to listen on")
        args.add_argument("--port", type=int, default=7002, help="Port to listen on")
        add_config_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        host: str,
        port: int,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        async with create_artifacts(config) as artifacts:
            controller = ArtifactController(
                artifacts.repository, artifacts.downloader, artifacts.resolution
            )
            runner = web.AppRunner(create_app(controller))
            await runner.setup()
            try:
                site = web.TCPSite(runner, host, port)
                await site.start()
                _LOGGER.info("Serving artifacts on http://%s:%d", host, port)
                await asyncio.Event().wait()
            finally:
                await runner.cleanup()

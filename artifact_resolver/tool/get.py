"""Artifact-resolver get action."""

import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import pathlib
from typing import cast

from artifact_resolver.repository import list_credentials

from .common import add_config_flags, create_artifacts
from .format import OUTPUT_CHOICES, get_formatter

_LOGGER = logging.getLogger(__name__)


def _add_output_flags(args: ArgumentParser) -> None:
    args.add_argument(
        "--output",
        "-o",
        choices=OUTPUT_CHOICES,
        default="table",
        help="Output format of the command",
    )


class GetCredentialsAction:
    """Get the configured credentials."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "credentials",
                aliases=["accounts"],
                help="Get configured artifact credentials",
                description="Print the name and types of each configured account",
            ),
        )
        add_config_flags(args)
        _add_output_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        async with create_artifacts(config) as artifacts:
            results = [
                creds.public_dict() for creds in list_credentials(artifacts.repository)
            ]
        get_formatter(output, ["name", "types"]).print(results)


class GetNamesAction:
    """Get the artifact names published by an account."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "names",
                help="Get artifact names from a repository index",
                description="Print the artifact names listed by the index of an account",
            ),
        )
        args.add_argument("type", help="The kind of repository (e.g. helm)")
        args.add_argument("account", help="The name of the account")
        add_config_flags(args)
        _add_output_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        output: str,
        type: str,  # pylint: disable=redefined-builtin
        account: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        async with create_artifacts(config) as artifacts:
            names = await artifacts.resolution.list_names(type, account)
        get_formatter(output, ["name"]).print([{"name": name} for name in names])


class GetVersionsAction:
    """Get the versions of an artifact published by an account."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "versions",
                help="Get artifact versions from a repository index",
                description="Print the versions of an artifact listed by the index of an account",
            ),
        )
        args.add_argument("type", help="The kind of repository (e.g. helm)")
        args.add_argument("account", help="The name of the account")
        args.add_argument("artifact", help="The name of the artifact")
        add_config_flags(args)
        _add_output_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        output: str,
        type: str,  # pylint: disable=redefined-builtin
        account: str,
        artifact: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        async with create_artifacts(config) as artifacts:
            versions = await artifacts.resolution.list_versions(
                type, account, artifact
            )
        get_formatter(output, ["version"]).print(
            [{"version": version} for version in versions]
        )


class GetAction:
    """Artifact-resolver get action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "get",
                help="Print information about artifact accounts",
                description="Print information about configured artifact accounts",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        GetCredentialsAction.register(subcmds)
        GetNamesAction.register(subcmds)
        GetVersionsAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        # No-op given subcommands are always the dispatch target

"""Command line tool for listing, resolving and fetching artifacts."""

import argparse
import asyncio
import logging
import sys
import traceback

from artifact_resolver.exceptions import ArtifactException
from . import fetch, get, serve

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for resolving and fetching artifacts.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    get.GetAction.register(subparsers)
    fetch.FetchAction.register(subparsers)
    serve.ServeAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Artifact-resolver command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        asyncio.run(action.run(**vars(args)))
    except ArtifactException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("artifact-resolver error: ", err, file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        _LOGGER.info("Interrupted")


if __name__ == "__main__":
    main()

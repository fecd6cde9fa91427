"""
Command line interface for treepull.

    GITHUB_TOKEN=... treepull -owner golang -repo go -branch master -path src/sort -dir out
"""

import argparse
import sys
from typing import Mapping, Optional, Sequence

from ..models import DownloadConfig, RepositoryCoordinate, load_token
from ..infrastructure.error_handler import ConfigurationError, TreepullError
from .api import TreeDownloader


EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treepull",
        description="Download a directory or file of a GitHub repository."
    )
    parser.add_argument("-owner", default="", help="repo owner")
    parser.add_argument("-repo", default="", help="repo name")
    parser.add_argument("-branch", default="master", help="repo branch")
    parser.add_argument("-path", default="", help="repo path(directory/file)")
    parser.add_argument("-dir", default="", help="local directory")
    parser.add_argument(
        "-dry-run", dest="dry_run", action="store_true",
        help="list the files that would be downloaded and exit"
    )
    parser.add_argument(
        "-v", "-verbose", dest="verbose", action="store_true",
        help="enable debug logging"
    )
    return parser


def build_config(
    args: argparse.Namespace,
    environ: Optional[Mapping[str, str]] = None
) -> DownloadConfig:
    """
    Validate the parsed flags and the environment.

    Raises:
        ConfigurationError: If -owner, -repo, -branch or the token is missing
    """
    if not args.owner or not args.repo:
        raise ConfigurationError("-owner and -repo are required")

    try:
        coordinate = RepositoryCoordinate(owner=args.owner, name=args.repo, branch=args.branch)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    return DownloadConfig(
        coordinate=coordinate,
        token=load_token(environ),
        scope=args.path,
        destination=args.dir,
        dry_run=args.dry_run,
        verbose=args.verbose
    )


def main(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.owner or not args.repo:
        parser.print_usage()
        return EXIT_FAILURE

    try:
        config = build_config(args, environ)
    except ConfigurationError as e:
        print(e)
        return EXIT_FAILURE

    try:
        with TreeDownloader(
            config.token, verbose=config.verbose, chunk_size=config.chunk_size
        ) as downloader:
            result = downloader.execute(config)
    except TreepullError as e:
        print(e)
        return EXIT_FAILURE

    if config.dry_run:
        for path in result.matched_files:
            print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())

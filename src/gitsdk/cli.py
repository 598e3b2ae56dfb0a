# src/gitsdk/cli.py

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gitsdk import log_utils
from gitsdk.artifacts import resolve_artifact
from gitsdk.config import Settings, load_settings
from gitsdk.constants import ARCHITECTURE_REPOS, MINIMAL_FLAVOR
from gitsdk.exceptions import GitSdkError


def _add_artifact_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--flavor",
        default=MINIMAL_FLAVOR,
        help="SDK flavor: minimal, full, or any flavor please.sh can package (default: %(default)s)",
    )
    parser.add_argument(
        "--architecture",
        default="x86_64",
        choices=sorted(ARCHITECTURE_REPOS),
        help="Target architecture (default: %(default)s)",
    )
    parser.add_argument(
        "--github-token",
        default=None,
        help="GitHub token for API requests and asset downloads (default: $GITHUB_TOKEN)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-sdk-fetch",
        description="git-sdk-fetch - resolve and download Git for Windows SDK artifacts",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML configuration file")
    parser.add_argument("--log-level", default=None, help="Console log level (e.g. DEBUG)")
    parser.add_argument("--log-dir", default=None, help="Also write a rotating log file here")
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Print the artifact name and id without downloading"
    )
    _add_artifact_arguments(resolve_parser)
    resolve_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )

    download_parser = subparsers.add_parser(
        "download", help="Resolve the artifact and download it"
    )
    _add_artifact_arguments(download_parser)
    download_parser.add_argument(
        "--output",
        "-o",
        required=True,
        help="Directory to materialize the artifact into",
    )
    download_parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Pass verbosity on to git, tar and please.sh",
    )
    return parser


def _run(args: argparse.Namespace, settings: Settings) -> int:
    resolved = resolve_artifact(
        args.flavor, args.architecture, args.github_token, settings=settings
    )

    if args.command == "resolve":
        if args.json:
            print(json.dumps({"artifact_name": resolved.artifact_name, "id": resolved.id}))
        else:
            print(f"artifact_name={resolved.artifact_name}")
            print(f"id={resolved.id}")
        return 0

    log_utils.logger.info(f"Downloading {resolved.artifact_name} ({resolved.id}) to {args.output}")
    resolved.download(args.output, args.verbose)
    log_utils.logger.info(f"{resolved.artifact_name} is ready in {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the git-sdk-fetch command-line interface.

    Returns:
        int: 0 on success, 1 when resolution or download failed. Usage errors
            exit with 2 through argparse.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except GitSdkError as e:
        log_utils.logger.error(str(e))
        return 1

    level = args.log_level or settings.log_level
    if level:
        log_utils.set_log_level(level)
    if args.log_dir:
        log_utils.add_file_logging(
            Path(args.log_dir), level or logging.getLevelName(log_utils.logger.level)
        )

    try:
        return _run(args, settings)
    except (GitSdkError, OSError) as e:
        log_utils.logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())

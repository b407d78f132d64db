"""
Command-line interface for aver.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .checker import CheckOptions, check_action_versions
from .config import Settings
from .discovery import find_action_references
from .errors import AverError
from .github import GitHubClient
from .reporting import print_warnings, render_json, render_text
from .staleness import Strictness


EXIT_UP_TO_DATE = 0
EXIT_OUTDATED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aver",
        description="Check GitHub Actions versions in the current project. "
                    "Exits with status 0 if all actions are up to date, "
                    "1 if some are outdated and 2 on error."
    )

    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory inside the project to check. Default: current directory"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON"
    )

    parser.add_argument(
        "--ignore-sha",
        action="store_true",
        help="Do not resolve commit distance for SHA-pinned actions"
    )

    parser.add_argument(
        "--major-only",
        action="store_true",
        help="Only report newer bare major tags (v5 -> v6), ignoring minor and patch releases"
    )

    parser.add_argument(
        "--token",
        default=None,
        help="GitHub token for higher rate limits. Default: $GITHUB_TOKEN"
    )

    parser.add_argument(
        "--api-url",
        default=None,
        help="GitHub API base URL. Default: $GITHUB_API_URL or https://api.github.com"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"aver version {__version__}"
    )

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Run a check and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not Path(args.path).is_dir():
        parser.error(f"{args.path} is not a directory (use -h for help)")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = Settings.from_env().with_overrides(api_url=args.api_url, token=args.token)
    except ValueError as e:
        parser.error(str(e))

    options = CheckOptions(
        ignore_hash_pins=args.ignore_sha,
        strictness=Strictness.MAJOR_ONLY if args.major_only else Strictness.RESPECT_PRECISION,
        show_progress=not (args.no_progress or args.json) and sys.stderr.isatty(),
    )

    try:
        references = find_action_references(args.path)
        result = check_action_versions(references, GitHubClient(settings), options)
    except AverError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_ERROR

    print_warnings(result.warnings, sys.stderr)

    if args.json:
        print(render_json(result))
    elif not result.up_to_date:
        print(render_text(result))

    return EXIT_UP_TO_DATE if result.up_to_date else EXIT_OUTDATED


def main():
    """Main entry point for the CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()

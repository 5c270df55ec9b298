"""
Command-line interface for the retention enforcer.

Every option defaults to the matching GitHub Actions input
(``INPUT_<NAME>`` environment variable), so the same entry point serves as
the Action's runner and as a standalone tool.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import build_settings, get_input, require_token
from .enforcer import RetentionEnforcer
from .exceptions import RetentionError
from .graphql_client import GraphQLClient
from .reporting import export_outcomes_csv, save_results_json, summarize


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Delete old, rarely downloaded package versions from GitHub Packages"
    )

    parser.add_argument(
        "--owner",
        default=get_input("owner"),
        help="Repository owner. Default: owner from GITHUB_REPOSITORY"
    )

    parser.add_argument(
        "--repo",
        default=get_input("repo"),
        help="Repository name. Default: name from GITHUB_REPOSITORY"
    )

    parser.add_argument(
        "--min-age",
        default=get_input("minAge"),
        help="Minimum age of a version before it is deleted, e.g. 30d, 12h, 2 weeks"
    )

    parser.add_argument(
        "--max-downloads",
        default=get_input("maxDownloads"),
        help="Only delete versions with at most this many downloads. Default: 0"
    )

    parser.add_argument(
        "--package-type",
        default=get_input("packageType") or "docker",
        help="Package type to clean up (npm, maven, rubygems, docker, debian, nuget, pypi). Default: docker"
    )

    parser.add_argument(
        "--token",
        default=get_input("token"),
        help="GitHub token with package delete permissions. Default: INPUT_TOKEN"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=get_input("dryRun").lower() == "true",
        help="Report the versions that would be deleted without deleting them"
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Write the deletion outcomes as CSV and a JSON summary to this directory"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def escape_annotation(message: str) -> str:
    """Escape a message for use as workflow command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def report_failure(message: str) -> None:
    """Report a fatal error, as a workflow error annotation inside Actions."""
    if os.environ.get("GITHUB_ACTIONS") == "true":
        print(f"::error::{escape_annotation(message)}")
    print(f"Error: {message}", file=sys.stderr)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        token = require_token(args.token)
        settings = build_settings(
            owner=args.owner,
            repo=args.repo,
            min_age=args.min_age,
            package_type=args.package_type,
            max_downloads=args.max_downloads,
            dry_run=args.dry_run,
        )

        with GraphQLClient(token) as client:
            reports = RetentionEnforcer(client, settings).run()
    except RetentionError as e:
        report_failure(str(e))
        sys.exit(1)

    summary = summarize(reports, settings)
    logger.info(
        "Deleted %d versions, %d failed",
        summary["num_deleted"],
        summary["num_failed"],
    )

    if args.output_dir:
        output_dir = Path(args.output_dir)
        prefix = f"{settings.owner}_{settings.repo}"
        results_file = save_results_json(summary, output_dir, prefix)
        outcomes_file = export_outcomes_csv(reports, output_dir, prefix)
        logger.info("Results saved to: %s", results_file)
        logger.info("Outcomes saved to: %s", outcomes_file)


if __name__ == "__main__":
    main()

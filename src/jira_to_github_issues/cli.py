"""
Command-line interface for the Jira to GitHub issues migration tool.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from . import github_utils as ghu
from .exceptions import MigrationError
from .gh_client import DryRunClient, GhCliClient
from .migrator import JiraToGithubMigrator
from .utils import setup_logging

if TYPE_CHECKING:
    from collections.abc import Sequence

    from github import Github

    from .protocols import IssueTracker

# Repository shown in dry-run commands when -repo is omitted
_DRY_RUN_REPO = "OWNER/REPO"


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Create GitHub issues from a Jira CSV export using the gh CLI")

    _ = parser.add_argument("-in", "--input", dest="input_path", required=True, help="Jira CSV export to migrate")
    _ = parser.add_argument(
        "-t", "--tmp-dir", dest="tmp_dir", help="Directory for issue body files (default: <system temp>/J2GH)"
    )
    _ = parser.add_argument("-repo", "--repo", dest="repo", help="Target GitHub repository (owner/repo)")

    _ = parser.add_argument(
        "--dry-run", action="store_true", help="Map the export and log the gh commands without running them"
    )
    _ = parser.add_argument(
        "--skip-preflight", action="store_true", help="Do not check the target repository through the GitHub API"
    )
    _ = parser.add_argument(
        "--github-pass-token", dest="github_token_path", help="Path for GitHub token in pass utility"
    )
    _ = parser.add_argument("--gh", dest="gh_executable", default="gh", help="gh executable to run (default: gh)")
    _ = parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args(argv)
    if not args.repo and not args.dry_run:
        parser.error("the following arguments are required: -repo/--repo")
    return args


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)

    verbose: bool = getattr(args, "verbose", False)
    setup_logging(verbose=verbose)
    logger = logging.getLogger(__name__)

    try:
        client: IssueTracker
        github_client: Github | None = None
        if args.dry_run:
            client = DryRunClient(args.gh_executable)
        else:
            client = GhCliClient(args.gh_executable)
            if not args.skip_preflight:
                token = ghu.get_token(args.github_token_path, args.gh_executable)
                if token:
                    github_client = ghu.get_client(token)
                else:
                    # Anonymous API access cannot see private repositories
                    logger.warning("No GitHub token found, skipping pre-flight check of the repository")

        migrator = JiraToGithubMigrator(
            args.input_path,
            args.repo or _DRY_RUN_REPO,
            client=client,
            scratch_dir=args.tmp_dir,
            github_client=github_client,
        )
        _ = migrator.migrate()

    except MigrationError as e:
        logger.error(f"Failed: {e}")  # noqa: TRY400
        sys.exit(1)
    except Exception:
        logger.exception("Migration failed")
        sys.exit(1)

    sys.exit(0)

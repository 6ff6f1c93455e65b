"""Batch driver migrating a Jira CSV export to GitHub issues.

Migration Flow
--------------
1. Ensure the scratch directory exists
2. Read every record from the CSV export
3. Map every record to a GitHub issue (any unmapped value stops here,
   before anything is created)
4. Write the _Issues.txt dump for the operator
5. Optionally verify the target repository through the GitHub API
6. For each issue, in export order:
   a. write the body file and create the issue
   b. write each comment file and add the comment
   c. close the issue if the Jira status was done

Error Handling
--------------
Every error is fatal. Issues created before the failure stay on GitHub;
rerunning the export creates duplicates of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from . import github_utils as ghu
from .csv_reader import read_records
from .debug_dump import write_debug_dump
from .issue_mapper import map_records
from .scratch import FileScratchWriter, ensure_scratch_dir

if TYPE_CHECKING:
    from github import Github

    from .models import MappedIssue
    from .protocols import IssueTracker, ScratchWriter

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class MigrationStats:
    """Statistics collected during migration."""

    records_read: int = 0
    issues_created: int = 0
    comments_created: int = 0
    issues_closed: int = 0
    issue_urls: list[str] = field(default_factory=list)


class JiraToGithubMigrator:
    """Pushes the issues of a Jira CSV export to a GitHub repository.

    Usage:
        migrator = JiraToGithubMigrator("export.csv", "owner/repo", client=GhCliClient())
        stats = migrator.migrate()
    """

    def __init__(
        self,
        input_path: str | Path,
        repo: str,
        *,
        client: IssueTracker,
        scratch_dir: str | Path | None = None,
        writer: ScratchWriter | None = None,
        github_client: Github | None = None,
    ) -> None:
        self.input_path: Path = Path(input_path)
        self.repo: str = repo
        self.client: IssueTracker = client
        self.requested_scratch_dir: Path | None = Path(scratch_dir) if scratch_dir else None
        self.writer: ScratchWriter = writer or FileScratchWriter()
        # Pre-flight checks are skipped when no API client is given
        self.github_client: Github | None = github_client

        logger.info(f"Initialized migrator for {self.input_path} -> {repo}")

    def prepare(self) -> tuple[Path, list[MappedIssue]]:
        """Read and map the whole export without touching GitHub.

        Returns:
            Tuple of (scratch directory, mapped issues in export order)
        """
        scratch_dir = ensure_scratch_dir(self.requested_scratch_dir)
        records = read_records(self.input_path)
        issues = map_records(records, scratch_dir)

        dump_path = write_debug_dump(issues, scratch_dir, self.writer)
        logger.info(f"Wrote issue dump to {dump_path}")
        return scratch_dir, issues

    def push_issue(self, issue: MappedIssue, stats: MigrationStats) -> str:
        """Create one issue with its comments and close it if needed.

        Returns:
            URL of the created issue
        """
        logger.info(f'Pushing "{issue.title}"...')

        self.writer.write(issue.body_file, issue.body)
        issue_url = self.client.create_issue(issue.title, issue.label, issue.body_file, self.repo)
        stats.issues_created += 1
        stats.issue_urls.append(issue_url)

        if issue.comments:
            logger.info(f"Adding {len(issue.comments)} comments...")

        for comment in issue.comments:
            self.writer.write(comment.body_file, comment.body)
            self.client.add_comment(issue_url, comment.body_file)
            stats.comments_created += 1

        if issue.closed:
            logger.info("Closing issue...")
            self.client.close_issue(issue_url)
            stats.issues_closed += 1

        return issue_url

    def migrate(self) -> MigrationStats:
        """Execute the full migration.

        Raises:
            MigrationError: On the first failure; remaining issues are not pushed
        """
        stats = MigrationStats()
        logger.info("Starting Jira to GitHub migration")

        _, issues = self.prepare()
        stats.records_read = len(issues)

        if self.github_client is not None:
            labels = {issue.label for issue in issues}
            ghu.verify_target_repo(self.github_client, self.repo, labels)

        for issue in issues:
            _ = self.push_issue(issue, stats)

        logger.info(
            f"Migration completed: {stats.issues_created} issues created, "
            f"{stats.comments_created} comments added, {stats.issues_closed} issues closed"
        )
        return stats

"""Protocols for the side effects of a migration run.

The batch driver talks to GitHub and to the file system only through these
two seams:

1. IssueTracker: creates issues and comments, closes issues (gh CLI in
   production, a recording double in tests)
2. ScratchWriter: writes the body files that gh reads with --body-file
   (the local disk in production, a dict in tests)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path


class IssueTracker(Protocol):
    """Protocol for creating issues in the target tracker.

    Every method blocks until the underlying call has finished. Failures
    raise a MigrationError subclass; nothing is retried.
    """

    def create_issue(self, title: str, label: str, body_file: Path, repo: str) -> str:
        """Create an issue whose body is read from body_file.

        Args:
            title: Issue title
            label: Single label to apply
            body_file: File holding the issue body
            repo: Target repository (owner/name)

        Returns:
            URL of the created issue, used as handle by the other methods

        Raises:
            ExternalCommandFailedError: If the call fails
            EmptyHandleReturnedError: If the call succeeds without a URL
        """
        ...

    def add_comment(self, issue_url: str, body_file: Path) -> None:
        """Add a comment whose body is read from body_file."""
        ...

    def close_issue(self, issue_url: str) -> None:
        """Close an issue."""
        ...


class ScratchWriter(Protocol):
    """Protocol for writing scratch files."""

    def write(self, path: Path, text: str) -> None:
        """Write text to path, replacing any previous content.

        Raises:
            DirectoryUnavailableError: If the file cannot be written
        """
        ...

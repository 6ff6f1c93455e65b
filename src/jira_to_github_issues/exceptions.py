"""
Custom exception classes for the Jira to GitHub issues migration tool.
"""

from __future__ import annotations


class MigrationError(Exception):
    """Base exception for migration errors."""


class ParseError(MigrationError):
    """Raised when the Jira CSV export cannot be read."""


class UnsupportedIssueTypeError(MigrationError):
    """Raised when a Jira issue type has no GitHub label mapping."""

    def __init__(self, issue_type: str) -> None:
        self.issue_type: str = issue_type
        super().__init__(f"Found an issue type that is not supported: {issue_type}")


class UnsupportedStatusError(MigrationError):
    """Raised when a Jira status maps to neither open nor closed."""

    def __init__(self, status: str) -> None:
        self.status: str = status
        super().__init__(f"Found a status type that is not supported: {status}")


class MalformedCommentError(MigrationError):
    """Raised when a Jira comment is not in 'date; author; text' form."""

    def __init__(self, raw: str) -> None:
        self.raw: str = raw
        super().__init__(f"Improper comment found: {raw}")


class ExternalCommandFailedError(MigrationError):
    """Raised when the GitHub CLI exits with a non-zero status."""

    def __init__(self, returncode: int, stderr: str) -> None:
        self.returncode: int = returncode
        self.stderr: str = stderr
        super().__init__(f"GitHub CLI command failed with exit code {returncode}. Error: {stderr.strip()}")


class EmptyHandleReturnedError(MigrationError):
    """Raised when 'gh issue create' succeeds but prints no issue URL."""


class DirectoryUnavailableError(MigrationError):
    """Raised when the scratch directory cannot be created or written."""


class PreflightError(MigrationError):
    """Raised when the target repository is not ready to receive issues."""


class InvalidIssueKeyError(MigrationError):
    """Raised when a Jira issue key is repeated or cannot name a scratch file."""

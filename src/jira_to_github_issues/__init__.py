"""
Jira to GitHub Issues

Migrates issues exported from Jira as CSV to GitHub, creating issues,
comments and closed states through the gh command-line client.
"""

from __future__ import annotations

from .cli import main
from .exceptions import (
    DirectoryUnavailableError,
    EmptyHandleReturnedError,
    ExternalCommandFailedError,
    InvalidIssueKeyError,
    MalformedCommentError,
    MigrationError,
    ParseError,
    PreflightError,
    UnsupportedIssueTypeError,
    UnsupportedStatusError,
)
from .gh_client import DryRunClient, GhCliClient
from .migrator import JiraToGithubMigrator, MigrationStats
from .utils import setup_logging

# Package version
__version__ = "0.1.0"

__all__ = [
    "DirectoryUnavailableError",
    "DryRunClient",
    "EmptyHandleReturnedError",
    "ExternalCommandFailedError",
    "GhCliClient",
    "InvalidIssueKeyError",
    "JiraToGithubMigrator",
    "MalformedCommentError",
    "MigrationError",
    "MigrationStats",
    "ParseError",
    "PreflightError",
    "UnsupportedIssueTypeError",
    "UnsupportedStatusError",
    "main",
    "setup_logging",
]

"""Map Jira CSV records to GitHub issues.

The issue type and status tables are exhaustive on purpose: a value missing
from them stops the whole run, so the operator extends the table instead of
silently losing issues.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from .exceptions import (
    InvalidIssueKeyError,
    MalformedCommentError,
    UnsupportedIssueTypeError,
    UnsupportedStatusError,
)
from .models import MappedComment, MappedIssue

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from .models import SourceRecord

logger: logging.Logger = logging.getLogger(__name__)

# Jira issue type -> GitHub label
ISSUE_TYPE_LABELS: Final[dict[str, str]] = {
    "Bug": "bug",
    "Task": "enhancement",
    "Improvement": "enhancement",
    "New Feature": "enhancement",
    "Epic": "enhancement",
}

# Jira status -> closed on GitHub
STATUS_CLOSED: Final[dict[str, bool]] = {
    "To Do": False,
    "Done": True,
}

_COMMENT_FIELDS: Final[int] = 3  # date; author; text

# Keys name scratch files, so they must stay inside the scratch directory
_SAFE_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")


def map_label(issue_type: str) -> str:
    """Return the GitHub label for a Jira issue type."""
    try:
        return ISSUE_TYPE_LABELS[issue_type]
    except KeyError:
        raise UnsupportedIssueTypeError(issue_type) from None


def map_closed(status: str) -> bool:
    """Return True if a Jira status means the GitHub issue must be closed."""
    try:
        return STATUS_CLOSED[status]
    except KeyError:
        raise UnsupportedStatusError(status) from None


def build_title(key: str, summary: str) -> str:
    """Build the GitHub issue title, e.g. 'PROJ-5 - Crash on start'.

    Double quotes are replaced with underscores.
    """
    return f"{key} - {summary}".replace('"', "_")


def build_issue_body(record: SourceRecord) -> str:
    """Build the GitHub issue body from a Jira record.

    Some rows carry their description in the Environment column instead of
    Description. Both columns are appended, description first, so neither
    case loses text.
    """
    body = f"Date Filed: {record.created}\n"
    if record.resolution:
        body += f"Resolution: {record.resolution}\n"
    body += "\n"
    body += record.description
    body += record.environment
    return body


def parse_comment(raw: str) -> str:
    """Turn a Jira 'date; author; text' comment into a GitHub comment body.

    Args:
        raw: Comment cell as exported by Jira

    Returns:
        Comment body "Date: {date}\\n\\n{text}". The author is dropped.

    Raises:
        MalformedCommentError: If the comment has fewer than three parts
    """
    parts = [part.strip() for part in raw.split(";", _COMMENT_FIELDS - 1)]
    if len(parts) < _COMMENT_FIELDS:
        raise MalformedCommentError(raw)
    date, _author, text = parts
    return f"Date: {date}\n\n{text}"


def map_record(record: SourceRecord, scratch_dir: Path) -> MappedIssue:
    """Map a single Jira record to a GitHub issue.

    Args:
        record: Record read from the CSV export
        scratch_dir: Directory holding the body files handed to gh

    Returns:
        MappedIssue with its comments, in export order

    Raises:
        UnsupportedIssueTypeError: If the issue type has no label
        UnsupportedStatusError: If the status is neither open nor closed
        MalformedCommentError: If a comment cannot be parsed
        InvalidIssueKeyError: If the key is not a plain Jira key such as PROJ-12
    """
    if not _SAFE_KEY_PATTERN.fullmatch(record.key):
        msg = f"Issue key cannot be used as a file name: {record.key!r}"
        raise InvalidIssueKeyError(msg)

    issue = MappedIssue(
        source_key=record.key,
        title=build_title(record.key, record.summary),
        body=build_issue_body(record),
        label=map_label(record.issue_type),
        closed=map_closed(record.status),
        body_file=scratch_dir / f"{record.key}.txt",
    )

    for raw_comment in record.comments:
        if not raw_comment:
            continue
        comment_idx = len(issue.comments)
        issue.comments.append(
            MappedComment(
                body=parse_comment(raw_comment),
                body_file=scratch_dir / f"{record.key}-comment-{comment_idx}.txt",
            )
        )

    return issue


def map_records(records: Iterable[SourceRecord], scratch_dir: Path) -> list[MappedIssue]:
    """Map all records, stopping at the first one that cannot be mapped.

    Raises:
        InvalidIssueKeyError: If two records share a key, as their scratch files would collide
    """
    issues: list[MappedIssue] = []
    seen_keys: set[str] = set()
    for record in records:
        if record.key in seen_keys:
            msg = f"Duplicate issue key in export: {record.key}"
            raise InvalidIssueKeyError(msg)
        seen_keys.add(record.key)
        issues.append(map_record(record, scratch_dir))
    logger.info(f"Mapped {len(issues)} issues")
    return issues

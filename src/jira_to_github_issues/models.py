"""Data models exchanged between the CSV reader, the mapper and the batch driver.

SourceRecord is what the Jira export says, MappedIssue is what GitHub will
receive. Each MappedIssue is built from exactly one SourceRecord.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class SourceRecord:
    """One issue row from the Jira CSV export."""

    key: str
    summary: str
    issue_type: str
    status: str
    priority: str
    resolution: str
    created: str
    description: str
    environment: str
    comments: tuple[str, ...] = ()  # Raw "date; author; text" cells, column order


@dataclass
class MappedComment:
    """A comment ready to be posted with 'gh issue comment'."""

    body: str
    body_file: Path


@dataclass
class MappedIssue:
    """An issue ready to be created with 'gh issue create'.

    The body and every comment body are written to their scratch files right
    before the matching gh call, because gh reads them with --body-file.
    """

    source_key: str
    title: str
    body: str
    label: str
    closed: bool
    body_file: Path
    comments: list[MappedComment] = field(default_factory=list)

"""Plain-text dump of mapped issues for the operator to review."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from .models import MappedIssue
    from .protocols import ScratchWriter

DEBUG_DUMP_FILENAME: Final[str] = "_Issues.txt"

_ISSUE_SEPARATOR: Final[str] = "-" * 40
_COMMENT_SEPARATOR: Final[str] = "---"


def render_debug_dump(issues: Iterable[MappedIssue]) -> str:
    lines: list[str] = []
    for issue in issues:
        lines.append(_ISSUE_SEPARATOR)
        lines.append(f"Title: {issue.title}")
        lines.append(f"Open: {'No' if issue.closed else 'Yes'}")
        lines.append(f"Label: {issue.label}")
        lines.append(f"Body: {issue.body_file}")
        lines.append(issue.body)
        lines.append("Comments:")
        for comment in issue.comments:
            lines.append(_COMMENT_SEPARATOR)
            lines.append(f"File: {comment.body_file}")
            lines.append(comment.body)
            lines.append(_COMMENT_SEPARATOR)
        lines.append(_ISSUE_SEPARATOR)
    return "".join(f"{line}\n" for line in lines)


def write_debug_dump(issues: Iterable[MappedIssue], scratch_dir: Path, writer: ScratchWriter) -> Path:
    """Write the dump to _Issues.txt in the scratch directory and return its path."""
    dump_path = scratch_dir / DEBUG_DUMP_FILENAME
    writer.write(dump_path, render_debug_dump(issues))
    return dump_path

"""Read issue records from a Jira CSV export."""

from __future__ import annotations

import csv
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .exceptions import ParseError
from .models import SourceRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: logging.Logger = logging.getLogger(__name__)

# Jira column name -> SourceRecord field
REQUIRED_COLUMNS: Final[dict[str, str]] = {
    "Summary": "summary",
    "Issue key": "key",
    "Issue Type": "issue_type",
    "Status": "status",
    "Priority": "priority",
    "Resolution": "resolution",
    "Created": "created",
    "Description": "description",
    "Environment": "environment",
}

# Jira repeats this header once per exported comment
COMMENT_COLUMN: Final[str] = "Comment"


def _lift_field_size_limit() -> None:
    """Allow cells of any size; pasted logs easily exceed the csv module default."""
    limit = sys.maxsize
    while True:
        try:
            _ = csv.field_size_limit(limit)
        except OverflowError:
            # sys.maxsize does not fit in a C long on some platforms
            limit //= 2
        else:
            return


def _resolve_columns(header: Sequence[str]) -> tuple[dict[str, int], list[int]]:
    """Locate the required columns and every Comment column in the header.

    Returns:
        Tuple of (SourceRecord field -> column index, comment column indexes)

    Raises:
        ParseError: If a required column is absent
    """
    positions: dict[str, int] = {}
    comment_indexes: list[int] = []
    for index, raw_name in enumerate(header):
        name = raw_name.strip()
        if name == COMMENT_COLUMN:
            comment_indexes.append(index)
        elif name in REQUIRED_COLUMNS:
            # First occurrence wins, like a lookup by name
            positions.setdefault(REQUIRED_COLUMNS[name], index)

    missing = [column for column, attr in REQUIRED_COLUMNS.items() if attr not in positions]
    if missing:
        msg = f"CSV export is missing required columns: {', '.join(missing)}"
        raise ParseError(msg)
    return positions, comment_indexes


def _build_record(
    row: list[str], positions: dict[str, int], comment_indexes: list[int], line_num: int
) -> SourceRecord:
    needed = max([*positions.values(), *comment_indexes])
    if len(row) <= needed:
        msg = f"Row ending on line {line_num} has {len(row)} fields, expected at least {needed + 1}"
        raise ParseError(msg)

    fields = {attr: row[index] for attr, index in positions.items()}
    comments = tuple(row[index] for index in comment_indexes)
    return SourceRecord(comments=comments, **fields)


def read_records(path: str | Path) -> list[SourceRecord]:
    """Read all issue records from a Jira CSV export, in file order.

    A quoted cell may span several physical lines; it still belongs to the
    record it started in. Values are returned as exported, without
    validation.

    Args:
        path: Path to the CSV file

    Returns:
        List of SourceRecord objects

    Raises:
        ParseError: If the file is unreadable, has no header, lacks a required
            column or contains a truncated row
    """
    csv_path = Path(path)
    records: list[SourceRecord] = []
    _lift_field_size_limit()

    try:
        # utf-8-sig drops the byte-order mark Jira puts in front of the header
        with csv_path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.reader(handle)
            header = next(reader, None)
            if not header:
                msg = f"CSV file has no header row: {csv_path}"
                raise ParseError(msg)

            positions, comment_indexes = _resolve_columns(header)
            logger.debug(f"Found {len(comment_indexes)} comment columns in {csv_path}")

            for row in reader:
                if not any(cell.strip() for cell in row):
                    continue
                records.append(_build_record(row, positions, comment_indexes, reader.line_num))
    except OSError as e:
        msg = f"Cannot read CSV file {csv_path}: {e}"
        raise ParseError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"CSV file must be UTF-8 encoded: {csv_path}"
        raise ParseError(msg) from e
    except csv.Error as e:
        msg = f"CSV file is malformed: {e}"
        raise ParseError(msg) from e

    logger.info(f"Read {len(records)} records from {csv_path}")
    return records

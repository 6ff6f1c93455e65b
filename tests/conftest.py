"""
Pytest configuration and fixtures.

- Integration tests: Fail on any warnings logged by the code under test
- Unit tests: Allow warnings
- Test doubles for the gh client and the scratch file writer
"""

from __future__ import annotations

import csv
import logging
from typing import TYPE_CHECKING

from typing_extensions import override

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Generator, Sequence
    from pathlib import Path

# Store warning records during test execution
_integration_test_warnings: dict[str, list[logging.LogRecord]] = {}

EXPORT_HEADER: list[str] = [
    "Summary",
    "Issue key",
    "Issue Type",
    "Status",
    "Priority",
    "Resolution",
    "Created",
    "Description",
    "Environment",
]


class IntegrationTestWarningHandler(logging.Handler):
    """Custom logging handler to capture warnings during integration tests."""

    test_nodeid: str

    def __init__(self, test_nodeid: str) -> None:
        super().__init__()
        self.test_nodeid = test_nodeid
        self.setLevel(logging.WARNING)

    @override
    def emit(self, record: logging.LogRecord) -> None:
        """Capture WARNING and above level logs."""
        _integration_test_warnings.setdefault(self.test_nodeid, []).append(record)


class RecordingTracker:
    """IssueTracker double that records calls instead of running gh."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []

    def create_issue(self, title: str, label: str, body_file: Path, repo: str) -> str:
        self.calls.append(("create", title, label, str(body_file), repo))
        return f"https://github.com/{repo}/issues/{sum(1 for c in self.calls if c[0] == 'create')}"

    def add_comment(self, issue_url: str, body_file: Path) -> None:
        self.calls.append(("comment", issue_url, str(body_file)))

    def close_issue(self, issue_url: str) -> None:
        self.calls.append(("close", issue_url))

    @property
    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]


class InMemoryScratchWriter:
    """ScratchWriter double keeping file contents in a dict."""

    def __init__(self) -> None:
        self.files: dict[Path, str] = {}

    def write(self, path: Path, text: str) -> None:
        self.files[path] = text


@pytest.fixture
def tracker() -> RecordingTracker:
    return RecordingTracker()


@pytest.fixture
def memory_writer() -> InMemoryScratchWriter:
    return InMemoryScratchWriter()


@pytest.fixture
def write_export(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing a Jira CSV export with the given rows.

    Each row is a dict keyed by column name; missing columns are left empty.
    The header gets one Comment column per entry in the longest comment list.
    """

    def _write(rows: Sequence[dict[str, str]], comments: Sequence[Sequence[str]] | None = None) -> Path:
        comments = comments or [[] for _ in rows]
        comment_columns = max((len(c) for c in comments), default=0)
        path = tmp_path / "export.csv"
        with path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(EXPORT_HEADER + ["Comment"] * comment_columns)
            for row, row_comments in zip(rows, comments, strict=True):
                padded = list(row_comments) + [""] * (comment_columns - len(row_comments))
                writer.writerow([row.get(column, "") for column in EXPORT_HEADER] + padded)
        return path

    return _write


@pytest.fixture(autouse=True)
def fail_on_log_warnings_for_integration_tests(
    request: pytest.FixtureRequest,
) -> Generator[None]:
    """
    Automatically fail integration tests if any WARNING level logs are emitted from the code under test.

    A successful migration run has nothing to warn about, so any logger.warning()
    or logger.error() during an integration test is treated as a failure.
    """
    is_integration_test = request.node.get_closest_marker("integration") is not None

    if not is_integration_test:
        yield
        return

    test_nodeid = request.node.nodeid
    _integration_test_warnings[test_nodeid] = []

    handler = IntegrationTestWarningHandler(test_nodeid)
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)

    try:
        yield
    finally:
        root_logger.removeHandler(handler)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[None]
) -> Generator[None]:  # type: ignore[misc]
    """
    Mark a passed integration test as failed if warnings were logged during it.
    """
    outcome = yield
    report = outcome.get_result()

    if call.when == "call" and report.outcome == "passed":
        test_nodeid = item.nodeid
        warning_records = _integration_test_warnings.get(test_nodeid, [])

        if warning_records:
            warning_messages = [
                f"{record.levelname}: {record.getMessage()} (in {record.name}:{record.lineno})"
                for record in warning_records
            ]

            report.outcome = "failed"
            report.longrepr = f"Integration test failed: {len(warning_records)} warning(s) detected:\n" + "\n".join(
                f"  - {msg}" for msg in warning_messages
            )

        _integration_test_warnings.pop(test_nodeid, None)

"""Tests for the gh CLI client."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from jira_to_github_issues.exceptions import EmptyHandleReturnedError, ExternalCommandFailedError
from jira_to_github_issues.gh_client import DryRunClient, GhCliClient

ISSUE_URL = "https://github.com/owner/repo/issues/12"


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.mark.unit
class TestGhCliClient:
    def test_create_issue_runs_gh_and_returns_url(self) -> None:
        client = GhCliClient()

        with patch("jira_to_github_issues.gh_client.subprocess.run", return_value=_completed(stdout=ISSUE_URL + "\n")) as mock_run:
            url = client.create_issue('PROJ-1 - Say "hi"', "bug", Path("/tmp/PROJ-1.txt"), "owner/repo")

        assert url == ISSUE_URL
        mock_run.assert_called_once_with(
            [
                "gh",
                "issue",
                "create",
                "--title",
                'PROJ-1 - Say "hi"',
                "--label",
                "bug",
                "--body-file",
                "/tmp/PROJ-1.txt",
                "-R",
                "owner/repo",
            ],
            check=False,
            capture_output=True,
            text=True,
        )

    def test_create_issue_empty_output(self) -> None:
        client = GhCliClient()

        with (
            patch("jira_to_github_issues.gh_client.subprocess.run", return_value=_completed(stdout="\n")),
            pytest.raises(EmptyHandleReturnedError, match="Issue URL not returned"),
        ):
            _ = client.create_issue("PROJ-1 - T", "bug", Path("/tmp/PROJ-1.txt"), "owner/repo")

    def test_non_zero_exit(self) -> None:
        client = GhCliClient()

        with (
            patch(
                "jira_to_github_issues.gh_client.subprocess.run",
                return_value=_completed(returncode=1, stderr="could not add label: 'bug' not found\n"),
            ),
            pytest.raises(ExternalCommandFailedError, match="exit code 1") as exc_info,
        ):
            _ = client.create_issue("PROJ-1 - T", "bug", Path("/tmp/PROJ-1.txt"), "owner/repo")

        assert exc_info.value.returncode == 1
        assert "'bug' not found" in exc_info.value.stderr

    def test_add_comment(self) -> None:
        client = GhCliClient()

        with patch("jira_to_github_issues.gh_client.subprocess.run", return_value=_completed(stdout=ISSUE_URL)) as mock_run:
            client.add_comment(ISSUE_URL, Path("/tmp/PROJ-1-comment-0.txt"))

        assert mock_run.call_args.args[0] == ["gh", "issue", "comment", ISSUE_URL, "--body-file", "/tmp/PROJ-1-comment-0.txt"]

    def test_close_issue(self) -> None:
        client = GhCliClient("/usr/local/bin/gh")

        with patch("jira_to_github_issues.gh_client.subprocess.run", return_value=_completed()) as mock_run:
            client.close_issue(ISSUE_URL)

        assert mock_run.call_args.args[0] == ["/usr/local/bin/gh", "issue", "close", ISSUE_URL]

    def test_close_issue_failure(self) -> None:
        client = GhCliClient()

        with (
            patch("jira_to_github_issues.gh_client.subprocess.run", return_value=_completed(returncode=4, stderr="auth")),
            pytest.raises(ExternalCommandFailedError) as exc_info,
        ):
            client.close_issue(ISSUE_URL)

        assert exc_info.value.returncode == 4

    def test_missing_executable(self) -> None:
        client = GhCliClient("does-not-exist")

        with (
            patch(
                "jira_to_github_issues.gh_client.subprocess.run",
                side_effect=FileNotFoundError(2, "No such file or directory", "does-not-exist"),
            ),
            pytest.raises(ExternalCommandFailedError, match="exit code 127"),
        ):
            client.close_issue(ISSUE_URL)


@pytest.mark.unit
class TestDryRunClient:
    def test_records_commands_without_running(self) -> None:
        client = DryRunClient()

        with patch("jira_to_github_issues.gh_client.subprocess.run") as mock_run:
            first = client.create_issue("A", "bug", Path("/tmp/A.txt"), "owner/repo")
            client.add_comment(first, Path("/tmp/A-comment-0.txt"))
            second = client.create_issue("B", "enhancement", Path("/tmp/B.txt"), "owner/repo")
            client.close_issue(second)

        mock_run.assert_not_called()
        assert first == "dry-run://owner/repo/issues/1"
        assert second == "dry-run://owner/repo/issues/2"
        assert [cmd[1:3] for cmd in client.commands] == [
            ["issue", "create"],
            ["issue", "comment"],
            ["issue", "create"],
            ["issue", "close"],
        ]

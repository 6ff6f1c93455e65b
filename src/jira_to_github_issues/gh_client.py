"""GitHub issue operations using the gh CLI."""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import TYPE_CHECKING, Final

from .exceptions import EmptyHandleReturnedError, ExternalCommandFailedError

if TYPE_CHECKING:
    from pathlib import Path

logger: logging.Logger = logging.getLogger(__name__)

# Exit status reported when the gh executable cannot be started
COMMAND_NOT_FOUND_EXIT_CODE: Final[int] = 127


def _issue_create_args(title: str, label: str, body_file: Path, repo: str) -> list[str]:
    return ["issue", "create", "--title", title, "--label", label, "--body-file", str(body_file), "-R", repo]


def _issue_comment_args(issue_url: str, body_file: Path) -> list[str]:
    return ["issue", "comment", issue_url, "--body-file", str(body_file)]


def _issue_close_args(issue_url: str) -> list[str]:
    return ["issue", "close", issue_url]


class GhCliClient:
    """Creates, comments on and closes GitHub issues by running gh.

    gh must be installed and authenticated (gh auth login). Arguments are
    passed without a shell, so titles need no quoting.
    """

    def __init__(self, executable: str = "gh") -> None:
        self.executable: str = executable

    def _run(self, args: list[str]) -> str:
        """Run gh with the given arguments and return its stdout.

        Raises:
            ExternalCommandFailedError: If gh cannot be started or exits non-zero
        """
        cmd = [self.executable, *args]
        logger.debug(f"Running: {shlex.join(cmd)}")

        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                check=False,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ExternalCommandFailedError(COMMAND_NOT_FOUND_EXIT_CODE, str(e)) from e

        if result.returncode != 0:
            logger.error(f"Error executing GitHub CLI command: {result.stderr.strip()}")
            raise ExternalCommandFailedError(result.returncode, result.stderr)

        return result.stdout

    def create_issue(self, title: str, label: str, body_file: Path, repo: str) -> str:
        output = self._run(_issue_create_args(title, label, body_file, repo))
        issue_url = output.strip()
        if not issue_url:
            # gh occasionally exits 0 without having created the issue
            msg = f"Issue URL not returned when creating '{title}'"
            raise EmptyHandleReturnedError(msg)
        logger.debug(f"Created issue {issue_url}")
        return issue_url

    def add_comment(self, issue_url: str, body_file: Path) -> None:
        _ = self._run(_issue_comment_args(issue_url, body_file))

    def close_issue(self, issue_url: str) -> None:
        _ = self._run(_issue_close_args(issue_url))


class DryRunClient:
    """Logs the gh commands a migration would run without running them.

    Returned issue URLs are placeholders numbered in creation order.
    """

    def __init__(self, executable: str = "gh") -> None:
        self.executable: str = executable
        self.commands: list[list[str]] = []
        self._created: int = 0

    def _simulate(self, args: list[str]) -> None:
        cmd = [self.executable, *args]
        self.commands.append(cmd)
        logger.info(f"[dry-run] {shlex.join(cmd)}")

    def create_issue(self, title: str, label: str, body_file: Path, repo: str) -> str:
        self._simulate(_issue_create_args(title, label, body_file, repo))
        self._created += 1
        return f"dry-run://{repo}/issues/{self._created}"

    def add_comment(self, issue_url: str, body_file: Path) -> None:
        self._simulate(_issue_comment_args(issue_url, body_file))

    def close_issue(self, issue_url: str) -> None:
        self._simulate(_issue_close_args(issue_url))

"""Pre-flight checks of the target GitHub repository through the REST API.

gh does the actual issue creation. These checks run first so that a missing
repository or label stops the run before the first issue is created, rather
than half-way through the batch.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import TYPE_CHECKING, Final

from github import Auth, Github, GithubException, UnknownObjectException

from . import utils
from .exceptions import PreflightError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from github.Repository import Repository

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS: Final[tuple[str, ...]] = ("GITHUB_TOKEN", "GH_TOKEN")


def get_token(pass_path: str | None = None, gh_executable: str = "gh") -> str | None:
    """Get GitHub token from pass path, GITHUB_TOKEN, GH_TOKEN, then the gh login."""
    if pass_path:
        try:
            return utils.get_pass_value(pass_path)
        except utils.PassError as e:
            msg = f"Cannot read GitHub token: {e}"
            raise PreflightError(msg) from e

    for env_var in _TOKEN_ENV_VARS:
        token: str | None = os.environ.get(env_var)
        if token:
            return token

    return _get_gh_auth_token(gh_executable)


def _get_gh_auth_token(gh_executable: str) -> str | None:
    """Return the token of the account gh is logged in with, if any."""
    try:
        result = subprocess.run(  # noqa: S603
            [gh_executable, "auth", "token"],
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.debug(f"Cannot run {gh_executable} to read its token: {e}")
        return None

    token = result.stdout.strip()
    if result.returncode != 0 or not token:
        logger.debug(f"gh auth token failed: {result.stderr.strip()}")
        return None
    return token


def get_client(token: str | None = None) -> Github:
    """Get a GitHub client using the token, anonymous if there is none."""
    if token:
        return Github(auth=Auth.Token(token))
    return Github()


def _validate_repo_path(repo_path: str) -> None:
    parts = repo_path.strip().split("/")
    if len(parts) != 2:  # noqa: PLR2004
        msg = f"Invalid GitHub repository path '{repo_path}'. Expected format: 'owner/repository'"
        raise PreflightError(msg)
    if not all(parts):
        msg = f"Invalid GitHub repository path '{repo_path}'. Both owner and repository name must be non-empty"
        raise PreflightError(msg)


def get_repo(client: Github, repo_path: str) -> Repository:
    """Fetch the repository, raising PreflightError if it is not reachable."""
    _validate_repo_path(repo_path)
    try:
        return client.get_repo(repo_path)
    except UnknownObjectException as e:
        msg = f"Repository {repo_path} not found or not accessible"
        raise PreflightError(msg) from e
    except GithubException as e:
        msg = f"Error checking repository existence: {e}"
        raise PreflightError(msg) from e


def verify_target_repo(client: Github, repo_path: str, labels: Iterable[str]) -> None:
    """Check that repo_path exists, accepts issues and has every label.

    Label names are matched case-insensitively, as GitHub does.

    Raises:
        PreflightError: If the repository cannot receive the issues
    """
    repo = get_repo(client, repo_path)

    if not repo.has_issues:
        msg = f"Issues are disabled on {repo_path}"
        raise PreflightError(msg)

    try:
        existing = {label.name.lower() for label in repo.get_labels()}
    except GithubException as e:
        msg = f"Failed to list labels of {repo_path}: {e}"
        raise PreflightError(msg) from e

    missing = sorted({label for label in labels if label.lower() not in existing})
    if missing:
        msg = f"Labels missing from {repo_path}: {', '.join(missing)}"
        raise PreflightError(msg)

    logger.info(f"Repository {repo_path} is ready for migration")

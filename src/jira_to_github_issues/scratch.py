"""Scratch directory holding the body files handed to gh."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Final

from .exceptions import DirectoryUnavailableError

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_SCRATCH_DIR_NAME: Final[str] = "J2GH"


def ensure_scratch_dir(path: str | Path | None = None) -> Path:
    """Create the scratch directory if needed and return it.

    Args:
        path: Directory to use; defaults to J2GH under the platform temp dir

    Raises:
        DirectoryUnavailableError: If the directory cannot be created
    """
    scratch_dir = Path(path) if path else Path(tempfile.gettempdir()) / DEFAULT_SCRATCH_DIR_NAME

    try:
        scratch_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Temporary directory not available: {scratch_dir} ({e})"
        raise DirectoryUnavailableError(msg) from e

    if not scratch_dir.is_dir():
        msg = f"Temporary directory not available: {scratch_dir}"
        raise DirectoryUnavailableError(msg)

    logger.debug(f"Using scratch directory {scratch_dir}")
    return scratch_dir


class FileScratchWriter:
    """Writes scratch files to the local file system as UTF-8."""

    def write(self, path: Path, text: str) -> None:
        try:
            _ = path.write_text(text, encoding="utf-8")
        except OSError as e:
            msg = f"Failed to write scratch file {path}: {e}"
            raise DirectoryUnavailableError(msg) from e

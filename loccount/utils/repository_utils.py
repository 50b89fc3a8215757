"""
Repository Utility Functions

Directory traversal helpers used by the line counter.
"""

from __future__ import annotations

import os
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Set

# =============================================================================
# Logging
# =============================================================================

LOGGER_NAME = "loccount.utils"
logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.INFO)


# =============================================================================
# Directory walking utilities
# =============================================================================

DEFAULT_EXCLUDED_DIRS: Set[str] = {
    ".git",
    ".hg",
    ".svn",
    "__pycache__",
    "node_modules",
    ".venv",
    "venv",
    "dist",
    "build",
    ".idea",
    ".vscode",
}


def should_exclude_directory(
    dir_name: str,
    extra_excludes: Optional[Iterable[str]] = None,
) -> bool:
    """
    Determine whether a directory should be excluded during traversal.
    """
    excludes = set(DEFAULT_EXCLUDED_DIRS)
    if extra_excludes:
        excludes.update(extra_excludes)
    return dir_name in excludes


def walk_repository_tree(
    root: Path,
    *,
    exclude_dirs: Optional[Iterable[str]] = None,
) -> Iterator[Path]:
    """
    Recursively walk a directory tree, yielding regular files.

    Directories and files are visited in sorted order so repeated walks
    produce the same sequence.

    Args:
        root: Root directory to walk
        exclude_dirs: Additional directory names to exclude
    """
    excludes = set(exclude_dirs or ())

    def on_error(exc: OSError) -> None:
        logger.warning("Cannot walk %s: %s", exc.filename, exc)

    for current_root, dirs, files in os.walk(root, onerror=on_error):
        root_path = Path(current_root)

        # Modify dirs in-place to control recursion
        dirs[:] = sorted(
            d for d in dirs
            if not should_exclude_directory(d, excludes)
        )

        for f in sorted(files):
            path = root_path / f
            if path.is_file():
                yield path

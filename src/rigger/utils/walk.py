"""
Recursive file discovery.

Used to find compose templates and values files under a directory tree.
Results are sorted so callers see a stable order regardless of the
filesystem's directory listing order.
"""

from __future__ import annotations

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

_logger = _logging.getLogger(__name__)


def find_files(
    root: str | _pathlib.Path,
    predicate: _typing.Callable[[_pathlib.Path], bool],
) -> list[str]:
    """
    Recursively find files under `root` matching `predicate`.

    Directories that cannot be listed are skipped. Symlinked directories
    are not followed.

    Args:
        root: Directory to search.
        predicate: Called with each file's path; True to include it.

    Returns:
        Sorted list of matching file paths (as strings, prefixed by `root`).
    """

    def _on_error(error: OSError) -> None:
        _logger.debug("Skipping unreadable directory %s: %s", error.filename, error)

    matches: list[str] = []
    for dirpath, _dirnames, filenames in _os.walk(root, onerror=_on_error):
        for filename in filenames:
            path = _pathlib.Path(dirpath) / filename
            if path.is_file() and predicate(path):
                matches.append(str(path))
    return sorted(matches)


def get_files_with_extension(root: str | _pathlib.Path, extension: str) -> list[str]:
    """
    Find files with the given extension (without the leading dot, e.g. "yaml").
    """
    suffix = "." + extension.lstrip(".")
    return find_files(root, lambda path: path.suffix == suffix)


def get_files_with_name(root: str | _pathlib.Path, name: str) -> list[str]:
    """Find files whose name is exactly `name`."""
    return find_files(root, lambda path: path.name == name)

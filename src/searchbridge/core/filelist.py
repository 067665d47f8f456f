"""File discovery and the temporary file list handed to index jobs."""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
import uuid
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


def expand_files(folder: str | Path, extensions: Iterable[str]) -> list[str]:
    """Recursively collect files under ``folder`` with one of ``extensions``.

    Files are grouped by extension in the order given; inside a group the
    walk order is sorted so repeated runs produce the same list. Paths are
    absolute. Unreadable directories are skipped.
    """
    buckets: dict[str, list[str]] = {ext.lower(): [] for ext in extensions}
    for dirpath, dirnames, filenames in os.walk(folder):
        dirnames.sort()
        for filename in sorted(filenames):
            suffix = os.path.splitext(filename)[1].lower()
            if suffix in buckets:
                buckets[suffix].append(os.path.abspath(os.path.join(dirpath, filename)))
    return [path for bucket in buckets.values() for path in bucket]


def is_listable(path: str) -> bool:
    """True if ``path`` fits on one line of a file list."""
    return "\n" not in path and "\r" not in path


def collect_files(folders: Iterable[str], extensions: Iterable[str]) -> list[str]:
    """Expand every existing folder and de-duplicate, keeping first occurrence.

    Blank entries and folders that do not exist are skipped silently. Files
    whose path contains a line break cannot be written to a file list and
    are skipped with a warning.
    """
    exts = list(extensions)
    found: dict[str, None] = {}
    for folder in folders:
        if not folder or not folder.strip():
            continue
        if not os.path.isdir(folder):
            logger.debug("Skipping missing folder: %s", folder)
            continue
        for path in expand_files(folder, exts):
            if not is_listable(path):
                logger.warning("Skipping file with a line break in its path: %r", path)
                continue
            found.setdefault(path, None)
    return list(found)


def new_list_path(directory: str | None = None, prefix: str = "sb_add_") -> str:
    """Return a fresh, unused ``.lst`` path in ``directory`` (system temp dir when None)."""
    target_dir = directory or tempfile.gettempdir()
    return os.path.join(target_dir, f"{prefix}{uuid.uuid4().hex}.lst")


def _write_lines(list_path: str, files: Iterable[str]) -> None:
    # surrogateescape round-trips file names that are not valid UTF-8
    with open(list_path, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
        for path in files:
            if not is_listable(path):
                raise ValueError(f"Path contains a line break: {path!r}")
            f.write(f"{path}\n")


def write_file_list(files: Iterable[str], directory: str | None = None, prefix: str = "sb_add_") -> str:
    """Write one path per line to a new uniquely named ``.lst`` file.

    A partially written list is removed before the error propagates.

    Returns:
        Path of the written list.

    Raises:
        ValueError: A path contains a line break.
    """
    list_path = new_list_path(directory, prefix)
    try:
        _write_lines(list_path, files)
    except BaseException:
        remove_quietly(list_path)
        raise
    return list_path


def read_file_list(list_path: str) -> list[str]:
    with open(list_path, encoding="utf-8", errors="surrogateescape", newline="\n") as f:
        return [line.rstrip("\n") for line in f if line.strip()]


def remove_quietly(path: str) -> None:
    with contextlib.suppress(OSError):
        if os.path.exists(path):
            os.remove(path)


@contextlib.contextmanager
def temp_file_list(files: Iterable[str], directory: str | None = None, prefix: str = "sb_add_") -> Iterator[str]:
    """Write a file list and delete it on every exit path, including a failed write.

    Deletion errors are ignored.
    """
    list_path = new_list_path(directory, prefix)
    try:
        _write_lines(list_path, files)
        yield list_path
    finally:
        remove_quietly(list_path)


def index_looks_valid(index_path: str, marker_extension: str = ".ix") -> bool:
    """True if ``index_path`` is a directory holding at least one marker file."""
    try:
        directory = Path(index_path)
        if not directory.is_dir():
            return False
        marker = marker_extension.lower()
        return any(p.is_file() and p.suffix.lower() == marker for p in directory.iterdir())
    except OSError:
        return False


def ensure_parent_directory(index_path: str) -> None:
    """Create the parent directory of ``index_path`` if it is missing."""
    parent = os.path.dirname(index_path.rstrip("/\\"))
    if parent and not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)

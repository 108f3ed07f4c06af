"""
Physical File Provider

Serves files from a directory on disk. Missing entries, paths escaping the
root and hidden (dot-prefixed) entries resolve to NotFoundFileInfo.
"""

import fnmatch
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from discussion_web.common.time import from_timestamp
from discussion_web.fileproviders.base import (
    ChangeToken,
    DirectoryContents,
    FileInfo,
    FileProvider,
    NotFoundDirectoryContents,
    NotFoundFileInfo,
    NullChangeToken,
)

logger = logging.getLogger(__name__)

# Buffer size must be greater than zero, even if the file size is zero.
READ_BUFFER_SIZE = 64 * 1024

# Closest POSIX equivalent of opening a file for asynchronous I/O
ASYNC_OPEN_FLAGS = getattr(os, "O_NONBLOCK", 0)
BINARY_OPEN_FLAGS = getattr(os, "O_BINARY", 0)


def advise_sequential(fd: int) -> None:
    """Hint the kernel that the file will be read front to back."""
    fadvise = getattr(os, "posix_fadvise", None)
    if fadvise is None:
        return
    try:
        fadvise(fd, 0, 0, os.POSIX_FADV_SEQUENTIAL)
    except OSError as e:
        logger.debug(f"posix_fadvise not supported for fd {fd}: {e}")


def open_read_stream(path: str, flags: int = 0) -> BinaryIO:
    """
    Open a buffered, sequential-scan read stream

    Args:
        path: Physical file path
        flags: Extra os.open flags on top of read-only

    Returns:
        BinaryIO: Buffered binary stream
    """
    fd = os.open(path, os.O_RDONLY | BINARY_OPEN_FLAGS | flags)
    try:
        advise_sequential(fd)
        return os.fdopen(fd, "rb", buffering=READ_BUFFER_SIZE)
    except Exception:
        os.close(fd)
        raise


class PhysicalFileInfo(FileInfo):
    """Metadata of a regular file on disk."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._stat: Optional[os.stat_result] = None

    def _get_stat(self) -> Optional[os.stat_result]:
        if self._stat is None:
            try:
                self._stat = self._path.stat()
            except OSError:
                return None
        return self._stat

    @property
    def exists(self) -> bool:
        return self._get_stat() is not None

    @property
    def is_directory(self) -> bool:
        return False

    @property
    def last_modified(self) -> Optional[datetime]:
        stat = self._get_stat()
        return from_timestamp(stat.st_mtime) if stat else None

    @property
    def length(self) -> int:
        stat = self._get_stat()
        return stat.st_size if stat else -1

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def physical_path(self) -> Optional[str]:
        return str(self._path)

    def create_read_stream(self) -> BinaryIO:
        return open_read_stream(self.physical_path, ASYNC_OPEN_FLAGS)


class PhysicalDirectoryInfo(FileInfo):
    """Metadata of a directory on disk."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def exists(self) -> bool:
        return self._path.is_dir()

    @property
    def is_directory(self) -> bool:
        return True

    @property
    def last_modified(self) -> Optional[datetime]:
        try:
            return from_timestamp(self._path.stat().st_mtime)
        except OSError:
            return None

    @property
    def length(self) -> int:
        return -1

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def physical_path(self) -> Optional[str]:
        return str(self._path)

    def create_read_stream(self) -> BinaryIO:
        raise IsADirectoryError(f"Cannot create a stream for a directory: {self._path}")


class PhysicalDirectoryContents(DirectoryContents):
    def __init__(self, path: Path):
        self._path = path

    @property
    def exists(self) -> bool:
        return self._path.is_dir()

    def __iter__(self) -> Iterator[FileInfo]:
        try:
            entries = sorted(self._path.iterdir())
        except OSError:
            return
        for entry in entries:
            if _is_excluded(entry.name):
                continue
            if entry.is_dir():
                yield PhysicalDirectoryInfo(entry)
            elif entry.is_file():
                yield PhysicalFileInfo(entry)


class PollingChangeToken(ChangeToken):
    """
    Change token that compares snapshots of matching files

    A snapshot (path -> mtime, size) is taken on creation; has_changed stays
    True once a difference has been observed.
    """

    def __init__(self, root: Path, pattern: str):
        self._root = root
        self._pattern = pattern
        self._snapshot = self._take_snapshot()
        self._changed = False

    def _take_snapshot(self) -> dict[str, tuple[float, int]]:
        snapshot: dict[str, tuple[float, int]] = {}
        for dirpath, dirnames, filenames in os.walk(self._root):
            dirnames[:] = [d for d in dirnames if not _is_excluded(d)]
            for filename in filenames:
                if _is_excluded(filename):
                    continue
                full_path = Path(dirpath) / filename
                relative = full_path.relative_to(self._root).as_posix()
                if not _matches(relative, self._pattern):
                    continue
                try:
                    stat = full_path.stat()
                except OSError:
                    continue
                snapshot[relative] = (stat.st_mtime, stat.st_size)
        return snapshot

    @property
    def has_changed(self) -> bool:
        if not self._changed:
            self._changed = self._take_snapshot() != self._snapshot
        return self._changed


def _is_excluded(name: str) -> bool:
    return name.startswith(".")


def _matches(relative: str, pattern: str) -> bool:
    if fnmatch.fnmatchcase(relative, pattern):
        return True
    # "**/" also matches files directly in the root
    if pattern.startswith("**/"):
        return fnmatch.fnmatchcase(relative, pattern[3:])
    return False


class PhysicalFileProvider(FileProvider):
    """
    Physical File Provider

    Args:
        root: Directory all sub-paths are resolved against
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()

    def _resolve(self, subpath: str) -> Optional[Path]:
        relative = subpath.replace("\\", "/").lstrip("/")
        parts = [part for part in relative.split("/") if part]
        if any(part == ".." or _is_excluded(part) or "\x00" in part for part in parts):
            return None
        try:
            full_path = self.root.joinpath(*parts).resolve()
        except (OSError, ValueError):
            return None
        if full_path != self.root and self.root not in full_path.parents:
            return None
        return full_path

    def get_file_info(self, subpath: str) -> FileInfo:
        name = subpath.rstrip("/").rsplit("/", 1)[-1]
        full_path = self._resolve(subpath)
        if full_path is None:
            return NotFoundFileInfo(name)
        if full_path.is_dir():
            return PhysicalDirectoryInfo(full_path)
        if not full_path.is_file():
            return NotFoundFileInfo(name)
        return PhysicalFileInfo(full_path)

    def get_directory_contents(self, subpath: str) -> DirectoryContents:
        full_path = self._resolve(subpath)
        if full_path is None or not full_path.is_dir():
            return NotFoundDirectoryContents()
        return PhysicalDirectoryContents(full_path)

    def watch(self, filter: str) -> ChangeToken:
        pattern = filter.replace("\\", "/").lstrip("/")
        if not pattern or ".." in pattern.split("/"):
            return NullChangeToken()
        return PollingChangeToken(self.root, pattern)

    def __repr__(self) -> str:
        return f"PhysicalFileProvider(root={str(self.root)!r})"

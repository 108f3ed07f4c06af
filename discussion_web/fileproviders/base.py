"""
File Provider Interfaces

A file provider resolves sub-paths below a root to file metadata, lists
directories and watches for changes. Static file serving only talks to these
interfaces, so the read strategy can be swapped once at startup.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, Iterator, Optional


class FileInfo(ABC):
    """File (or directory) metadata plus a way to read its content."""

    @property
    @abstractmethod
    def exists(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_directory(self) -> bool:
        pass

    @property
    @abstractmethod
    def last_modified(self) -> Optional[datetime]:
        pass

    @property
    @abstractmethod
    def length(self) -> int:
        """Size in bytes, -1 for directories and missing files."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def physical_path(self) -> Optional[str]:
        """Filesystem path, or None when the file is not backed by one."""
        pass

    @abstractmethod
    def create_read_stream(self) -> BinaryIO:
        """
        Open the file for reading

        Caller owns the returned stream and must close it.
        """
        pass


class DirectoryContents(ABC):
    """Listing of a directory."""

    @property
    @abstractmethod
    def exists(self) -> bool:
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[FileInfo]:
        pass


class ChangeToken(ABC):
    """Signals that watched files changed."""

    @property
    @abstractmethod
    def has_changed(self) -> bool:
        pass


class FileProvider(ABC):
    """File Provider Interface"""

    @abstractmethod
    def get_file_info(self, subpath: str) -> FileInfo:
        """Resolve metadata for a sub-path; never raises for missing files."""
        pass

    @abstractmethod
    def get_directory_contents(self, subpath: str) -> DirectoryContents:
        pass

    @abstractmethod
    def watch(self, filter: str) -> ChangeToken:
        """
        Watch files matching a glob filter (e.g. "**/*.css")

        Returns:
            ChangeToken: Token whose has_changed flips once a match changes
        """
        pass


class NotFoundFileInfo(FileInfo):
    """Metadata for a file that does not exist."""

    def __init__(self, name: str):
        self._name = name

    @property
    def exists(self) -> bool:
        return False

    @property
    def is_directory(self) -> bool:
        return False

    @property
    def last_modified(self) -> Optional[datetime]:
        return None

    @property
    def length(self) -> int:
        return -1

    @property
    def name(self) -> str:
        return self._name

    @property
    def physical_path(self) -> Optional[str]:
        return None

    def create_read_stream(self) -> BinaryIO:
        raise FileNotFoundError(f"The file {self._name} does not exist.")


class NotFoundDirectoryContents(DirectoryContents):
    @property
    def exists(self) -> bool:
        return False

    def __iter__(self) -> Iterator[FileInfo]:
        return iter(())


class NullChangeToken(ChangeToken):
    """Token that never changes (invalid or unsupported filters)."""

    @property
    def has_changed(self) -> bool:
        return False

"""
Synchronous File Provider

Wraps another provider so that physical files are read with plain blocking
I/O. Installed only on the runtime whose asynchronous file streams corrupt or
hang reads; everything except opening a physical file is delegated untouched.
"""

from datetime import datetime
from typing import BinaryIO, Optional

from discussion_web.fileproviders.base import ChangeToken, DirectoryContents, FileInfo, FileProvider
from discussion_web.fileproviders.physical import open_read_stream


def is_physical_file(file_info: FileInfo) -> bool:
    """A file backed by a filesystem path (directories excluded)."""
    return bool(file_info.physical_path) and not file_info.is_directory


class SynchronousFileInfo(FileInfo):
    """
    Physical file whose read stream is opened without the async flag

    Metadata is forwarded verbatim to the wrapped FileInfo.
    """

    def __init__(self, original: FileInfo):
        self.original = original

    @property
    def exists(self) -> bool:
        return self.original.exists

    @property
    def is_directory(self) -> bool:
        return self.original.is_directory

    @property
    def last_modified(self) -> Optional[datetime]:
        return self.original.last_modified

    @property
    def length(self) -> int:
        return self.original.length

    @property
    def name(self) -> str:
        return self.original.name

    @property
    def physical_path(self) -> Optional[str]:
        return self.original.physical_path

    def create_read_stream(self) -> BinaryIO:
        return open_read_stream(self.physical_path)


class SynchronousFileProvider(FileProvider):
    """
    Synchronous File Provider

    Args:
        original: Provider to delegate to
    """

    def __init__(self, original: FileProvider):
        self.original = original

    def get_directory_contents(self, subpath: str) -> DirectoryContents:
        return self.original.get_directory_contents(subpath)

    def get_file_info(self, subpath: str) -> FileInfo:
        file_info = self.original.get_file_info(subpath)
        if not is_physical_file(file_info):
            return file_info
        return SynchronousFileInfo(file_info)

    def watch(self, filter: str) -> ChangeToken:
        return self.original.watch(filter)

    def __repr__(self) -> str:
        return f"SynchronousFileProvider({self.original!r})"

"""
File Provider Module Initialization
"""

import logging

from discussion_web.fileproviders.base import (
    ChangeToken,
    DirectoryContents,
    FileInfo,
    FileProvider,
    NotFoundFileInfo,
)
from discussion_web.fileproviders.physical import PhysicalFileInfo, PhysicalFileProvider
from discussion_web.fileproviders.synchronous import SynchronousFileInfo, SynchronousFileProvider
from discussion_web.hosting import is_runtime

logger = logging.getLogger(__name__)


def create_file_provider(root, sync_runtime: str, runtime: str | None = None) -> FileProvider:
    """
    Choose the static file provider for this process

    Args:
        root: Directory to serve
        sync_runtime: Runtime that needs synchronous file reads
        runtime: Detected runtime (detected here when None)

    Returns:
        FileProvider: PhysicalFileProvider, wrapped in SynchronousFileProvider on the affected runtime
    """
    provider: FileProvider = PhysicalFileProvider(root)
    if is_runtime(sync_runtime, runtime):
        logger.info(
            f"Replaced default file provider with a synchronous one, "
            f"since asynchronous file streams are unreliable on {sync_runtime}"
        )
        provider = SynchronousFileProvider(provider)
    return provider


__all__ = [
    "ChangeToken",
    "DirectoryContents",
    "FileInfo",
    "FileProvider",
    "NotFoundFileInfo",
    "PhysicalFileInfo",
    "PhysicalFileProvider",
    "SynchronousFileInfo",
    "SynchronousFileProvider",
    "create_file_provider",
]

"""
Static File Middleware Module

Serves files from the configured FileProvider ahead of the router. Requests
that do not resolve to an existing file with a known content type fall
through to the next handler.
"""

import logging
import mimetypes
from typing import Callable, Iterator, Optional

from fastapi import Request, Response
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from discussion_web.common.time import http_date
from discussion_web.fileproviders.base import FileInfo, FileProvider
from discussion_web.fileproviders.physical import READ_BUFFER_SIZE

logger = logging.getLogger(__name__)

SERVED_METHODS = ("GET", "HEAD")


def _iter_file(file_info: FileInfo, chunk_size: int = READ_BUFFER_SIZE) -> Iterator[bytes]:
    """Open the file on first iteration and yield chunks until EOF."""
    stream = file_info.create_read_stream()
    try:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            yield chunk
    finally:
        stream.close()


def get_content_type(name: str) -> str | None:
    """Guess the content type from the file name; None for unknown types."""
    content_type, _ = mimetypes.guess_type(name)
    return content_type


class StaticFileMiddleware(BaseHTTPMiddleware):
    """
    Static File Middleware

    Args:
        app: Next ASGI application
        file_provider: Provider resolving request paths to files
    """

    def __init__(self, app: ASGIApp, file_provider: FileProvider) -> None:
        super().__init__(app)
        self.file_provider = file_provider
        logger.info(f"Static file middleware initialized: provider={file_provider!r}")

    def _build_headers(self, file_info: FileInfo, content_type: str) -> dict[str, str]:
        headers = {
            "content-type": content_type,
            "content-length": str(file_info.length),
            "accept-ranges": "none",
        }
        if file_info.last_modified is not None:
            headers["last-modified"] = http_date(file_info.last_modified)
        return headers

    def _lookup(self, path: str) -> Optional[tuple[FileInfo, dict[str, str]]]:
        """Resolve a servable file and its response headers; None when the router should handle it."""
        file_info = self.file_provider.get_file_info(path)
        if not file_info.exists or file_info.is_directory:
            return None

        content_type = get_content_type(file_info.name)
        if content_type is None:
            logger.debug(f"Unknown content type, not served: {path}")
            return None

        return file_info, self._build_headers(file_info, content_type)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Serve the file when one matches, otherwise pass the request on."""
        if request.method not in SERVED_METHODS:
            return await call_next(request)

        # Lookup stats the file system, keep it off the event loop
        found = await run_in_threadpool(self._lookup, request.url.path)
        if found is None:
            return await call_next(request)

        file_info, headers = found
        if request.method == "HEAD":
            return Response(status_code=200, headers=headers)

        return StreamingResponse(_iter_file(file_info), status_code=200, headers=headers)
